"""
Configuration errors raised while compiling scripts into a plan.

Every error identifies the offending script id or plugin module path and
carries a machine-readable code so callers can handle them programmatically.
Compilation stops at the first error; no partial plan is ever returned.

Error Codes:
    E101_UNKNOWN_SCRIPT_TYPE: Script key prefix is not a known script type
    E102_MALFORMED_COMMAND: mount/proxy command does not follow its format
    E103_DUPLICATE_BUILD_EXTENSION: Two build scripts claim the same extension
    E104_MULTIPLE_BUNDLE_SCRIPTS: More than one bundle script declared
    E105_MISSING_BUNDLE_SCRIPT: Bundling requested but no bundle script exists
    E201_INVALID_PLUGIN_CAPABILITIES: Plugin exposes more than one capability
    E202_PLUGIN_MISSING_CAPABILITY: Plugin lacks the capability a script needs
    E203_UNREGISTERED_PLUGIN: Script references a plugin that was not registered
    E204_UNBOUND_PLUGIN_REFERENCE: Script references a plugin it cannot bind
"""

from typing import Any, Dict, Optional


class ScriptConfigError(Exception):
    """Base class for script/plugin configuration errors.

    Attributes
    ----------
    message : str
        Human-readable error description
    script_id : str, optional
        Raw key of the offending script
    plugin : str, optional
        Module reference of the offending plugin
    suggestion : str
        Actionable suggestion for fixing the configuration
    """

    error_code = "E100_SCRIPT_CONFIG"

    def __init__(
        self,
        message: str,
        *,
        script_id: Optional[str] = None,
        plugin: Optional[str] = None,
        suggestion: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.script_id = script_id
        self.plugin = plugin
        self.suggestion = suggestion

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "script_id": self.script_id,
            "plugin": self.plugin,
            "suggestion": self.suggestion,
        }


class UnknownScriptType(ScriptConfigError):
    error_code = "E101_UNKNOWN_SCRIPT_TYPE"


class MalformedScriptCommand(ScriptConfigError):
    error_code = "E102_MALFORMED_COMMAND"


class DuplicateBuildExtension(ScriptConfigError):
    """Raised when a file extension is claimed by two build scripts."""

    error_code = "E103_DUPLICATE_BUILD_EXTENSION"

    def __init__(self, message: str, *, extension: str, **kwargs):
        super().__init__(message, **kwargs)
        self.extension = extension


class MultipleBundleScripts(ScriptConfigError):
    error_code = "E104_MULTIPLE_BUNDLE_SCRIPTS"


class MissingBundleScript(ScriptConfigError):
    error_code = "E105_MISSING_BUNDLE_SCRIPT"


class InvalidPluginCapabilities(ScriptConfigError):
    error_code = "E201_INVALID_PLUGIN_CAPABILITIES"


class PluginMissingCapability(ScriptConfigError):
    error_code = "E202_PLUGIN_MISSING_CAPABILITY"


class UnregisteredPlugin(ScriptConfigError):
    error_code = "E203_UNREGISTERED_PLUGIN"


class UnboundPluginReference(ScriptConfigError):
    error_code = "E204_UNBOUND_PLUGIN_REFERENCE"
