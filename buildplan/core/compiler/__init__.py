"""Script compiler for dev-server/build plans."""

from .compiler import ScriptCompiler, compile_scripts
from .config import CompilerConfig
from .errors import (
    DuplicateBuildExtension,
    InvalidPluginCapabilities,
    MalformedScriptCommand,
    MissingBundleScript,
    MultipleBundleScripts,
    PluginMissingCapability,
    ScriptConfigError,
    UnboundPluginReference,
    UnknownScriptType,
    UnregisteredPlugin,
)
from .export import format_plan_summary, plan_to_dict
from .parser import parse_script_key
from .plugins import PluginRegistry
from .script import (
    Capability,
    CompiledPlan,
    CompiledScript,
    MountArgs,
    PluginDescriptor,
    ProxyArgs,
    ScriptKey,
    ScriptType,
)
from .sorter import sort_scripts

__all__ = [
    "CompilerConfig",
    "ScriptCompiler",
    "compile_scripts",
    "parse_script_key",
    "sort_scripts",
    "PluginRegistry",
    "format_plan_summary",
    "plan_to_dict",
    # Data model
    "ScriptType",
    "ScriptKey",
    "Capability",
    "MountArgs",
    "ProxyArgs",
    "PluginDescriptor",
    "CompiledScript",
    "CompiledPlan",
    # Errors
    "ScriptConfigError",
    "UnknownScriptType",
    "MalformedScriptCommand",
    "DuplicateBuildExtension",
    "MultipleBundleScripts",
    "MissingBundleScript",
    "InvalidPluginCapabilities",
    "PluginMissingCapability",
    "UnregisteredPlugin",
    "UnboundPluginReference",
]
