"""Implicit fallback scripts.

Two entries are supplied when the user's declarations do not cover them:
the dependency mount served at ``/web_modules`` and a build script for the
JavaScript/TypeScript extensions no user build script claims.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Set

from .config import CompilerConfig
from .script import (
    WEB_MODULES_SCRIPT_ID,
    Capability,
    CompiledScript,
    MountArgs,
    PluginDescriptor,
    ScriptType,
)

logger = logging.getLogger(__name__)

BUILTIN_TRANSPILER_COMMAND = "(default) esbuild"
BUILTIN_TRANSPILER_PLUGIN = "buildplan:esbuild"
WEB_MODULES_COMMAND = "mount $WEB_MODULES --to /web_modules"
WEB_MODULES_URL = "/web_modules"


def _passthrough_transform(
    contents: str, url_path: str = "", is_dev: bool = False
) -> Optional[Dict[str, Any]]:
    """Transform hook of the built-in transpiler descriptor.

    Returns the contents unchanged; the serving engine recognises the
    transpiler sentinel command and applies its own transpiler.
    """
    return {"result": contents}


def builtin_transpiler_plugin() -> PluginDescriptor:
    """Descriptor pre-bound to the default JS/TS build script."""
    return PluginDescriptor(
        name=BUILTIN_TRANSPILER_PLUGIN,
        capabilities=(Capability.TRANSFORM,),
        hooks={Capability.TRANSFORM: _passthrough_transform},
    )


def web_modules_script(config: CompilerConfig) -> CompiledScript:
    """Mount of the installed dependency directory for the configured mode."""
    return CompiledScript(
        id=WEB_MODULES_SCRIPT_ID,
        type=ScriptType.MOUNT,
        match=("web_modules",),
        command=WEB_MODULES_COMMAND,
        args=MountArgs(from_disk=config.dependencies_dir, to_url=WEB_MODULES_URL),
    )


def default_build_script(
    config: CompilerConfig, claimed_extensions: Set[str]
) -> Optional[CompiledScript]:
    """Build script for the default extensions not already claimed, if any."""
    remaining = [
        ext for ext in config.default_build_extensions if ext not in claimed_extensions
    ]
    if not remaining:
        return None
    return CompiledScript(
        id=f"build:{','.join(remaining)}",
        type=ScriptType.BUILD,
        match=tuple(remaining),
        command=BUILTIN_TRANSPILER_COMMAND,
        plugin=builtin_transpiler_plugin(),
    )


def inject_defaults(
    scripts: Sequence[CompiledScript],
    config: CompilerConfig,
) -> List[CompiledScript]:
    """
    Return scripts with the implicit fallback entries appended.

    A fallback is never added under an id the user already declared.
    """
    result = list(scripts)
    declared_ids = {s.id for s in result}

    if WEB_MODULES_SCRIPT_ID not in declared_ids:
        result.append(web_modules_script(config))
        logger.debug("Injected %s from %s", WEB_MODULES_SCRIPT_ID, config.dependencies_dir)

    claimed = {
        ext for s in result if s.type is ScriptType.BUILD for ext in s.match
    }
    build = default_build_script(config, claimed)
    if build is not None and build.id not in declared_ids:
        result.append(build)
        logger.debug("Injected %s using the built-in transpiler", build.id)

    return result
