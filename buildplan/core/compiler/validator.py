"""Cross-entry validation for compiled scripts.

Two passes run during compilation:

- incremental checks while consuming declared entries (build extension
  ownership, bundle count)
- post-injection checks once plugins are bound and defaults injected
  (plugin references, requested bundling)

Every check raises at the first violation.
"""

from typing import Iterable, Mapping, Set

from .errors import (
    DuplicateBuildExtension,
    MissingBundleScript,
    MultipleBundleScripts,
    UnboundPluginReference,
)
from .script import REQUIRED_CAPABILITY, CompiledScript, PluginDescriptor, ScriptType


def check_build_extensions(scripts: Iterable[CompiledScript]) -> Set[str]:
    """
    Ensure no file extension is claimed by two build scripts.

    Returns the set of claimed extensions.

    Raises:
        DuplicateBuildExtension: On the first extension seen twice
    """
    claimed: Set[str] = set()
    for script in scripts:
        if script.type is not ScriptType.BUILD:
            continue
        for ext in script.match:
            if ext in claimed:
                raise DuplicateBuildExtension(
                    f'Multiple "scripts" match the "{ext}" file extension.',
                    extension=ext,
                    script_id=script.id,
                    suggestion="Currently, only one script per file type is supported.",
                )
            claimed.add(ext)
    return claimed


def check_bundle_count(scripts: Iterable[CompiledScript]) -> None:
    """Raise MultipleBundleScripts if more than one bundle script exists."""
    bundle_ids = [s.id for s in scripts if s.type is ScriptType.BUNDLE]
    if len(bundle_ids) > 1:
        raise MultipleBundleScripts(
            'scripts can only contain 1 script of type "bundle:".',
            script_id=bundle_ids[1],
            suggestion=f"Found: {', '.join(bundle_ids)}",
        )


def check_plugin_references(
    scripts: Iterable[CompiledScript],
    plugins: Mapping[str, PluginDescriptor],
) -> None:
    """
    Ensure every script that names a registered plugin is bound to it.

    Only build and bundle scripts can be backed by a plugin, and only by
    one exposing the matching capability.

    Raises:
        UnboundPluginReference: If a reference is left unresolved
    """
    for script in scripts:
        if script.command not in plugins:
            continue
        required = REQUIRED_CAPABILITY.get(script.type)
        if required is None:
            raise UnboundPluginReference(
                f'scripts[{script.id}]: Plugin "{script.command}" cannot back a '
                f'"{script.type.value}" script.',
                script_id=script.id,
                plugin=script.command,
                suggestion='Reference plugins from "build:" or "bundle:" scripts only.',
            )
        plugin = script.plugin
        if plugin is None or plugin.name != script.command or not plugin.has_capability(required):
            raise UnboundPluginReference(
                f'scripts[{script.id}]: Plugin "{script.command}" is not bound with a '
                f"{required.value}() capability.",
                script_id=script.id,
                plugin=script.command,
            )


def check_bundle_requested(scripts: Iterable[CompiledScript], bundle_requested: bool) -> None:
    """Raise MissingBundleScript if bundling is requested without a bundle script."""
    if not bundle_requested:
        return
    if not any(s.type is ScriptType.BUNDLE for s in scripts):
        raise MissingBundleScript(
            '--bundle set to true, but no "bundle:*" script/plugin was provided.',
            suggestion='Add a "bundle:*" script or register a bundle plugin.',
        )


def validate_plan(
    scripts: Iterable[CompiledScript],
    plugins: Mapping[str, PluginDescriptor],
    bundle_requested: bool = False,
) -> None:
    """Run the post-injection pass over the complete set of scripts."""
    scripts = list(scripts)
    check_build_extensions(scripts)
    check_bundle_count(scripts)
    check_plugin_references(scripts, plugins)
    check_bundle_requested(scripts, bundle_requested)
