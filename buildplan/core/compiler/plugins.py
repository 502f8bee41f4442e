"""Plugin registration and binding.

Plugins arrive already instantiated. Registration checks each descriptor's
capabilities, gathers its known entrypoints and lets it claim its default
build script; binding later attaches plugins to the build and bundle
scripts whose command names them.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional

from .errors import InvalidPluginCapabilities, PluginMissingCapability, UnregisteredPlugin
from .script import (
    REQUIRED_CAPABILITY,
    CompiledScript,
    PluginDescriptor,
    looks_like_module_reference,
)


class PluginRegistry:
    """Registry of plugins for one compilation, keyed by module reference.

    Provides:
    - Capability checks at registration time
    - Aggregation of known entrypoints
    - Synthesis of plugin default build scripts
    - Lookup by the name scripts use to reference a plugin

    Parameters
    ----------
    known_entrypoints : Iterable[str], optional
        Entrypoints declared by the project itself; plugin entrypoints are
        appended after them
    logger : logging.Logger, optional
        Logger instance
    """

    def __init__(
        self,
        known_entrypoints: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._plugins: Dict[str, PluginDescriptor] = {}
        self.known_entrypoints: List[str] = list(known_entrypoints or [])
        self.logger = logger or logging.getLogger(__name__)

    def register(self, plugin: PluginDescriptor) -> PluginDescriptor:
        """Register a plugin.

        Raises
        ------
        InvalidPluginCapabilities
            If the plugin exposes more than one of build/transform/bundle
        """
        if len(set(plugin.capabilities)) > 1:
            found = ", ".join(f"{c.value}()" for c in plugin.capabilities)
            raise InvalidPluginCapabilities(
                f"plugin[{plugin.name}]: A valid plugin can only have one build(), "
                f"transform(), or bundle() function.",
                plugin=plugin.name,
                suggestion=f"Found: {found}",
            )
        if plugin.name in self._plugins:
            self.logger.warning("Plugin %s registered twice; using the later one", plugin.name)
        self._plugins[plugin.name] = plugin
        self.known_entrypoints.extend(plugin.known_entrypoints)
        return plugin

    def get(self, name: str) -> Optional[PluginDescriptor]:
        return self._plugins.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def as_mapping(self) -> Mapping[str, PluginDescriptor]:
        return dict(self._plugins)

    def list_names(self) -> List[str]:
        return list(self._plugins)

    def apply_default_build_script(
        self,
        raw_scripts: Mapping[str, str],
        plugin: PluginDescriptor,
    ) -> Dict[str, str]:
        """
        Return a copy of raw_scripts with the plugin's default build script.

        The default is skipped when its key is already declared or when any
        script command already references the plugin; the user's own
        reference takes precedence.
        """
        scripts = dict(raw_scripts)
        key = plugin.default_build_script
        if not key:
            return scripts
        if key in scripts:
            self.logger.debug("Plugin %s: %s already declared", plugin.name, key)
        elif plugin.name in scripts.values():
            self.logger.debug("Plugin %s: already referenced by a script", plugin.name)
        else:
            scripts[key] = plugin.name
            self.logger.info("Plugin %s: added default script %s", plugin.name, key)
        return scripts


def bind_plugin(script: CompiledScript, registry: PluginRegistry) -> CompiledScript:
    """
    Attach the plugin a build or bundle script references.

    Scripts of other types, scripts that already carry a plugin, and
    commands that are not plugin references are returned unchanged.

    Raises:
        PluginMissingCapability: Plugin is registered but cannot back the script
        UnregisteredPlugin: Command looks like a module path with no plugin
    """
    required = REQUIRED_CAPABILITY.get(script.type)
    if required is None or script.plugin is not None:
        return script

    plugin = registry.get(script.command)
    if plugin is not None:
        if plugin.has_capability(required):
            return replace(script, plugin=plugin)
        raise PluginMissingCapability(
            f'scripts[{script.id}]: Plugin "{script.command}" has no {required.value} script.',
            script_id=script.id,
            plugin=script.command,
        )
    if looks_like_module_reference(script.command):
        raise UnregisteredPlugin(
            f'scripts[{script.id}]: Register plugin "{script.command}" in your "plugins" config.',
            script_id=script.id,
            plugin=script.command,
        )
    return script


def bind_plugins(
    scripts: Iterable[CompiledScript], registry: PluginRegistry
) -> List[CompiledScript]:
    """Bind plugins to every script that references one."""
    return [bind_plugin(script, registry) for script in scripts]
