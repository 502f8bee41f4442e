"""Main script compiler class."""

import logging
from typing import Iterable, Mapping, Optional

from .arguments import with_args
from .config import CompilerConfig
from .defaults import inject_defaults
from .parser import parse_scripts
from .plugins import PluginRegistry, bind_plugins
from .script import CompiledPlan, PluginDescriptor
from .sorter import sort_scripts
from .validator import check_build_extensions, check_bundle_count, validate_plan


class ScriptCompiler:
    """Compiles raw script declarations and plugins into an ordered plan.

    Stages run in sequence, each over a fresh list of frozen scripts:

    1. Register plugins (capability check, entrypoints, default scripts)
    2. Parse script keys and attach watch commands
    3. Extract mount/proxy arguments
    4. Check build extension ownership and bundle count
    5. Bind plugins to build/bundle scripts
    6. Inject the implicit fallback scripts
    7. Validate the complete set
    8. Sort into plan order

    Example:
        >>> compiler = ScriptCompiler(CompilerConfig(mode="production"))
        >>> plan = compiler.compile({"mount:src": "mount src --to /app"})
        >>> plan.ids
        ('mount:web_modules', 'mount:src', 'build:js,jsx,ts,tsx')
    """

    def __init__(
        self,
        config: Optional[CompilerConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or CompilerConfig()
        self.logger = logger or logging.getLogger(__name__)

    def compile(
        self,
        raw_scripts: Mapping[str, str],
        plugins: Iterable[PluginDescriptor] = (),
        known_entrypoints: Optional[Iterable[str]] = None,
    ) -> CompiledPlan:
        """
        Compile a raw script mapping into a plan.

        Args:
            raw_scripts: Script keys mapped to command strings
            plugins: Already-instantiated plugin descriptors, in declaration order
            known_entrypoints: Entrypoints declared by the project itself

        Raises:
            ScriptConfigError: On the first configuration error found
        """
        plugins = list(plugins)
        self.logger.info(
            "Compiling %d script entries with %d plugins (mode=%s)",
            len(raw_scripts),
            len(plugins),
            self.config.mode,
        )

        registry = PluginRegistry(known_entrypoints, logger=self.logger)
        script_map = dict(raw_scripts)
        for plugin in plugins:
            registry.register(plugin)
            script_map = registry.apply_default_build_script(script_map, plugin)

        scripts = parse_scripts(script_map)
        check_bundle_count(scripts)
        scripts = [with_args(script) for script in scripts]
        check_build_extensions(scripts)

        scripts = bind_plugins(scripts, registry)
        scripts = inject_defaults(scripts, self.config)
        validate_plan(scripts, registry.as_mapping(), self.config.bundle_requested)

        ordered = sort_scripts(scripts)
        self.logger.debug("Plan order: %s", ", ".join(s.id for s in ordered))
        return CompiledPlan(
            scripts=tuple(ordered),
            known_entrypoints=tuple(registry.known_entrypoints),
        )


def compile_scripts(
    raw_scripts: Mapping[str, str],
    plugins: Iterable[PluginDescriptor] = (),
    known_entrypoints: Optional[Iterable[str]] = None,
    **config_kwargs,
) -> CompiledPlan:
    """Convenience function to compile a raw script mapping."""
    config = CompilerConfig(**config_kwargs)
    compiler = ScriptCompiler(config)
    return compiler.compile(raw_scripts, plugins, known_entrypoints)
