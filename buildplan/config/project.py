"""Project configuration for plan compilation.

Loads the ``scripts``, ``plugins``, ``install`` and option sections of a
project file and hands them to the script compiler. The file path is always
given explicitly; there is no search for configuration files.

Example
-------
>>> from buildplan.config import ProjectConfig
>>> project = ProjectConfig.load("buildplan.yaml")
>>> plan = project.compile(mode="production")
>>> plan.ids[0]
'mount:web_modules'
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.compiler import CompiledPlan, CompilerConfig, PluginDescriptor, ScriptCompiler

ALWAYS_EXCLUDE = ["**/node_modules/**/*", "**/.types/**/*"]
DEFAULT_EXCLUDE = ["__tests__/**/*", "**/*.@(spec|test).*"]
HIDDEN_FILES_EXCLUDE = "**/.*"
# Served when a project declares no scripts at all
DEFAULT_SCRIPTS = {"mount:*": "mount . --to /"}


class ProjectConfigError(Exception):
    """Raised when a project file cannot be read or has the wrong shape."""

    pass


@dataclass
class DevOptions:
    """Dev server options relevant to compilation."""

    port: int = 8080
    out: str = "build"
    fallback: str = "index.html"
    open: str = "default"
    bundle: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DevOptions":
        defaults = cls()
        return cls(
            port=data.get("port", defaults.port),
            out=data.get("out", defaults.out),
            fallback=data.get("fallback", defaults.fallback),
            open=data.get("open", defaults.open),
            bundle=data.get("bundle", defaults.bundle),
        )


@dataclass
class ProjectConfig:
    """Scripts, plugins and options of a project.

    Attributes
    ----------
    scripts : Dict[str, str]
        Raw script keys mapped to commands
    plugins : List[PluginDescriptor]
        Plugin descriptors in declaration order
    install : List[str]
        Package entrypoints declared by the project
    exclude : List[str]
        Glob patterns never served or built
    dev_options : DevOptions
        Dev server options
    install_dest : str
        Directory installed dependencies are written to
    config_path : Path, optional
        File the configuration was loaded from
    """

    scripts: Dict[str, str] = field(default_factory=dict)
    plugins: List[PluginDescriptor] = field(default_factory=list)
    install: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    dev_options: DevOptions = field(default_factory=DevOptions)
    install_dest: str = "web_modules"
    config_path: Optional[Path] = None

    @property
    def bundle_requested(self) -> bool:
        return self.dev_options.bundle is True

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], config_path: Optional[Path] = None
    ) -> "ProjectConfig":
        """Create a project config from parsed file contents.

        Raises
        ------
        ProjectConfigError
            If a section has the wrong type
        """
        if not isinstance(data, dict):
            raise ProjectConfigError("Project configuration must be a mapping")

        exclude = _string_list(data, "exclude", DEFAULT_EXCLUDE)
        raw_scripts = data.get("scripts")
        if raw_scripts is None:
            scripts = dict(DEFAULT_SCRIPTS)
            exclude = exclude + [HIDDEN_FILES_EXCLUDE]
        else:
            scripts = _parse_scripts(raw_scripts)

        dev_options = data.get("devOptions", {})
        install_options = data.get("installOptions", {})
        if not isinstance(dev_options, dict) or not isinstance(install_options, dict):
            raise ProjectConfigError('"devOptions" and "installOptions" must be mappings')

        return cls(
            scripts=scripts,
            plugins=_parse_plugins(data.get("plugins", [])),
            install=_string_list(data, "install", []),
            exclude=list(dict.fromkeys(ALWAYS_EXCLUDE + exclude)),
            dev_options=DevOptions.from_dict(dev_options),
            install_dest=install_options.get("dest", "web_modules"),
            config_path=config_path,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "ProjectConfig":
        """Load project config from a YAML file."""
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ProjectConfigError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data or {}, config_path=Path(path))

    @classmethod
    def from_json(cls, path: Path) -> "ProjectConfig":
        """Load project config from a JSON file."""
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ProjectConfigError(f"Invalid JSON in {path}: {e}") from e
        return cls.from_dict(data, config_path=Path(path))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ProjectConfig":
        """Load project config, choosing the parser from the file suffix.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist
        ProjectConfigError
            If the file is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        if path.suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    def compiler_config(self, mode: str = "development", **overrides) -> CompilerConfig:
        """Build the compiler settings for this project and mode."""
        settings = {"mode": mode, "bundle_requested": self.bundle_requested}
        settings.update(overrides)
        return CompilerConfig.from_dict(settings)

    def compile(
        self,
        mode: str = "development",
        logger: Optional[logging.Logger] = None,
        **overrides,
    ) -> CompiledPlan:
        """Compile this project's scripts and plugins into a plan."""
        compiler = ScriptCompiler(self.compiler_config(mode, **overrides), logger=logger)
        return compiler.compile(self.scripts, self.plugins, known_entrypoints=self.install)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scripts": dict(self.scripts),
            "plugins": [p.to_dict() for p in self.plugins],
            "install": list(self.install),
            "exclude": list(self.exclude),
            "devOptions": {
                "port": self.dev_options.port,
                "out": self.dev_options.out,
                "fallback": self.dev_options.fallback,
                "open": self.dev_options.open,
                "bundle": self.dev_options.bundle,
            },
            "installOptions": {"dest": self.install_dest},
        }


def _string_list(data: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ProjectConfigError(f'"{key}" must be a list of strings')
    return list(value)


def _parse_scripts(raw_scripts: Any) -> Dict[str, str]:
    if not isinstance(raw_scripts, dict):
        raise ProjectConfigError('"scripts" must be a mapping of script keys to commands')
    for key, command in raw_scripts.items():
        if not isinstance(command, str):
            raise ProjectConfigError(f"scripts[{key}]: command must be a string")
    return {str(k): v for k, v in raw_scripts.items()}


def _parse_plugins(raw_plugins: Any) -> List[PluginDescriptor]:
    if not isinstance(raw_plugins, list):
        raise ProjectConfigError('"plugins" must be a list')
    plugins = []
    for i, entry in enumerate(raw_plugins):
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or "name" not in entry:
            raise ProjectConfigError(f"plugins[{i}]: expected a name or a mapping with a name")
        try:
            plugins.append(PluginDescriptor.from_dict(entry))
        except ValueError as e:
            raise ProjectConfigError(f"plugins[{i}]: {e}") from e
    return plugins
