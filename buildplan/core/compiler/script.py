"""Script and plugin representations for plan compilation.

The compiler turns raw ``"type:match"`` keys into typed ``ScriptKey`` tokens
before any other stage looks at them, then carries each entry through the
pipeline as a frozen ``CompiledScript``. Stages that need to change an entry
(binding a plugin, for instance) build a new instance with
``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union


class ScriptType(Enum):
    """Kinds of script entries, in evaluation order."""

    PROXY = "proxy"
    MOUNT = "mount"
    RUN = "run"
    BUILD = "build"
    BUNDLE = "bundle"

    @property
    def weight(self) -> int:
        """Ordering weight; lower weights are evaluated first."""
        return SCRIPT_TYPE_WEIGHTS[self]

    @classmethod
    def from_prefix(cls, prefix: str) -> Optional["ScriptType"]:
        """Return the type named by a key prefix, or None if unknown."""
        try:
            return cls(prefix)
        except ValueError:
            return None


SCRIPT_TYPE_WEIGHTS: Dict[ScriptType, int] = {
    ScriptType.PROXY: 1,
    ScriptType.MOUNT: 2,
    ScriptType.RUN: 3,
    ScriptType.BUILD: 4,
    ScriptType.BUNDLE: 100,
}


class Capability(Enum):
    """Plugin capabilities. A plugin may expose at most one."""

    BUILD = "build"
    TRANSFORM = "transform"
    BUNDLE = "bundle"


# Capability a plugin must expose to back a script of the given type
REQUIRED_CAPABILITY: Dict[ScriptType, Capability] = {
    ScriptType.BUILD: Capability.BUILD,
    ScriptType.BUNDLE: Capability.BUNDLE,
}

WEB_MODULES_SCRIPT_ID = "mount:web_modules"
WATCH_SUFFIX = "::watch"


def looks_like_module_reference(command: str) -> bool:
    """Whether a command names a plugin module (scoped or relative path)."""
    return command.startswith("@") or command.startswith(".")


@dataclass(frozen=True)
class ScriptKey:
    """Typed form of a raw script key such as ``build:js,jsx``.

    Attributes:
        raw: The key exactly as declared (used as the script id)
        type: Script type parsed from the prefix
        match: Comma-separated match tokens after the first ``:``
    """

    raw: str
    type: ScriptType
    match: Tuple[str, ...]


@dataclass(frozen=True)
class MountArgs:
    """Parsed ``mount <dir> [--to /url]`` command."""

    from_disk: str
    to_url: str

    def to_dict(self) -> Dict[str, str]:
        return {"fromDisk": self.from_disk, "toUrl": self.to_url}


@dataclass(frozen=True)
class ProxyArgs:
    """Parsed ``proxy <url> --to /url`` command."""

    from_url: str
    to_url: str

    def to_dict(self) -> Dict[str, str]:
        return {"fromUrl": self.from_url, "toUrl": self.to_url}


ScriptArgs = Union[MountArgs, ProxyArgs]


@dataclass(frozen=True)
class PluginDescriptor:
    """An already-instantiated plugin as seen by the compiler.

    Attributes
    ----------
    name : str
        Module reference the plugin was loaded from. Script commands refer
        to a plugin by this name.
    capabilities : Tuple[Capability, ...]
        Capabilities the plugin exposes (valid plugins expose at most one)
    hooks : Mapping[Capability, Callable]
        Implementation per capability, when the plugin object provides one
    default_build_script : str, optional
        Script key the plugin claims when the user does not reference it
    known_entrypoints : Tuple[str, ...]
        Extra package entrypoints the plugin needs installed
    """

    name: str
    capabilities: Tuple[Capability, ...] = ()
    hooks: Mapping[Capability, Callable[..., Any]] = field(
        default_factory=dict, hash=False, compare=False
    )
    default_build_script: Optional[str] = None
    known_entrypoints: Tuple[str, ...] = ()

    def __post_init__(self):
        # Read-only view; hooks do not take part in eq/hash
        object.__setattr__(self, "hooks", MappingProxyType(dict(self.hooks)))

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def get_hook(self, capability: Capability) -> Optional[Callable[..., Any]]:
        return self.hooks.get(capability)

    @classmethod
    def from_object(cls, name: str, plugin: Any) -> "PluginDescriptor":
        """Describe a plugin object (or mapping) returned by a plugin factory.

        Capabilities are detected from callable ``build``, ``transform`` and
        ``bundle`` members; ``defaultBuildScript`` and ``knownEntrypoints``
        are read when present.
        """
        if isinstance(plugin, Mapping):
            lookup = plugin.get
        else:
            def lookup(attr, default=None):
                return getattr(plugin, attr, default)

        hooks = {}
        for capability in Capability:
            hook = lookup(capability.value, None)
            if callable(hook):
                hooks[capability] = hook

        return cls(
            name=name,
            capabilities=tuple(hooks),
            hooks=hooks,
            default_build_script=lookup("defaultBuildScript", None),
            known_entrypoints=tuple(lookup("knownEntrypoints", None) or ()),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PluginDescriptor":
        """Create a declared-only descriptor from configuration data.

        Raises
        ------
        KeyError
            If ``name`` is missing
        ValueError
            If a capability name is not recognised
        """
        raw_capabilities = data.get("capabilities", [])
        if isinstance(raw_capabilities, str):
            raw_capabilities = [raw_capabilities]
        return cls(
            name=data["name"],
            capabilities=tuple(Capability(c) for c in raw_capabilities),
            default_build_script=data.get("defaultBuildScript"),
            known_entrypoints=tuple(data.get("knownEntrypoints", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "capabilities": [c.value for c in self.capabilities],
        }
        if self.default_build_script:
            result["defaultBuildScript"] = self.default_build_script
        if self.known_entrypoints:
            result["knownEntrypoints"] = list(self.known_entrypoints)
        return result


@dataclass(frozen=True)
class CompiledScript:
    """A single fully-resolved entry of the execution plan.

    Attributes
    ----------
    id : str
        Original raw key, unique within the plan
    type : ScriptType
        Script type
    match : Tuple[str, ...]
        Extensions for build/bundle, a directory token for mount
    command : str
        Command as declared, a plugin module reference, or the built-in
        transpiler sentinel
    watch_command : str, optional
        Command to run in watch mode, with ``$1`` already expanded
    args : MountArgs or ProxyArgs, optional
        Parsed command arguments for mount/proxy scripts
    plugin : PluginDescriptor, optional
        Plugin bound to a build/bundle script
    """

    id: str
    type: ScriptType
    match: Tuple[str, ...]
    command: str
    watch_command: Optional[str] = None
    args: Optional[ScriptArgs] = None
    plugin: Optional[PluginDescriptor] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "match": list(self.match),
            "cmd": self.command,
        }
        if self.watch_command is not None:
            result["watch"] = self.watch_command
        if self.args is not None:
            result["args"] = self.args.to_dict()
        if self.plugin is not None:
            result["plugin"] = self.plugin.name
        return result


@dataclass(frozen=True)
class CompiledPlan:
    """Ordered, validated scripts plus the aggregated known entrypoints."""

    scripts: Tuple[CompiledScript, ...]
    known_entrypoints: Tuple[str, ...] = ()

    def __iter__(self):
        return iter(self.scripts)

    def __len__(self) -> int:
        return len(self.scripts)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(script.id for script in self.scripts)

    def get(self, script_id: str) -> Optional[CompiledScript]:
        """Return the script with the given id, or None."""
        for script in self.scripts:
            if script.id == script_id:
                return script
        return None

    def scripts_of_type(self, script_type: ScriptType) -> Tuple[CompiledScript, ...]:
        return tuple(s for s in self.scripts if s.type is script_type)
