"""Configuration for plan compilation."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

PRODUCTION = "production"
DEVELOPMENT = "development"


@dataclass
class CompilerConfig:
    """Configuration for plan compilation.

    The mode is passed explicitly rather than read from the process
    environment, so the same inputs always compile to the same plan.
    """

    mode: str = DEVELOPMENT  # development | production
    bundle_requested: bool = False  # A bundle script must exist
    build_dependencies_dir: str = "node_modules/.cache/buildplan/build"
    dev_dependencies_dir: str = "node_modules/.cache/buildplan/dev"
    default_build_extensions: Tuple[str, ...] = ("js", "jsx", "ts", "tsx")

    @property
    def dependencies_dir(self) -> str:
        """Directory served at /web_modules for the current mode."""
        if self.mode == PRODUCTION:
            return self.build_dependencies_dir
        return self.dev_dependencies_dir

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompilerConfig":
        """Create config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if "default_build_extensions" in kwargs:
            kwargs["default_build_extensions"] = tuple(kwargs["default_build_extensions"])
        return cls(**kwargs)
