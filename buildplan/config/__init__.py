"""Project configuration for buildplan.

Example
-------
>>> from buildplan.config import ProjectConfig
>>> project = ProjectConfig.from_dict({"scripts": {"mount:src": "mount src"}})
>>> project.compile().ids
('mount:web_modules', 'mount:src', 'build:js,jsx,ts,tsx')
"""

from .project import (
    ALWAYS_EXCLUDE,
    DEFAULT_SCRIPTS,
    DevOptions,
    ProjectConfig,
    ProjectConfigError,
)

__all__ = [
    "ALWAYS_EXCLUDE",
    "DEFAULT_SCRIPTS",
    "DevOptions",
    "ProjectConfig",
    "ProjectConfigError",
]
