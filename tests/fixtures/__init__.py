"""Test fixtures for buildplan.

Provides plugin stand-ins and descriptor builders.
"""

from .plugins import (
    FakeBuildPlugin,
    FakeBundlePlugin,
    FakeMultiPlugin,
    FakeTransformPlugin,
    make_build_plugin,
    make_bundle_plugin,
    make_transform_plugin,
)

__all__ = [
    "FakeBuildPlugin",
    "FakeBundlePlugin",
    "FakeMultiPlugin",
    "FakeTransformPlugin",
    "make_build_plugin",
    "make_bundle_plugin",
    "make_transform_plugin",
]
