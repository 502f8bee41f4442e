"""Pytest configuration and shared fixtures for buildplan tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from buildplan.core.compiler import CompilerConfig

from tests.fixtures import make_build_plugin, make_bundle_plugin


# ============================================================================
# Compiler Fixtures
# ============================================================================


@pytest.fixture
def dev_config() -> CompilerConfig:
    """Compiler config for development mode."""
    return CompilerConfig(
        mode="development",
        build_dependencies_dir="/cache/build",
        dev_dependencies_dir="/cache/dev",
    )


@pytest.fixture
def prod_config() -> CompilerConfig:
    """Compiler config for production mode."""
    return CompilerConfig(
        mode="production",
        build_dependencies_dir="/cache/build",
        dev_dependencies_dir="/cache/dev",
    )


@pytest.fixture
def sample_scripts() -> dict:
    """Script map covering every script type."""
    return {
        "bundle:*": "@acme/plugin-webpack",
        "build:svelte": "@acme/plugin-svelte",
        "build:css": "postcss",
        "run:lint": "eslint src",
        "run:lint::watch": "watch $1 src",
        "mount:src": "mount src --to /_dist_",
        "mount:public": "mount public --to /",
        "proxy:api": "proxy http://localhost:9000 --to /api",
    }


@pytest.fixture
def sample_plugins() -> list:
    """Plugins referenced by sample_scripts."""
    return [
        make_build_plugin("@acme/plugin-svelte", known_entrypoints=["svelte/internal"]),
        make_bundle_plugin("@acme/plugin-webpack"),
    ]


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_project_file(tmp_path) -> Path:
    """Create sample project configuration file."""
    import yaml

    config = {
        "install": ["react", "react-dom"],
        "scripts": {
            "mount:src": "mount src --to /_dist_",
            "build:css": "postcss",
            "proxy:api": "proxy http://localhost:9000 --to /api",
        },
        "plugins": [
            {
                "name": "@acme/plugin-babel",
                "capabilities": ["build"],
                "defaultBuildScript": "build:js,jsx",
                "knownEntrypoints": ["@babel/runtime/helpers"],
            },
        ],
        "devOptions": {"port": 3000},
    }

    path = tmp_path / "buildplan.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path


@pytest.fixture
def invalid_project_file(tmp_path) -> Path:
    """Project file with two build scripts claiming the same extension."""
    import yaml

    config = {
        "scripts": {
            "build:js": "babel",
            "build:js,ts": "tsc",
        },
    }

    path = tmp_path / "invalid.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
