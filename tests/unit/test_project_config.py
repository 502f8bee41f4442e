"""Unit tests for project configuration loading."""

import json

import pytest

from buildplan.config import (
    ALWAYS_EXCLUDE,
    DEFAULT_SCRIPTS,
    DevOptions,
    ProjectConfig,
    ProjectConfigError,
)
from buildplan.core.compiler import Capability, MissingBundleScript, MountArgs


class TestProjectConfig:
    """Tests for ProjectConfig.from_dict."""

    def test_defaults_without_scripts(self):
        """Test a project without scripts serves its root directory."""
        project = ProjectConfig.from_dict({})
        assert project.scripts == DEFAULT_SCRIPTS
        assert "**/.*" in project.exclude

    def test_empty_scripts_kept(self):
        """Test an explicit empty scripts mapping is not replaced."""
        project = ProjectConfig.from_dict({"scripts": {}})
        assert project.scripts == {}
        assert "**/.*" not in project.exclude

    def test_always_exclude_first(self):
        """Test always-excluded globs lead the exclude list without duplicates."""
        project = ProjectConfig.from_dict({
            "scripts": {},
            "exclude": ["**/node_modules/**/*", "docs/**"],
        })
        assert project.exclude[: len(ALWAYS_EXCLUDE)] == ALWAYS_EXCLUDE
        assert project.exclude.count("**/node_modules/**/*") == 1
        assert "docs/**" in project.exclude

    def test_plugins_parsed(self):
        """Test plugin entries become descriptors."""
        project = ProjectConfig.from_dict({
            "scripts": {},
            "plugins": [
                "@acme/plugin-bare",
                {"name": "@acme/plugin-svelte", "capabilities": ["build"]},
            ],
        })
        assert [p.name for p in project.plugins] == ["@acme/plugin-bare", "@acme/plugin-svelte"]
        assert project.plugins[1].has_capability(Capability.BUILD)

    def test_bundle_option(self):
        """Test devOptions.bundle drives bundle_requested."""
        project = ProjectConfig.from_dict({"devOptions": {"bundle": True}})
        assert project.bundle_requested
        assert project.dev_options.port == DevOptions().port

    def test_install_dest(self):
        """Test installOptions.dest is read."""
        project = ProjectConfig.from_dict({"installOptions": {"dest": "vendor"}})
        assert project.install_dest == "vendor"
        assert project.to_dict()["installOptions"] == {"dest": "vendor"}

    def test_scripts_must_be_mapping(self):
        """Test a list of scripts is rejected."""
        with pytest.raises(ProjectConfigError):
            ProjectConfig.from_dict({"scripts": ["build:js"]})

    def test_command_must_be_string(self):
        """Test non-string commands are rejected."""
        with pytest.raises(ProjectConfigError):
            ProjectConfig.from_dict({"scripts": {"build:js": 1}})

    def test_unknown_capability(self):
        """Test unknown plugin capabilities are reported as config errors."""
        with pytest.raises(ProjectConfigError):
            ProjectConfig.from_dict({"plugins": [{"name": "x", "capabilities": ["lint"]}]})

    def test_plugin_without_name(self):
        """Test plugin mappings need a name."""
        with pytest.raises(ProjectConfigError):
            ProjectConfig.from_dict({"plugins": [{"capabilities": ["build"]}]})

    def test_install_must_be_strings(self):
        """Test install entries are validated."""
        with pytest.raises(ProjectConfigError):
            ProjectConfig.from_dict({"install": "react"})


class TestProjectCompile:
    """Tests for compiling loaded projects."""

    def test_default_project_plan(self):
        """Test the default root mount compiles."""
        plan = ProjectConfig.from_dict({}).compile()
        assert plan.ids == ("mount:web_modules", "mount:*", "build:js,jsx,ts,tsx")
        assert plan.get("mount:*").args == MountArgs(from_disk=".", to_url="/")

    def test_load_yaml(self, sample_project_file):
        """Test loading and compiling a YAML project."""
        project = ProjectConfig.load(sample_project_file)
        assert project.config_path == sample_project_file
        assert project.dev_options.port == 3000

        plan = project.compile(mode="production", build_dependencies_dir="/deps")
        assert plan.get("mount:web_modules").args.from_disk == "/deps"
        assert plan.get("build:js,jsx").plugin.name == "@acme/plugin-babel"
        assert plan.get("build:ts,tsx") is not None
        assert plan.known_entrypoints == ("react", "react-dom", "@babel/runtime/helpers")

    def test_load_json(self, tmp_path):
        """Test loading a JSON project."""
        path = tmp_path / "buildplan.json"
        path.write_text(json.dumps({"scripts": {"run:lint": "eslint"}}))
        project = ProjectConfig.load(path)
        assert project.scripts == {"run:lint": "eslint"}

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON is a config error."""
        path = tmp_path / "buildplan.json"
        path.write_text("{not json")
        with pytest.raises(ProjectConfigError):
            ProjectConfig.load(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file."""
        with pytest.raises(FileNotFoundError):
            ProjectConfig.load(tmp_path / "missing.yaml")

    def test_bundle_requested_without_bundle(self):
        """Test devOptions.bundle reaches the compiler."""
        project = ProjectConfig.from_dict({"devOptions": {"bundle": True}})
        with pytest.raises(MissingBundleScript):
            project.compile()

    def test_bundle_override(self):
        """Test compiler overrides win over devOptions."""
        project = ProjectConfig.from_dict({"devOptions": {"bundle": True}})
        plan = project.compile(bundle_requested=False)
        assert len(plan) == 3
