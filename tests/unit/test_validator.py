"""Unit tests for declaration validation."""

import pytest

from buildplan.core.compiler import (
    CompiledScript,
    DuplicateBuildExtension,
    MissingBundleScript,
    MultipleBundleScripts,
    ScriptType,
    UnboundPluginReference,
)
from buildplan.core.compiler.validator import (
    check_build_extensions,
    check_bundle_count,
    check_bundle_requested,
    check_plugin_references,
    validate_plan,
)

from tests.fixtures import make_build_plugin, make_transform_plugin


def _script(script_id, command="cmd", plugin=None):
    script_type = ScriptType(script_id.split(":")[0])
    match = tuple(script_id.split(":", 1)[1].split(","))
    return CompiledScript(id=script_id, type=script_type, match=match,
                          command=command, plugin=plugin)


class TestBuildExtensions:
    """Tests for check_build_extensions."""

    def test_disjoint_extensions(self):
        """Test disjoint build scripts pass and report claimed extensions."""
        claimed = check_build_extensions([
            _script("build:js,jsx"),
            _script("build:css"),
        ])
        assert claimed == {"js", "jsx", "css"}

    def test_duplicate_extension(self):
        """Test the first repeated extension is reported."""
        with pytest.raises(DuplicateBuildExtension) as exc_info:
            check_build_extensions([
                _script("build:js,jsx"),
                _script("build:ts,jsx"),
            ])
        assert exc_info.value.extension == "jsx"
        assert exc_info.value.script_id == "build:ts,jsx"

    def test_non_build_scripts_ignored(self):
        """Test that bundle and mount matches do not count as claims."""
        claimed = check_build_extensions([
            _script("build:js"),
            _script("bundle:js"),
            _script("mount:js"),
        ])
        assert claimed == {"js"}


class TestBundleCount:
    """Tests for check_bundle_count."""

    def test_single_bundle(self):
        """Test one bundle script is allowed."""
        check_bundle_count([_script("bundle:*"), _script("build:js")])

    def test_multiple_bundles(self):
        """Test two bundle scripts are rejected."""
        with pytest.raises(MultipleBundleScripts):
            check_bundle_count([_script("bundle:*"), _script("bundle:js")])


class TestPluginReferences:
    """Tests for check_plugin_references."""

    def test_bound_build_plugin(self):
        """Test a build script bound to its plugin passes."""
        plugin = make_build_plugin("@acme/plugin-babel")
        script = _script("build:js", command=plugin.name, plugin=plugin)
        check_plugin_references([script], {plugin.name: plugin})

    def test_unbound_build_plugin(self):
        """Test a build script left unbound is rejected."""
        plugin = make_build_plugin("@acme/plugin-babel")
        script = _script("build:js", command=plugin.name)
        with pytest.raises(UnboundPluginReference):
            check_plugin_references([script], {plugin.name: plugin})

    def test_run_script_cannot_reference_plugin(self):
        """Test run scripts naming a plugin are rejected."""
        plugin = make_build_plugin("@acme/plugin-babel")
        script = _script("run:babel", command=plugin.name)
        with pytest.raises(UnboundPluginReference) as exc_info:
            check_plugin_references([script], {plugin.name: plugin})
        assert exc_info.value.plugin == "@acme/plugin-babel"

    def test_bound_plugin_without_capability(self):
        """Test a bound plugin lacking the capability is rejected."""
        plugin = make_transform_plugin("@acme/plugin-sass")
        script = _script("build:scss", command=plugin.name, plugin=plugin)
        with pytest.raises(UnboundPluginReference):
            check_plugin_references([script], {plugin.name: plugin})

    def test_unregistered_commands_ignored(self):
        """Test commands that name no plugin are not checked."""
        check_plugin_references([_script("run:lint", command="eslint")], {})


class TestBundleRequested:
    """Tests for check_bundle_requested."""

    def test_not_requested(self):
        """Test nothing is required when bundling is off."""
        check_bundle_requested([_script("build:js")], bundle_requested=False)

    def test_requested_and_present(self):
        """Test a bundle script satisfies the request."""
        check_bundle_requested([_script("bundle:*")], bundle_requested=True)

    def test_requested_and_missing(self):
        """Test a missing bundle script is rejected."""
        with pytest.raises(MissingBundleScript):
            check_bundle_requested([_script("build:js")], bundle_requested=True)


class TestValidatePlan:
    """Tests for validate_plan."""

    def test_runs_all_checks(self):
        """Test the final pass re-checks extension ownership."""
        with pytest.raises(DuplicateBuildExtension):
            validate_plan([_script("build:js"), _script("build:js,ts")], {})
