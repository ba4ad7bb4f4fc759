"""Tests for core models, configuration and the recipe registry."""

import pytest
from pydantic import ValidationError

from sonicpkg.core.config import BuildEnvironment
from sonicpkg.core.exceptions import RecipeNotFoundError, UnknownTargetError
from sonicpkg.core.models import (
    AppendLine,
    DebianReleaseCondition,
    DscSource,
    GitSource,
    Recipe,
)
from sonicpkg.recipes import RecipeRegistry, get_registry


class TestBuildEnvironment:
    """Tests for BuildEnvironment settings."""

    def test_reads_sonic_variables(self, monkeypatch):
        monkeypatch.setenv("CROSS_BUILD_ENVIRON", "y")
        monkeypatch.setenv("CONFIGURED_ARCH", "armhf")
        monkeypatch.setenv("SONIC_DPKG_ADMINDIR", "/tmp/dpkg")
        monkeypatch.setenv("SONIC_CONFIG_MAKE_JOBS", "8")
        monkeypatch.setenv("DEST", "/out")
        monkeypatch.setenv("SONICPKG_RECIPE_ROOT", "/sonic/src")

        env = BuildEnvironment()

        assert env.is_cross_build is True
        assert env.configured_arch == "armhf"
        assert env.sonic_dpkg_admindir == "/tmp/dpkg"
        assert env.sonic_config_make_jobs == 8
        assert str(env.dest) == "/out"
        assert str(env.recipe_dir("libyang3")) == "/sonic/src/libyang3"

    @pytest.mark.parametrize("value", ["n", "Y", "yes", ""])
    def test_only_y_selects_cross(self, value):
        env = BuildEnvironment(cross_build_environ=value)
        assert env.is_cross_build is False

    def test_jobs_must_be_positive(self):
        with pytest.raises(ValidationError):
            BuildEnvironment(sonic_config_make_jobs=0)


class TestSources:
    def test_dsc_url(self):
        source = DscSource(
            url="http://example.org/pool/",
            package="libyang",
            full_version="3.12.2-1",
            checkout_dir="libyang-3.12.2",
        )
        assert source.dsc_url == "http://example.org/pool/libyang_3.12.2-1.dsc"

    def test_recipe_source_discriminated_from_dict(self):
        recipe = Recipe.model_validate(
            {
                "name": "demo",
                "version": "1.0",
                "source": {"kind": "git", "url": "https://x/demo.git", "checkout_dir": "demo"},
                "edits": [{"kind": "append-line", "path": "f", "line": "x"}],
                "main_target": "demo_1.0_{arch}.deb",
            }
        )
        assert isinstance(recipe.source, GitSource)
        assert isinstance(recipe.edits[0], AppendLine)

    def test_clone_depth_positive(self):
        with pytest.raises(ValidationError):
            GitSource(url="https://x", checkout_dir="x", depth=0)


class TestDebianReleaseCondition:
    @pytest.mark.parametrize("release,expected", [(9, True), (10, True), (11, False), (None, False)])
    def test_matches(self, release, expected):
        assert DebianReleaseCondition(max_release=10).matches(release) is expected


class TestRecipe:
    def test_artifacts_main_first(self, libyang3_recipe):
        assert libyang3_recipe.artifacts("arm64") == [
            "libyang3_3.12.2-1_arm64.deb",
            "libyang-dev_3.12.2-1_arm64.deb",
            "libyang3-dbgsym_3.12.2-1_arm64.deb",
            "libyang-tools_3.12.2-1_arm64.deb",
            "libyang-tools-dbgsym_3.12.2-1_arm64.deb",
        ]

    def test_no_derived_targets(self, libyang3_py3_recipe):
        assert libyang3_py3_recipe.artifacts("amd64") == ["python3-libyang_3.1.0-1_amd64.deb"]

    def test_recipe_path(self, psample_recipe, libyang3_recipe):
        assert psample_recipe.recipe_path == "sflow/psample"
        assert libyang3_recipe.recipe_path == "libyang3"


class TestRecipeRegistry:
    def test_bundled_recipes(self):
        assert get_registry().names() == ["libyang3", "libyang3-py3", "psample"]

    def test_get_unknown(self):
        with pytest.raises(RecipeNotFoundError):
            get_registry().get("libnl3")

    def test_duplicate_registration(self, psample_recipe):
        registry = RecipeRegistry([psample_recipe])
        with pytest.raises(ValueError):
            registry.register(psample_recipe)

    def test_for_target_unknown(self):
        with pytest.raises(UnknownTargetError):
            get_registry().for_target("libfoo_1.0_amd64.deb", "amd64")
