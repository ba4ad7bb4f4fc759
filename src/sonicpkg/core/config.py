"""Build environment loaded from the variables the parent build exports."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildEnvironment(BaseSettings):
    """Settings for a packaging run, read from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Cross-build selection
    cross_build_environ: str = "n"
    configured_arch: str = "amd64"

    # dpkg
    sonic_dpkg_admindir: str | None = None
    sonic_config_make_jobs: int = Field(default=1, ge=1)

    # Layout
    dest: Path = Path("target/debs")
    recipe_root: Path = Field(
        default=Path("src"),
        validation_alias=AliasChoices("SONICPKG_RECIPE_ROOT", "recipe_root"),
    )

    @property
    def is_cross_build(self) -> bool:
        """True when building for a foreign architecture."""
        return self.cross_build_environ == "y"

    def recipe_dir(self, relative: str) -> Path:
        """Directory holding a recipe's patches and packaging files."""
        return self.recipe_root / relative


@lru_cache
def get_environment() -> BuildEnvironment:
    """Get cached build environment instance."""
    return BuildEnvironment()
