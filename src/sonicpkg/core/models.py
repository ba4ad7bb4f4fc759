"""Core data models for sonicpkg recipes and builds."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class StepKind(str, Enum):
    """Recipe steps, in execution order."""

    CLEAN = "clean"
    FETCH = "fetch"
    PREPARE = "prepare"
    BUILD = "build"
    COLLECT = "collect"


class BuildState(str, Enum):
    """Build states."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


# ============================================================================
# Source Models
# ============================================================================


class GitSource(BaseModel):
    """Upstream source cloned from a git repository."""

    kind: Literal["git"] = "git"
    url: str
    checkout_dir: str = Field(..., description="Directory the clone lands in")
    branch: str | None = Field(default=None, description="Branch or tag to clone")
    depth: int | None = Field(default=None, ge=1, description="Shallow clone depth")


class DscSource(BaseModel):
    """Upstream source downloaded as a Debian source package."""

    kind: Literal["dsc"] = "dsc"
    url: str = Field(..., description="Archive pool directory")
    package: str
    full_version: str
    checkout_dir: str = Field(..., description="Directory dget unpacks into")

    @property
    def dsc_url(self) -> str:
        return f"{self.url.rstrip('/')}/{self.package}_{self.full_version}.dsc"


Source = Annotated[GitSource | DscSource, Field(discriminator="kind")]


# ============================================================================
# Source Tree Edits
# ============================================================================


class DebianReleaseCondition(BaseModel):
    """Apply an edit only on Debian releases up to max_release."""

    max_release: int

    def matches(self, release: int | None) -> bool:
        return release is not None and release <= self.max_release


class _Edit(BaseModel):
    when: DebianReleaseCondition | None = None


class AppendLine(_Edit):
    """Append a line to a file in the checkout."""

    kind: Literal["append-line"] = "append-line"
    path: str
    line: str


class ApplyPatch(_Edit):
    """Apply a single patch file from the recipe directory."""

    kind: Literal["patch"] = "patch"
    patch: str
    strip: int = 1


class QuiltPush(_Edit):
    """Push a whole quilt series from the recipe directory."""

    kind: Literal["quilt"] = "quilt"
    patches_dir: str = "patch"


class CopyTree(_Edit):
    """Copy a directory from the recipe directory into the checkout."""

    kind: Literal["copy-tree"] = "copy-tree"
    source: str


class GitCheckout(_Edit):
    """Check out a pinned commit on a new local branch."""

    kind: Literal["git-checkout"] = "git-checkout"
    branch: str
    commit: str
    force: bool = True


class DeleteLines(_Edit):
    """Delete lines matching a regular expression."""

    kind: Literal["delete-lines"] = "delete-lines"
    path: str
    pattern: str


class Substitute(_Edit):
    """Replace the first match of a regular expression on every line."""

    kind: Literal["substitute"] = "substitute"
    path: str
    pattern: str
    replacement: str


Edit = Annotated[
    AppendLine | ApplyPatch | QuiltPush | CopyTree | GitCheckout | DeleteLines | Substitute,
    Field(discriminator="kind"),
]


# ============================================================================
# Recipe Models
# ============================================================================


class DpkgOptions(BaseModel):
    """Per-recipe differences in the dpkg-buildpackage invocation."""

    skip_build_deps_on_cross: bool = Field(
        default=True, description="Pass -d when cross building"
    )
    admindir_on_cross: bool = Field(
        default=False, description="Pass --admindir when cross building"
    )
    profiles_on_cross: list[str] = Field(default_factory=lambda: ["cross", "nocheck"])


class Recipe(BaseModel):
    """A packaging recipe: fetch, patch, build, collect."""

    name: str
    description: str = ""
    version: str
    source: Source
    edits: list[Edit] = Field(default_factory=list)
    main_target: str = Field(..., description="Artifact name template with {arch}")
    derived_targets: list[str] = Field(default_factory=list)
    dpkg: DpkgOptions = Field(default_factory=DpkgOptions)
    directory: str | None = Field(
        default=None, description="Recipe directory relative to the recipe root"
    )

    @property
    def recipe_path(self) -> str:
        return self.directory or self.name

    @property
    def checkout_dir(self) -> str:
        return self.source.checkout_dir

    def main_artifact(self, arch: str) -> str:
        return self.main_target.format(arch=arch)

    def derived_artifacts(self, arch: str) -> list[str]:
        return [t.format(arch=arch) for t in self.derived_targets]

    def artifacts(self, arch: str) -> list[str]:
        """Main artifact first, then derived ones in declaration order."""
        return [self.main_artifact(arch)] + self.derived_artifacts(arch)


# ============================================================================
# Build Result Models
# ============================================================================


class StepResult(BaseModel):
    """Outcome of one recipe step."""

    kind: StepKind
    description: str
    commands: list[str] = Field(default_factory=list)
    success: bool = True
    duration_ms: float = 0.0


class BuildResult(BaseModel):
    """Outcome of building one recipe."""

    recipe: str
    state: BuildState = BuildState.PLANNED
    cross_build: bool = False
    arch: str
    steps: list[StepResult] = Field(default_factory=list)
    artifacts: list[str] = Field(default_factory=list)
    failed_step: StepKind | None = None
    error: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


# ============================================================================
# Validation Models
# ============================================================================


class ValidationIssue(BaseModel):
    """A single schema violation."""

    path: str = Field(..., description="Slash separated location in the instance")
    message: str


class ValidationResult(BaseModel):
    """Result of validating a configuration instance."""

    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
