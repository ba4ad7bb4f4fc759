"""Core library modules for building packages."""

from sonicpkg.core.models import (
    BuildResult,
    BuildState,
    Recipe,
    StepKind,
    StepResult,
    ValidationResult,
)

__all__ = [
    "BuildResult",
    "BuildState",
    "Recipe",
    "StepKind",
    "StepResult",
    "ValidationResult",
]
