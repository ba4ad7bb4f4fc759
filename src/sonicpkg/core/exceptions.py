"""Exceptions raised by the recipe engine."""


class SonicPkgError(Exception):
    """Base exception for sonicpkg errors."""


class BuildError(SonicPkgError):
    """A build step failed."""

    def __init__(self, message: str, step: str | None = None):
        super().__init__(message)
        self.step = step


class CommandError(BuildError):
    """An external command exited non-zero."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(self.argv)}' failed with exit code {returncode}"
        if stderr.strip():
            message += f": {stderr.strip().splitlines()[-1]}"
        super().__init__(message)


class RecipeNotFoundError(SonicPkgError):
    """No recipe registered under the requested name."""


class UnknownTargetError(SonicPkgError):
    """Target is neither a recipe name nor an artifact of one."""
