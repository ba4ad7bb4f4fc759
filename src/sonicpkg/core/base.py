"""Abstract base classes defining engine interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CommandResult:
    """Outcome of an external command."""

    argv: list[str]
    cwd: str
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


@dataclass
class CommandRecord:
    """A command as it was issued, for plans and reports."""

    argv: list[str]
    cwd: str
    env: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        prefix = " ".join(f"{k}={v}" for k, v in self.env.items())
        cmd = " ".join(self.argv)
        return f"{prefix} {cmd}" if prefix else cmd


class BaseRunner(ABC):
    """Abstract base class for executing external build commands."""

    dry_run: bool = False

    def __init__(self) -> None:
        self.history: list[CommandRecord] = []

    @abstractmethod
    async def run(
        self,
        argv: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """
        Run a command to completion.

        Raises CommandError when the command exits non-zero.
        """
        ...

    def _record(self, argv: list[str], cwd: Path, env: dict[str, str] | None) -> CommandRecord:
        record = CommandRecord(argv=list(argv), cwd=str(cwd), env=dict(env or {}))
        self.history.append(record)
        return record
