"""Subprocess execution for recipe steps."""

import asyncio
import logging
import os
from pathlib import Path

from sonicpkg.core.base import BaseRunner, CommandResult
from sonicpkg.core.exceptions import CommandError

logger = logging.getLogger(__name__)


class CommandRunner(BaseRunner):
    """Runs commands with asyncio subprocesses, failing on non-zero exit."""

    def __init__(self, dry_run: bool = False):
        super().__init__()
        self.dry_run = dry_run

    async def run(
        self,
        argv: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        record = self._record(argv, cwd, env)

        if self.dry_run:
            logger.info(f"[dry-run] ({cwd}) {record}")
            return CommandResult(argv=list(argv), cwd=str(cwd))

        logger.info(f"({cwd}) {record}")

        proc_env = None
        if env:
            proc_env = {**os.environ, **env}

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(cwd),
                env=proc_env,
                stdout=asyncio.subprocess.PIPE if capture else None,
                stderr=asyncio.subprocess.PIPE if capture else None,
            )
        except FileNotFoundError as e:
            logger.error(f"Command not found: {argv[0]}")
            raise CommandError(argv, 127, str(e)) from e

        stdout, stderr = await proc.communicate()
        result = CommandResult(
            argv=list(argv),
            cwd=str(cwd),
            returncode=proc.returncode or 0,
            stdout=stdout.decode() if stdout else "",
            stderr=stderr.decode() if stderr else "",
        )

        if result.returncode != 0:
            logger.error(f"'{argv[0]}' exited with {result.returncode}")
            if result.stderr:
                logger.error(result.stderr.rstrip())
            raise CommandError(argv, result.returncode, result.stderr)

        return result
