"""Recipe execution: clean, fetch, prepare, build, collect."""

import logging
import re
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable

from sonicpkg.core.base import BaseRunner
from sonicpkg.core.config import BuildEnvironment
from sonicpkg.core.dpkg import buildpackage_command
from sonicpkg.core.exceptions import BuildError, CommandError
from sonicpkg.core.models import (
    AppendLine,
    ApplyPatch,
    BuildResult,
    BuildState,
    CopyTree,
    DeleteLines,
    DscSource,
    Edit,
    GitCheckout,
    GitSource,
    QuiltPush,
    Recipe,
    StepKind,
    StepResult,
    Substitute,
)
from sonicpkg.core.shell import CommandRunner

logger = logging.getLogger(__name__)

StepAction = Callable[[StepResult], Awaitable[None]]


class RecipeBuilder:
    """
    Runs a single recipe.

    The sequence is strictly linear and fail-fast: the first failing command
    or step marks the build failed and raises BuildError. Nothing is retried
    and nothing already done is undone.
    """

    def __init__(
        self,
        recipe: Recipe,
        env: BuildEnvironment,
        runner: BaseRunner | None = None,
    ):
        self.recipe = recipe
        self.env = env
        self.runner = runner or CommandRunner()
        self.recipe_dir = env.recipe_dir(recipe.recipe_path)
        self.checkout = self.recipe_dir / recipe.checkout_dir

        self._result: BuildResult | None = None
        self._release: int | None = None
        self._release_known = False

    @property
    def result(self) -> BuildResult | None:
        return self._result

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    async def build(self) -> BuildResult:
        """Run every step in order and collect the artifacts into DEST."""
        self._result = BuildResult(
            recipe=self.recipe.name,
            state=BuildState.IN_PROGRESS,
            cross_build=self.env.is_cross_build,
            arch=self.env.configured_arch,
            started_at=datetime.utcnow(),
        )
        logger.info(
            f"Building {self.recipe.name} {self.recipe.version} "
            f"({'cross ' + self.env.configured_arch if self.env.is_cross_build else 'native'})"
        )

        try:
            for kind, description, action in self._steps():
                await self._run_step(kind, description, action)

            self._result.artifacts = self.recipe.artifacts(self.env.configured_arch)
            self._result.state = BuildState.COMPLETED

        except BuildError as e:
            self._result.state = BuildState.FAILED
            self._result.error = str(e)
            logger.error(f"{self.recipe.name}: {e}")
            raise

        finally:
            self._result.completed_at = datetime.utcnow()

        return self._result

    async def plan(self) -> list[StepResult]:
        """Describe the steps and commands a build would run, touching nothing."""
        planner = RecipeBuilder(self.recipe, self.env, CommandRunner(dry_run=True))
        result = await planner.build()
        return result.steps

    def _steps(self) -> list[tuple[StepKind, str, StepAction]]:
        return [
            (StepKind.CLEAN, f"Remove {self.recipe.checkout_dir}", self._clean),
            (StepKind.FETCH, f"Obtain {self.recipe.name} source", self._fetch),
            (StepKind.PREPARE, "Apply source tree edits", self._prepare),
            (StepKind.BUILD, "Build Debian packages", self._build),
            (StepKind.COLLECT, f"Move artifacts to {self.env.dest}", self._collect),
        ]

    async def _run_step(self, kind: StepKind, description: str, action: StepAction) -> None:
        step = StepResult(kind=kind, description=description)
        self._result.steps.append(step)
        logger.debug(f"{self.recipe.name}: {kind.value}: {description}")

        start = time.perf_counter()
        try:
            await action(step)
        except BuildError as e:
            step.success = False
            self._result.failed_step = kind
            if e.step is None:
                e.step = kind.value
            raise
        except OSError as e:
            step.success = False
            self._result.failed_step = kind
            raise BuildError(f"{kind.value} failed: {e}", step=kind.value) from e
        finally:
            step.duration_ms = (time.perf_counter() - start) * 1000

    async def _exec(
        self,
        step: StepResult,
        argv: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> None:
        await self.runner.run(argv, cwd, env=env)
        step.commands.append(str(self.runner.history[-1]))

    # ========================================================================
    # Steps
    # ========================================================================

    async def _clean(self, step: StepResult) -> None:
        step.commands.append(f"rm -fr ./{self.recipe.checkout_dir}")
        if self.dry_run:
            return
        if self.checkout.is_symlink() or self.checkout.is_file():
            self.checkout.unlink()
        elif self.checkout.exists():
            shutil.rmtree(self.checkout)

    async def _fetch(self, step: StepResult) -> None:
        source = self.recipe.source
        if isinstance(source, GitSource):
            argv = ["git", "clone"]
            if source.depth:
                argv += ["--depth", str(source.depth)]
            if source.branch:
                argv += ["-b", source.branch]
            argv += [source.url, source.checkout_dir]
        elif isinstance(source, DscSource):
            argv = ["dget", "-u", source.dsc_url]
        else:
            raise BuildError(f"Unsupported source: {source!r}")

        await self._exec(step, argv, self.recipe_dir)

    async def _prepare(self, step: StepResult) -> None:
        for edit in self.recipe.edits:
            note = ""
            if edit.when is not None:
                if self.dry_run:
                    # Release is only known on the build host
                    note = f" (when debian <= {edit.when.max_release})"
                else:
                    release = await self._debian_release()
                    if not edit.when.matches(release):
                        logger.debug(
                            f"Skipping {edit.kind} edit: release {release} "
                            f"> {edit.when.max_release} or unknown"
                        )
                        continue

            first = len(step.commands)
            await self._apply_edit(step, edit)
            if note:
                step.commands[first:] = [c + note for c in step.commands[first:]]

    async def _apply_edit(self, step: StepResult, edit: Edit) -> None:
        if isinstance(edit, AppendLine):
            step.commands.append(f"echo '{edit.line}' >> {edit.path}")
            if not self.dry_run:
                with open(self.checkout / edit.path, "a") as f:
                    f.write(edit.line + "\n")

        elif isinstance(edit, ApplyPatch):
            patch_path = f"../{edit.patch}"
            await self._exec(
                step, ["patch", f"-p{edit.strip}", "-i", patch_path], self.checkout
            )

        elif isinstance(edit, QuiltPush):
            await self._exec(
                step,
                ["quilt", "push", "-a"],
                self.checkout,
                env={"QUILT_PATCHES": f"../{edit.patches_dir}"},
            )

        elif isinstance(edit, CopyTree):
            step.commands.append(f"cp -r {edit.source} {self.recipe.checkout_dir}")
            if not self.dry_run:
                src = self.recipe_dir / edit.source
                shutil.copytree(src, self.checkout / src.name, dirs_exist_ok=True)

        elif isinstance(edit, GitCheckout):
            argv = ["git", "checkout", "-b", edit.branch]
            if edit.force:
                argv.append("-f")
            argv.append(edit.commit)
            await self._exec(step, argv, self.checkout)

        elif isinstance(edit, DeleteLines):
            step.commands.append(f"sed -i -e '/{edit.pattern}/d' {edit.path}")
            if not self.dry_run:
                pattern = re.compile(edit.pattern)
                self._rewrite_lines(
                    edit.path, lambda line: None if pattern.search(line) else line
                )

        elif isinstance(edit, Substitute):
            step.commands.append(
                f"sed -i -e 's/{edit.pattern}/{edit.replacement}/' {edit.path}"
            )
            if not self.dry_run:
                pattern = re.compile(edit.pattern)
                self._rewrite_lines(
                    edit.path,
                    lambda line: pattern.sub(lambda _: edit.replacement, line, count=1),
                )

    async def _build(self, step: StepResult) -> None:
        await self._exec(step, buildpackage_command(self.recipe, self.env), self.checkout)

    async def _collect(self, step: StepResult) -> None:
        dest = self.env.dest
        names = self.recipe.artifacts(self.env.configured_arch)
        step.commands.append(f"mv {' '.join(names)} {dest}/")
        if self.dry_run:
            return

        dest.mkdir(parents=True, exist_ok=True)
        for name in names:
            src = self.recipe_dir / name
            if not src.exists():
                raise BuildError(f"Artifact {name} was not produced", step=StepKind.COLLECT.value)
            shutil.move(str(src), str(dest / name))
            logger.info(f"Collected {name}")

    # ========================================================================
    # Helpers
    # ========================================================================

    def _rewrite_lines(self, relative: str, transform: Callable[[str], str | None]) -> None:
        path = self.checkout / relative
        lines = path.read_text().splitlines(keepends=True)
        out = []
        for line in lines:
            body = line.rstrip("\n")
            new = transform(body)
            if new is None:
                continue
            out.append(new + line[len(body):])
        path.write_text("".join(out))

    async def _debian_release(self) -> int | None:
        """Major Debian release of the build host, as lsb_release reports it."""
        if self._release_known:
            return self._release

        self._release_known = True
        try:
            result = await self.runner.run(["lsb_release", "-r"], self.recipe_dir, capture=True)
        except CommandError as e:
            logger.warning(f"Could not determine Debian release: {e}")
            return None

        self._release = parse_release(result.stdout)
        return self._release


def parse_release(output: str) -> int | None:
    """Parse `lsb_release -r` output such as 'Release:\\t10' into 10."""
    parts = output.split()
    if not parts:
        return None
    try:
        return int(parts[-1])
    except ValueError:
        return None
