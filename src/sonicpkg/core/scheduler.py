"""Target resolution and sequencing across recipes."""

import logging
from datetime import datetime

from sonicpkg.core.base import BaseRunner
from sonicpkg.core.builder import RecipeBuilder
from sonicpkg.core.config import BuildEnvironment
from sonicpkg.core.models import BuildResult, BuildState, Recipe
from sonicpkg.core.shell import CommandRunner
from sonicpkg.recipes import RecipeRegistry

logger = logging.getLogger(__name__)


class BuildScheduler:
    """
    Builds targets the way the $(DEST)/% rules do.

    A main artifact is built by running its recipe unless it already exists
    in DEST. Derived artifacts depend on the main one and have no recipe of
    their own, so they are satisfied as soon as the main artifact exists.
    Recipes run one after another; the first failure stops the run.
    """

    def __init__(
        self,
        registry: RecipeRegistry,
        env: BuildEnvironment,
        runner: BaseRunner | None = None,
        force: bool = False,
    ):
        self.registry = registry
        self.env = env
        self.runner = runner or CommandRunner()
        self.force = force
        self.results: list[BuildResult] = []

    def resolve(self, target: str) -> Recipe:
        """Map a recipe name or artifact file name to its recipe."""
        return self.registry.for_target(target, self.env.configured_arch)

    def is_up_to_date(self, recipe: Recipe) -> bool:
        main = self.env.dest / recipe.main_artifact(self.env.configured_arch)
        return main.exists()

    async def build(self, targets: list[str]) -> list[BuildResult]:
        """Build each target's recipe at most once, in the order given."""
        recipes: list[Recipe] = []
        for target in targets:
            recipe = self.resolve(target)
            if recipe not in recipes:
                recipes.append(recipe)

        for recipe in recipes:
            if not self.force and self.is_up_to_date(recipe):
                logger.info(f"{recipe.main_artifact(self.env.configured_arch)} is up to date")
                now = datetime.utcnow()
                self.results.append(
                    BuildResult(
                        recipe=recipe.name,
                        state=BuildState.SKIPPED,
                        cross_build=self.env.is_cross_build,
                        arch=self.env.configured_arch,
                        artifacts=recipe.artifacts(self.env.configured_arch),
                        started_at=now,
                        completed_at=now,
                    )
                )
                continue

            builder = RecipeBuilder(recipe, self.env, self.runner)
            try:
                await builder.build()
            finally:
                if builder.result is not None:
                    self.results.append(builder.result)

        return self.results
