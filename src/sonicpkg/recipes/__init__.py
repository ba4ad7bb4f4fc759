"""Packaging recipes and their registry."""

from functools import lru_cache

from sonicpkg.core.exceptions import RecipeNotFoundError, UnknownTargetError
from sonicpkg.core.models import Recipe


class RecipeRegistry:
    """Looks recipes up by name or by the artifacts they produce."""

    def __init__(self, recipes: list[Recipe] | None = None):
        self._recipes: dict[str, Recipe] = {}
        for recipe in recipes or []:
            self.register(recipe)

    def register(self, recipe: Recipe) -> None:
        if recipe.name in self._recipes:
            raise ValueError(f"Recipe already registered: {recipe.name}")
        self._recipes[recipe.name] = recipe

    def names(self) -> list[str]:
        return sorted(self._recipes)

    def all(self) -> list[Recipe]:
        return [self._recipes[name] for name in self.names()]

    def get(self, name: str) -> Recipe:
        try:
            return self._recipes[name]
        except KeyError:
            raise RecipeNotFoundError(f"No recipe named {name!r}") from None

    def for_target(self, target: str, arch: str) -> Recipe:
        """Resolve a recipe name or artifact file name (optionally under DEST)."""
        name = target.rsplit("/", 1)[-1]
        if name in self._recipes:
            return self._recipes[name]

        for recipe in self._recipes.values():
            if name in recipe.artifacts(arch):
                return recipe

        raise UnknownTargetError(f"No recipe produces {target!r} for {arch}")


@lru_cache
def get_registry() -> RecipeRegistry:
    """Registry with the bundled recipes."""
    from sonicpkg.recipes import libyang3, libyang3_py3, psample

    return RecipeRegistry([libyang3.RECIPE, libyang3_py3.RECIPE, psample.RECIPE])
