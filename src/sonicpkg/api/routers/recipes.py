"""Recipe API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from sonicpkg.core.builder import RecipeBuilder
from sonicpkg.core.config import BuildEnvironment, get_environment
from sonicpkg.core.exceptions import RecipeNotFoundError
from sonicpkg.core.models import Recipe, StepResult
from sonicpkg.recipes import RecipeRegistry, get_registry

router = APIRouter()


def _lookup(name: str, registry: RecipeRegistry) -> Recipe:
    try:
        return registry.get(name)
    except RecipeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("")
async def list_recipes(
    registry: RecipeRegistry = Depends(get_registry),
    env: BuildEnvironment = Depends(get_environment),
):
    """List recipes with their artifacts for the configured arch."""
    return {
        "arch": env.configured_arch,
        "recipes": [
            {
                "name": r.name,
                "version": r.version,
                "source": r.source.kind,
                "artifacts": r.artifacts(env.configured_arch),
            }
            for r in registry.all()
        ],
    }


@router.get("/{name}")
async def get_recipe(
    name: str,
    registry: RecipeRegistry = Depends(get_registry),
    env: BuildEnvironment = Depends(get_environment),
):
    """Get a recipe definition."""
    recipe = _lookup(name, registry)
    data = recipe.model_dump(mode="json")
    data["artifacts"] = recipe.artifacts(env.configured_arch)
    return data


@router.get("/{name}/plan", response_model=list[StepResult])
async def plan_recipe(
    name: str,
    registry: RecipeRegistry = Depends(get_registry),
    env: BuildEnvironment = Depends(get_environment),
):
    """Steps and commands a build of this recipe would run."""
    recipe = _lookup(name, registry)
    return await RecipeBuilder(recipe, env).plan()
