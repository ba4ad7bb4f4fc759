"""Health check API endpoints."""

from fastapi import APIRouter

from sonicpkg.recipes import get_registry
from sonicpkg.schema.yang import load_schema_text

router = APIRouter()


@router.get("")
async def health_check():
    """Check that recipes and bundled schemas load."""
    return {
        "status": "healthy",
        "recipes": len(get_registry().names()),
        "schema_loaded": bool(load_schema_text()),
    }


@router.get("/live")
async def liveness():
    """Liveness probe."""
    return {"status": "alive"}
