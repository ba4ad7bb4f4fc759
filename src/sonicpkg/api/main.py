"""FastAPI application for sonicpkg."""

import uvicorn
from fastapi import FastAPI

from sonicpkg import __version__
from sonicpkg.api.routers import dns, health, recipes

# Create FastAPI app
app = FastAPI(
    title="sonicpkg API",
    description="SONiC packaging recipes and DNS settings validation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include routers
app.include_router(health.router, prefix="/api/v1/health", tags=["Health"])
app.include_router(dns.router, prefix="/api/v1/dns", tags=["DNS"])
app.include_router(recipes.router, prefix="/api/v1/recipes", tags=["Recipes"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "sonicpkg API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/api/v1")
async def api_info():
    """API version info."""
    return {
        "version": "v1",
        "endpoints": [
            "/api/v1/health",
            "/api/v1/dns",
            "/api/v1/recipes",
        ],
    }


def run():
    """Run the API server."""
    uvicorn.run(
        "sonicpkg.api.main:app",
        host="0.0.0.0",
        port=8080,
    )


if __name__ == "__main__":
    run()
