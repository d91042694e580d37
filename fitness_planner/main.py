"""FastAPI application entry point."""
from fastapi import FastAPI

from fitness_planner.logging_config import configure_logging
from fitness_planner.routers import health, pages, plans


configure_logging()

app = FastAPI(title="Muscle Den AI Fitness Planner")


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(pages.router)
app.include_router(health.router)
app.include_router(plans.router)


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    from fitness_planner.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "fitness_planner.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
