from fastapi import FastAPI

from relcrawl.api.routers import create_exports_router, create_systems_router
from relcrawl.container import ENV, Container


def create_app(container: Container = None) -> FastAPI:
    """Return the FastAPI application with control endpoints.

    - `POST /exports` starts an export in the background.
    - `GET /exports/status` reports progress of the current/last export.
    """
    container = container or Container()

    app = FastAPI(title="RelCrawl", version="0.1.0")
    app.state.container = container

    app.include_router(
        create_exports_router(
            export_service=container.export_service(),
            export_tracker=container.export_tracker(),
        )
    )
    app.include_router(create_systems_router(ENV))
    return app
