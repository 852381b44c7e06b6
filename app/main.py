"""FastAPI app entry point."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, settings as default_settings
from app.core.openapi import DOCS_URL, configure_openapi
from app.db.session import connect, create_client, disconnect, get_collection
from app.routers import subscribers
from app.services.subscriber_store import SubscriberStore

logger = logging.getLogger(__name__)


async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body') or 'body'}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": f"Invalid request: {problems}"},
    )


def create_app(store: SubscriberStore | None = None, app_settings: Settings | None = None) -> FastAPI:
    """Build FastAPI application; a store passed in replaces the MongoDB connection."""

    app_settings = app_settings or default_settings
    app = FastAPI(docs_url=DOCS_URL, openapi_url=f"{DOCS_URL}/openapi.json", redoc_url=None)
    configure_openapi(app, app_settings)
    app.state.store = store
    app.state.client = None
    app.state.connect_task = None

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(subscribers.router)

    static_dir = app_settings.static_dir
    app.mount("/static", StaticFiles(directory=static_dir, check_dir=False), name="static")

    @app.on_event("startup")
    async def _startup() -> None:
        if app.state.store is not None:
            return
        client = create_client(app_settings.database_url, timeout_ms=app_settings.database_timeout_ms)
        app.state.client = client
        app.state.store = SubscriberStore(
            get_collection(
                client,
                database_name=app_settings.database_name,
                collection_name=app_settings.collection_name,
            )
        )
        # Readiness is only logged; requests are served while the ping runs.
        app.state.connect_task = asyncio.create_task(connect(client))

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        task = app.state.connect_task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        app.state.connect_task = None
        if app.state.client is not None:
            disconnect(app.state.client)
            app.state.client = None

    @app.get("/", include_in_schema=False)
    async def homepage() -> FileResponse:
        return FileResponse(static_dir / "index.html")

    @app.get("/healthz", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=default_settings.log_level)
    logger.info("Starting Subscriber API on %s:%s", default_settings.host, default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
