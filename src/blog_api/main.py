"""FastAPI application entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from blog_api.authors import AuthorService
from blog_api.config import Settings
from blog_api.errors import BlogError
from blog_api.routes import blog_error_handler
from blog_api.routes import router as posts_router
from blog_api.seed import load_seed_file, seed_store
from blog_api.store import MemoryPostStore
from blog_api.telemetry import (
    add_trace_context,
    emit_to_otel_logs,
    init_telemetry,
    shutdown_telemetry,
)

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_trace_context,  # type: ignore[list-item]
        emit_to_otel_logs,  # type: ignore[list-item]
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(),
    ],
)

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_telemetry()
    settings = Settings()  # type: ignore[call-arg]
    app.state.settings = settings
    app.state.authors = AuthorService(admin_password=settings.admin_password)
    app.state.store = MemoryPostStore(spam_phrases=settings.spam_phrase_list)

    if settings.seed_file:
        await log.ainfo("seeding posts", seed_file=settings.seed_file)
        data = load_seed_file(settings.seed_file)
        await seed_store(app.state.store, app.state.authors, data)

    await log.ainfo("service started", port=settings.port)
    yield

    await log.ainfo("service stopped")
    shutdown_telemetry()


app = FastAPI(title="Blog API", lifespan=lifespan)
app.include_router(posts_router)
app.add_exception_handler(BlogError, blog_error_handler)  # type: ignore[arg-type]
FastAPIInstrumentor.instrument_app(app)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    """Console entrypoint: serve the app with uvicorn."""
    settings = Settings()  # type: ignore[call-arg]
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
