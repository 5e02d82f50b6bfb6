import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from fxrates.api.convert import router as convert_router
from fxrates.core.config import settings
from fxrates.core.wiring import get_conversion_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    yield
    # nothing to close unless a request built the shared service
    if get_conversion_service.cache_info().currsize == 0:
        return
    close = getattr(get_conversion_service().loader, "close", None)
    if close is not None:
        close()


app = FastAPI(title="FX Rates API", version="0.1.0", lifespan=lifespan)

cors_origins = settings.cors_origins.split(",")


class TimingMiddleware:
    """Logs method, path, status and duration of every HTTP request."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        response_status = None

        async def capture_status(message):
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, capture_status)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"TIMING: {scope['method']} {scope['path']} -> {response_status} in {elapsed_ms:.1f}ms"
            )


app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(convert_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
