"""Request logging and CORS."""
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from anecdotes.core.config import Settings


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", uuid4().hex[:8])
        start_time = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            duration = time.perf_counter() - start_time
            logger.info(
                "{} {} -> {} in {:.3f}s",
                request.method,
                request.url.path,
                response.status_code,
                duration,
            )

        response.headers["X-Request-ID"] = request_id
        return response


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    # Cookie auth needs credentials allowed for the frontend origin
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(LoggingMiddleware)
