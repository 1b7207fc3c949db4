"""Anecdotes - FastAPI app entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from anecdotes.core.config import Settings, get_settings
from anecdotes.core.exception_handlers import setup_exception_handlers
from anecdotes.core.logging import setup_logging
from anecdotes.core.middlewares import setup_middlewares
from anecdotes.db.base import Base
from anecdotes.db.session import make_engine, make_sessionmaker
from anecdotes.routers import auth, posts, stats
from anecdotes.services.posts import PostAuthorizer


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with app.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready at {}", app.state.engine.url.render_as_string(hide_password=True))

    yield

    await app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Personal notes with cookie-based auth",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.engine = make_engine(settings.database_url, echo=settings.debug)
    app.state.sessionmaker = make_sessionmaker(app.state.engine)
    app.state.post_authorizer = PostAuthorizer(edit_window=settings.post_edit_window)

    setup_middlewares(app, settings)
    setup_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(stats.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
