import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from board.config import settings
from board.database import create_tables, engine
from board.middleware import RequestLoggingMiddleware
from board.routers import graphql_app

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    logger.info("Starting Post Board API %s (%s)", VERSION, settings.APP_ENV)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()
        logger.info("Database tables ensured")
    yield
    # Shutdown
    await engine.dispose()
    logger.info("Post Board API stopped")

app = FastAPI(
    title="Post Board API",
    description="GraphQL API for posts and comments with password-gated edits",
    version=VERSION,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(graphql_app.router, prefix=settings.GRAPHQL_PATH)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}
