import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from board.config import settings
from board.database import init_db
from board.log_config import setup_logging
from board.middleware import TimingMiddleware
from board.routers import articles, comments, metrics, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_db()
    logger.info("Board API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Board API",
    description="Discussion board: articles, comments and hashtag search",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(articles.router)
app.include_router(comments.router)
app.include_router(users.router)
app.include_router(metrics.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
