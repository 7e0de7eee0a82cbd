import logging

from taskboard import config

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from taskboard.api.base import api_router  # noqa: E402
from taskboard.db import init_models  # noqa: E402
from taskboard.db.session import log_pool_stats  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    log_pool_stats("startup")
    logger.info("Taskboard backend started")
    yield


app = FastAPI(
    title="Taskboard Backend API",
    description="Backend API for Taskboard - task tracking with a statistics dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Taskboard Backend API",
        "docs": "/docs",
        "version": "1.0.0"
    }
