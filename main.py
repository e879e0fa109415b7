import json
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.errors import register_exception_handlers
from core.log_config import configure_logging, log_requests
from db import dispose_engine
from api.auth.views import router as auth_router
from api.rooms.views import router as rooms_router
from api.catalog.views import router as catalog_router
from api.inventory.views import router as inventory_router
from api.reports.views import router as reports_router
from api.users.views import router as users_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8080",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting inventory API (%s)", settings.APP_ENV)
    yield
    # The engine is created lazily by the first request; release its pool here
    await dispose_engine()


app = FastAPI(
    title="Classroom Inventory API",
    description="Inventory of furniture, equipment and fixtures per classroom",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api")
app.include_router(rooms_router, prefix="/api")
app.include_router(catalog_router, prefix="/api")
app.include_router(inventory_router, prefix="/api")
app.include_router(reports_router, prefix="/api")
app.include_router(users_router, prefix="/api")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": app.version}
