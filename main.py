"""
FaithConnect Members API — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as health_router
from auth.routes import router as members_router
from config.settings import config
from database.session import create_tables, dispose_engine, wait_for_database

logging.basicConfig(
    level=logging.DEBUG if config.debug else config.log_level.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncpg", "httpx", "httpcore"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="FaithConnect Members API",
        version="1.0.0",
        description="Member sign-up, login and profile for the FaithConnect app.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(members_router, prefix="/members")
    app.include_router(health_router)

    @app.on_event("startup")
    async def on_startup():
        logger.info("Connecting to database…")
        await wait_for_database()
        if config.db_create_tables:
            await create_tables()
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await dispose_engine()
        logger.info("Database pool closed.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
