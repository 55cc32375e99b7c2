"""
Account service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from auth.jwt import TokenIssuer
from auth.routes import router as auth_router
from config.settings import Settings, get_settings
from database.session import init_models
from users.routes import router as users_router

config = get_settings()

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio", "httpx", "httpcore"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Raises ``ConfigurationError`` when no signing secret is configured, so
    a misconfigured process never starts serving.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Account Service",
        version="1.0.0",
        description="Account creation, login and session cookies.",
    )
    app.state.settings = settings
    app.state.token_issuer = TokenIssuer.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(users_router, prefix="/users")

    @app.on_event("startup")
    async def on_startup():
        if settings.create_tables:
            logger.info("Ensuring database tables exist…")
            await init_models()
        logger.info("Application ready to accept requests.")

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
