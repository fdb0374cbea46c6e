"""
Personal-finance backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.tokens import TokenSigner
from config.settings import Settings
from database.session import build_engine, build_session_factory, init_models

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            logger.info("Ensuring database tables exist…")
            await init_models(engine)
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Personal Finance API",
        version="1.0.0",
        description="Authentication and session issuance for the mobile app.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_signer = TokenSigner(
        secret=settings.jwt_secret,
        expiry_seconds=settings.jwt_expiry_seconds,
    )

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
    app.include_router(auth_router, prefix="/api/auth")

    @app.get("/health")
    async def health() -> dict:
        return {"ok": True, "ts": datetime.now(timezone.utc).isoformat()}

    return app


if __name__ == "__main__":
    settings = Settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
