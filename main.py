"""
Shop API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from api.routes import router as api_router
from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.helpers import ensure_demo_product
from database.session import build_engine, build_session_factory, init_models

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Shop API",
        version="1.0.0",
        description="Product catalog, shopping cart and token authentication.",
    )

    # Process-wide, read-only after construction.
    engine = build_engine(settings.database_url, echo=settings.db_echo)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_signer = TokenSigner(settings.jwt_secret, settings.jwt_expiry_seconds)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    if settings.jwt_expiry_seconds is None:
        logger.warning("JWT_EXPIRY_SECONDS not set — issued tokens never expire")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(api_router)

    @app.on_event("startup")
    async def on_startup():
        logger.info("Creating tables…")
        await init_models(engine)

        if settings.seed_catalog:
            async with app.state.session_factory() as session:
                await ensure_demo_product(session)
                await session.commit()

        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

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
