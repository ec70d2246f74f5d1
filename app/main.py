# app/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.domain.common.scheduler import TurnScheduler
from app.settings import Settings, get_settings
from app.store.registry import SessionRegistry
from app.transport.admin import router as admin_router
from app.transport.ws import on_timer_fired, router as ws_router
from app.transport.ws_manager import WSManager
from app.util.logging import setup_logging

logger = logging.getLogger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    scheduler = TurnScheduler(
        lambda session_id, kind: on_timer_fired(app, session_id, kind),
        drawing_duration_sec=settings.drawing_duration_sec,
        preparation_delay_sec=settings.preparation_delay_sec,
    )
    app.state.scheduler = scheduler
    app.state.registry = SessionRegistry(scheduler)
    app.state.wsman = WSManager()
    logger.info(
        "%s ready (drawing %dms, preparation %dms, %d rounds)",
        settings.APP_NAME,
        settings.DRAWING_DURATION_MS,
        settings.PREPARATION_DELAY_MS,
        settings.MAX_ROUNDS,
    )


async def _shutdown(app: FastAPI, settings: Settings) -> None:
    await app.state.scheduler.cancel_all()
    logger.info("%s stopped, %d sessions dropped", settings.APP_NAME, len(app.state.registry))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await _startup(app, settings)
        yield
        await _shutdown(app, settings)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings

    allowed_origins = [o.strip() for o in settings.WS_ALLOWED_ORIGINS.split(",") if o.strip()]
    if "null" not in allowed_origins:
        allowed_origins.append("null")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"ok": True, "sessions": len(app.state.registry)}

    app.include_router(ws_router)
    app.include_router(admin_router)
    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR or None)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


app = create_app()
