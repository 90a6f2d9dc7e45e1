"""FastAPI application entrypoint."""

import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from smart_npcs import __version__
from smart_npcs.api.catalog import actions_router, memory_templates_router
from smart_npcs.api.characters import router as characters_router
from smart_npcs.api.conversations import router as conversations_router
from smart_npcs.api.health import router as health_router
from smart_npcs.api.rooms import router as rooms_router
from smart_npcs.config import settings
from smart_npcs.core.logging import get_logger, setup_logging
from smart_npcs.db.database import engine as db_engine
from smart_npcs.db.models import Base
from smart_npcs.services.ai import get_ai_provider
from smart_npcs.services.response_service import ResponseConfig, ResponseService
from smart_npcs.services.turn_service import TurnService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # 난수원: 게이트/템플릿/상태가 모두 공유
    rng = random.Random(settings.RANDOM_SEED)
    app.state.rng = rng

    # AI Provider 및 ResponseService 초기화
    logger.info("Initializing AI provider...")
    ai_provider = get_ai_provider()
    app.state.ai_provider = ai_provider
    response_service = ResponseService(
        ai_provider,
        rng=rng,
        config=ResponseConfig(
            max_tokens=settings.AI_MAX_TOKENS,
            temperature=settings.AI_TEMPERATURE,
            history_window=settings.HISTORY_WINDOW,
        ),
    )
    app.state.response_service = response_service
    logger.info(
        "AI provider initialized: %s",
        ai_provider.name if ai_provider is not None else "templates only",
    )

    # TurnService 초기화
    app.state.turn_service = TurnService(response_service, rng=rng)
    logger.info("TurnService initialized.")

    yield

    logger.info("Shutting down...")


app = FastAPI(title="Smart NPCs", version=__version__, lifespan=lifespan)

app.include_router(health_router)
app.include_router(characters_router)
app.include_router(rooms_router)
app.include_router(conversations_router)
app.include_router(actions_router)
app.include_router(memory_templates_router)
