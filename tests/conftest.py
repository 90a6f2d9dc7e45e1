"""Shared test fixtures."""

import random
from typing import Callable, Iterable, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event as sa_event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from smart_npcs.api.catalog import actions_router, memory_templates_router
from smart_npcs.api.characters import router as characters_router
from smart_npcs.api.conversations import router as conversations_router
from smart_npcs.api.health import router as health_router
from smart_npcs.api.rooms import router as rooms_router
from smart_npcs.core.character.models import (
    BehavioralTraits,
    CharacterData,
    EmotionalWeights,
    Role,
    TraitBag,
)
from smart_npcs.db.database import get_db
from smart_npcs.db.models import Base
from smart_npcs.services.response_service import ResponseService
from smart_npcs.services.turn_service import TurnService


class ScriptedRandom(random.Random):
    """random()은 지정한 값을 차례로, choice()는 항상 첫 항목을 반환."""

    def __init__(self, values: Iterable[float] = ()) -> None:
        super().__init__(0)
        self._values = list(values)
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        if self._values:
            return self._values.pop(0)
        return 0.99

    def choice(self, seq):
        return seq[0]


def make_character(
    character_id: str = "npc_1",
    name: str = "Aria",
    role: Role = Role.SCHOLAR,
    sociability: float = 0.5,
    curiosity: float = 0.5,
    mood: float = 0.5,
    is_active: bool = True,
    **weights: float,
) -> CharacterData:
    """테스트용 캐릭터. 추가 키워드는 감정/행동 값으로 들어간다."""
    emotions = EmotionalWeights(curiosity=curiosity)
    behaviors = BehavioralTraits(sociability=sociability)
    for key, value in weights.items():
        if hasattr(emotions, key):
            setattr(emotions, key, value)
        elif hasattr(behaviors, key):
            setattr(behaviors, key, value)
        else:
            raise AttributeError(key)
    return CharacterData(
        character_id=character_id,
        name=name,
        role=role,
        traits=TraitBag(emotional_weights=emotions, behavioral_traits=behaviors),
        current_mood=mood,
        is_active=is_active,
    )


@pytest.fixture()
def scripted_rng() -> Callable[..., ScriptedRandom]:
    """ScriptedRandom 생성 함수"""
    return ScriptedRandom


@pytest.fixture()
def character_factory() -> Callable[..., CharacterData]:
    return make_character


@pytest.fixture()
def db_engine():
    """인메모리 SQLite (FK 활성화)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @sa_event.listens_for(engine, "connect")
    def _set_fk(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Session:
    """Raw database session for direct DB assertions."""
    session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


def build_test_app(db_engine, ai_provider=None, rng: Optional[random.Random] = None) -> FastAPI:
    """라우터 + app.state를 채운 테스트 앱 (lifespan 미사용)"""
    rng = rng or random.Random(7)
    session_factory = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = FastAPI()
    app.include_router(health_router)
    app.include_router(characters_router)
    app.include_router(rooms_router)
    app.include_router(conversations_router)
    app.include_router(actions_router)
    app.include_router(memory_templates_router)
    app.dependency_overrides[get_db] = _override_get_db

    response_service = ResponseService(ai_provider, rng=rng)
    app.state.rng = rng
    app.state.ai_provider = ai_provider
    app.state.response_service = response_service
    app.state.turn_service = TurnService(response_service, rng=rng)
    return app


@pytest.fixture()
def app_factory(db_engine) -> Callable[..., FastAPI]:
    """provider/rng를 바꿔 끼운 테스트 앱 생성"""

    def _build(ai_provider=None, rng: Optional[random.Random] = None) -> FastAPI:
        return build_test_app(db_engine, ai_provider=ai_provider, rng=rng)

    return _build


@pytest.fixture()
def client(db_engine) -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database (template replies)."""
    with TestClient(build_test_app(db_engine)) as tc:
        yield tc
