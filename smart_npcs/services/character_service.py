"""Character Service: Core 로직과 DB를 연결

캐릭터 CRUD (soft delete), 기분 갱신, 활동 상태 조회.
"""

import random
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from smart_npcs.core.character.generation import default_actions, generate_traits
from smart_npcs.core.character.models import (
    CharacterAction,
    CharacterData,
    DailyRoutine,
    Role,
    TraitBag,
    clamp_unit,
)
from smart_npcs.core.character.mood import apply_mood_delta, clamp_mood
from smart_npcs.core.character.status import (
    CharacterStatus,
    build_status,
    summarize_statuses,
)
from smart_npcs.core.logging import get_logger
from smart_npcs.db.mapping import character_from_orm, character_to_columns
from smart_npcs.db.models import (
    CharacterModel,
    ConversationModel,
    MessageModel,
    ParticipantModel,
    utcnow,
)
from smart_npcs.services.errors import InvalidRoleError

logger = get_logger(__name__)


def parse_role(value: Any) -> Role:
    """역할 문자열 검증. 알 수 없는 값은 InvalidRoleError."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise InvalidRoleError(
            f"Unknown role '{value}'. Expected one of: {', '.join(r.value for r in Role)}"
        ) from None


def _build_routines(items: List[dict[str, Any]]) -> List[DailyRoutine]:
    return [
        DailyRoutine(
            id=str(r.get("id") or uuid.uuid4().hex[:8]),
            name=str(r.get("name", "")),
            time_slot=str(r.get("time_slot", "morning")),
            action=str(r.get("action", "")),
            priority=int(r.get("priority", 0) or 0),
        )
        for r in items
    ]


def _build_actions(items: List[dict[str, Any]]) -> List[CharacterAction]:
    return [
        CharacterAction(
            id=str(a.get("id") or uuid.uuid4().hex[:8]),
            name=str(a.get("name", "")),
            description=str(a.get("description", "")),
        )
        for a in items
    ]


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite는 tz 정보 없이 돌려준다
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CharacterService:
    """캐릭터 CRUD, 기분, 상태"""

    def __init__(self, db_session: Session, rng: random.Random | None = None) -> None:
        self._db = db_session
        self._rng = rng or random.Random()

    # ── 조회 ─────────────────────────────────────────────────

    def _get_row(self, character_id: str) -> Optional[CharacterModel]:
        return self._db.query(CharacterModel).filter(CharacterModel.id == character_id).first()

    def get_character(self, character_id: str) -> Optional[CharacterData]:
        """ID로 캐릭터 조회 (비활성 포함)"""
        row = self._get_row(character_id)
        if row is None:
            return None
        return character_from_orm(row)

    def list_characters(self, include_inactive: bool = False) -> List[CharacterData]:
        """캐릭터 목록 (기본: 활성만, 생성 역순)"""
        query = self._db.query(CharacterModel)
        if not include_inactive:
            query = query.filter(CharacterModel.is_active == True)  # noqa: E712
        rows = query.order_by(CharacterModel.created_at.desc()).all()
        return [character_from_orm(r) for r in rows]

    # ── 생성/수정/삭제 ───────────────────────────────────────

    def create_character(
        self,
        name: str,
        role: Any,
        traits: Optional[dict[str, Any]] = None,
        current_mood: float = 0.5,
        memory_bank: Optional[List[str]] = None,
        routines: Optional[List[dict[str, Any]]] = None,
        actions: Optional[List[dict[str, Any]]] = None,
        image_url: Optional[str] = None,
    ) -> CharacterData:
        """캐릭터 생성. traits 미지정 시 무작위 성격, actions 미지정 시 역할 기본 행동."""
        parsed_role = parse_role(role)
        trait_bag = TraitBag.from_dict(traits) if traits else generate_traits(rng=self._rng)

        data = CharacterData(
            character_id=f"npc_{uuid.uuid4().hex}",
            name=name.strip(),
            role=parsed_role,
            traits=trait_bag,
            current_mood=clamp_mood(clamp_unit(current_mood)),
            memory_bank=list(memory_bank or []),
            routines=_build_routines(routines or []),
            actions=_build_actions(actions) if actions else default_actions(parsed_role),
            image_url=image_url,
        )

        row = CharacterModel(id=data.character_id, **character_to_columns(data))
        self._db.add(row)
        self._db.commit()
        logger.info("Character created: %s (%s, %s)", data.character_id, data.name, data.role.value)
        return data

    def update_character(
        self, character_id: str, changes: dict[str, Any]
    ) -> Optional[CharacterData]:
        """부분 갱신. traits는 기존 값과 병합."""
        row = self._get_row(character_id)
        if row is None:
            return None

        data = character_from_orm(row)
        if changes.get("name") is not None:
            data.name = str(changes["name"]).strip()
        if changes.get("role") is not None:
            data.role = parse_role(changes["role"])
        if changes.get("traits") is not None:
            data.traits = data.traits.merged(changes["traits"])
        if changes.get("current_mood") is not None:
            data.current_mood = clamp_mood(clamp_unit(changes["current_mood"]))
        if changes.get("memory_bank") is not None:
            data.memory_bank = [str(m) for m in changes["memory_bank"]]
        if changes.get("routines") is not None:
            data.routines = _build_routines(changes["routines"])
        if changes.get("actions") is not None:
            data.actions = _build_actions(changes["actions"])
        if "image_url" in changes:
            data.image_url = changes["image_url"]
        if "temporary_behavior_prompt" in changes:
            data.temporary_behavior_prompt = changes["temporary_behavior_prompt"]
        if changes.get("is_active") is not None:
            data.is_active = bool(changes["is_active"])

        for key, value in character_to_columns(data).items():
            setattr(row, key, value)
        self._db.commit()
        return data

    def delete_character(self, character_id: str) -> bool:
        """Soft delete (is_active=False). 없으면 False."""
        row = self._get_row(character_id)
        if row is None:
            return False
        row.is_active = False
        self._db.commit()
        logger.info("Character deactivated: %s", character_id)
        return True

    # ── 기분 ─────────────────────────────────────────────────

    def apply_mood_delta(
        self,
        character_id: str,
        delta: float,
        behavior_prompt: Optional[str] = None,
    ) -> Optional[float]:
        """기분 변화(+행동 지시) 반영 후 새 기분 값. 없으면 None."""
        row = self._get_row(character_id)
        if row is None:
            return None
        row.current_mood = apply_mood_delta(clamp_unit(row.current_mood), delta)
        if behavior_prompt:
            row.temporary_behavior_prompt = behavior_prompt
        self._db.commit()
        return row.current_mood

    # ── 상태 ─────────────────────────────────────────────────

    def _status_for(self, row: CharacterModel, now: datetime) -> CharacterStatus:
        participations = (
            self._db.query(ParticipantModel)
            .filter(ParticipantModel.character_id == row.id)
            .all()
        )
        conversation_ids = [p.conversation_id for p in participations]

        active_conversations = 0
        recent_messages = 0
        if conversation_ids:
            counts = dict(
                self._db.query(MessageModel.conversation_id, func.count(MessageModel.id))
                .filter(MessageModel.conversation_id.in_(conversation_ids))
                .group_by(MessageModel.conversation_id)
                .all()
            )
            recent_messages = sum(counts.values())
            active_ids = {
                c.id
                for c in self._db.query(ConversationModel)
                .filter(
                    ConversationModel.id.in_(conversation_ids),
                    ConversationModel.is_active == True,  # noqa: E712
                )
                .all()
            }
            active_conversations = sum(
                1 for cid in conversation_ids if cid in active_ids and counts.get(cid, 0) > 0
            )

        return build_status(
            character_from_orm(row),
            self._rng,
            now=now,
            last_seen=_aware(row.updated_at),
            active_conversations=active_conversations,
            total_conversations=len(conversation_ids),
            recent_messages=recent_messages,
        )

    def get_status(self, character_id: str) -> Optional[CharacterStatus]:
        """캐릭터 1명의 활동 상태"""
        row = self._get_row(character_id)
        if row is None:
            return None
        return self._status_for(row, utcnow())

    def get_all_statuses(
        self, include_inactive: bool = False, limit: int = 50, offset: int = 0
    ) -> tuple[List[CharacterStatus], dict[str, object]]:
        """상태 목록 + 요약"""
        query = self._db.query(CharacterModel)
        if not include_inactive:
            query = query.filter(CharacterModel.is_active == True)  # noqa: E712
        rows = (
            query.order_by(CharacterModel.updated_at.desc()).offset(offset).limit(limit).all()
        )
        now = utcnow()
        statuses = [self._status_for(r, now) for r in rows]
        return statuses, summarize_statuses(statuses)

    def update_status(
        self,
        character_id: str,
        mood: Optional[float] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[CharacterStatus]:
        """수동 상태 조정 (기분, 활성 여부)"""
        row = self._get_row(character_id)
        if row is None:
            return None
        if mood is not None:
            row.current_mood = clamp_mood(mood)
        if is_active is not None:
            row.is_active = is_active
        row.updated_at = utcnow()
        self._db.commit()
        return self._status_for(row, utcnow())
