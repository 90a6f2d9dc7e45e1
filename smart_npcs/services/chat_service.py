"""Chat Service: 대화 턴과 DB를 연결

1:1 대화(direct)와 룸 대화(room) 모두 처리.
메시지 순번은 conversations.last_message_order의 원자적 증가로 할당한다
(같은 트랜잭션에서 메시지 INSERT, UNIQUE(conversation_id, message_order)).
응답 메시지 저장과 기분 저장은 별도 커밋이며 한쪽 실패가 다른 쪽을 되돌리지 않는다.
1:1 대화는 캐릭터당 하나 (conversations.direct_character_id UNIQUE).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from smart_npcs.core.conversation.models import HistoryEntry, TurnOutcome
from smart_npcs.core.logging import get_logger
from smart_npcs.db.mapping import character_from_orm
from smart_npcs.db.models import (
    CharacterModel,
    ConversationModel,
    MessageModel,
    ParticipantModel,
    utcnow,
)
from smart_npcs.services.character_service import CharacterService
from smart_npcs.services.chat_types import (
    ConversationInfo,
    ConversationKind,
    MessageInfo,
    MessageType,
    TurnResult,
)
from smart_npcs.services.errors import (
    InactiveCharacterError,
    NotAMemberError,
    NotFoundError,
    RoomClosedError,
    ServiceError,
)
from smart_npcs.services.turn_service import TurnService

logger = get_logger(__name__)


def _as_naive_utc(value: datetime) -> datetime:
    """DB 저장 형식(UTC, tzinfo 없음)으로 맞춤. tzinfo 없는 값은 UTC로 간주."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ChatService:
    """1:1 대화, 룸 대화, 대화 이력"""

    def __init__(
        self,
        db_session: Session,
        turn_service: TurnService,
        characters: Optional[CharacterService] = None,
    ) -> None:
        self._db = db_session
        self._turns = turn_service
        self._characters = characters or CharacterService(db_session)

    # ── 메시지 저장 ─────────────────────────────────────────

    def _append_message(
        self,
        conversation_id: str,
        content: str,
        character_id: Optional[str] = None,
        message_type: MessageType = MessageType.CHAT,
        metadata: Optional[dict[str, Any]] = None,
    ) -> MessageModel:
        """순번 할당 + INSERT + 커밋"""
        now = utcnow()
        self._db.execute(
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .values(
                last_message_order=ConversationModel.last_message_order + 1,
                updated_at=now,
            )
        )
        order = (
            self._db.query(ConversationModel.last_message_order)
            .filter(ConversationModel.id == conversation_id)
            .scalar()
        )

        message = MessageModel(
            id=f"msg_{uuid.uuid4().hex}",
            conversation_id=conversation_id,
            character_id=character_id,
            content=content,
            message_type=message_type.value,
            extra=dict(metadata or {}),
            message_order=order,
            timestamp=now,
        )
        self._db.add(message)
        self._db.commit()
        return message

    def _persist_reply(
        self,
        conversation_id: str,
        outcome: TurnOutcome,
        saved: List[MessageInfo],
    ) -> None:
        """on_reply 콜백: 응답 메시지 → 기분/행동 지시 순으로 각각 커밋"""
        character = outcome.character
        assert character is not None and outcome.text is not None

        try:
            message = self._append_message(
                conversation_id,
                outcome.text,
                character_id=character.character_id,
                metadata={
                    "emotion": outcome.emotion,
                    "source": outcome.source.value if outcome.source else None,
                    "mood_delta": outcome.mood_delta,
                },
            )
            saved.append(MessageInfo.from_orm(message))
        except SQLAlchemyError:
            logger.exception("Failed to save reply from %s", character.character_id)
            self._db.rollback()

        try:
            # last_seen은 기분과 같은 커밋
            self._db.query(ParticipantModel).filter(
                ParticipantModel.conversation_id == conversation_id,
                ParticipantModel.character_id == character.character_id,
            ).update({ParticipantModel.last_seen: utcnow()}, synchronize_session=False)
            new_mood = self._characters.apply_mood_delta(
                character.character_id,
                outcome.mood_delta or 0.0,
                behavior_prompt=outcome.behavior_prompt,
            )
            if new_mood is None:
                self._db.commit()
        except SQLAlchemyError:
            logger.exception("Failed to save mood for %s", character.character_id)
            self._db.rollback()

        if outcome.behavior_prompt:
            try:
                self._append_message(
                    conversation_id,
                    f"[Behavior Change] {character.name}'s behavior modified: "
                    f"{outcome.behavior_prompt}",
                    character_id=character.character_id,
                    message_type=MessageType.BEHAVIOR_CHANGE,
                    metadata={"behavior_prompt": outcome.behavior_prompt},
                )
            except SQLAlchemyError:
                logger.exception("Failed to log behavior change for %s", character.character_id)
                self._db.rollback()

    # ── 이력 ─────────────────────────────────────────────────

    def recent_history(
        self,
        conversation_id: str,
        window: Optional[int] = None,
        before_order: Optional[int] = None,
    ) -> List[HistoryEntry]:
        """응답 합성용 최근 대화 (chat 타입만, 오래된 순)"""
        limit = window if window is not None else self._turns.responses.history_window
        if limit <= 0:
            return []

        query = self._db.query(MessageModel).filter(
            MessageModel.conversation_id == conversation_id,
            MessageModel.message_type == MessageType.CHAT.value,
        )
        if before_order is not None:
            query = query.filter(MessageModel.message_order < before_order)
        rows = query.order_by(MessageModel.message_order.desc()).limit(limit).all()

        return [
            HistoryEntry(
                speaker=r.character.name if r.character is not None else "User",
                text=r.content,
                character_id=r.character_id,
            )
            for r in reversed(rows)
        ]

    def _page(
        self,
        conversation_id: str,
        limit: int,
        offset: int,
        before: Optional[datetime] = None,
        after: Optional[datetime] = None,
    ) -> tuple[List[MessageInfo], bool]:
        query = self._db.query(MessageModel).filter(
            MessageModel.conversation_id == conversation_id
        )
        if before is not None:
            query = query.filter(MessageModel.timestamp < _as_naive_utc(before))
        if after is not None:
            query = query.filter(MessageModel.timestamp > _as_naive_utc(after))
        # 한 건 더 읽어 다음 페이지 존재 여부 판단
        rows = (
            query.order_by(MessageModel.message_order.desc())
            .offset(offset)
            .limit(limit + 1)
            .all()
        )
        has_more = len(rows) > limit
        return [MessageInfo.from_orm(r) for r in reversed(rows[:limit])], has_more

    # ── 1:1 대화 ─────────────────────────────────────────────

    def _find_direct_conversation(self, character_id: str) -> Optional[ConversationModel]:
        return (
            self._db.query(ConversationModel)
            .filter(
                ConversationModel.kind == ConversationKind.DIRECT.value,
                ConversationModel.direct_character_id == character_id,
            )
            .first()
        )

    def _get_or_create_direct(self, character: CharacterModel) -> ConversationModel:
        conversation = self._find_direct_conversation(character.id)
        if conversation is not None:
            return conversation

        conversation = ConversationModel(
            id=f"conv_{uuid.uuid4().hex}",
            kind=ConversationKind.DIRECT.value,
            title=f"Chat with {character.name}",
            direct_character_id=character.id,
        )
        conversation.participants.append(
            ParticipantModel(
                id=f"member_{uuid.uuid4().hex}",
                character_id=character.id,
            )
        )
        self._db.add(conversation)
        try:
            self._db.commit()
        except IntegrityError:
            # 동시 요청이 먼저 만든 대화를 사용
            self._db.rollback()
            existing = self._find_direct_conversation(character.id)
            if existing is None:
                raise
            logger.info("Direct conversation for %s created concurrently", character.id)
            return existing
        logger.info("Direct conversation created: %s for %s", conversation.id, character.id)
        return conversation

    def direct_chat(self, character_id: str, content: str) -> TurnResult:
        """1:1 대화 턴. 사용자 메시지 저장 → 단일 캐릭터 턴 → 응답 저장."""
        content = (content or "").strip()
        if not content:
            raise ServiceError("Message content is required")

        row = self._db.query(CharacterModel).filter(CharacterModel.id == character_id).first()
        if row is None:
            raise NotFoundError(f"Character not found: {character_id}")
        if not row.is_active:
            raise InactiveCharacterError("Character is not active")

        conversation = self._get_or_create_direct(row)
        history = self.recent_history(conversation.id)
        user_message = self._append_message(conversation.id, content)

        saved: List[MessageInfo] = []
        outcome = self._turns.resolve_single(
            character_from_orm(row),
            content,
            history,
            on_reply=lambda o: self._persist_reply(conversation.id, o, saved),
        )
        return TurnResult(
            conversation_id=conversation.id,
            user_message=MessageInfo.from_orm(user_message),
            outcomes=[outcome],
            replies=saved,
        )

    def direct_history(
        self, character_id: str, limit: int = 50, offset: int = 0
    ) -> tuple[Optional[str], List[MessageInfo], bool]:
        """1:1 대화 이력. 대화가 없으면 (None, [], False)."""
        conversation = self._find_direct_conversation(character_id)
        if conversation is None:
            return None, [], False
        messages, has_more = self._page(conversation.id, limit, offset)
        return conversation.id, messages, has_more

    # ── 룸 대화 ──────────────────────────────────────────────

    def _get_room(self, room_id: str) -> ConversationModel:
        room = (
            self._db.query(ConversationModel)
            .filter(
                ConversationModel.id == room_id,
                ConversationModel.kind == ConversationKind.ROOM.value,
            )
            .first()
        )
        if room is None:
            raise NotFoundError(f"Room not found: {room_id}")
        return room

    def room_chat(self, room_id: str, content: str) -> TurnResult:
        """룸 대화 턴. 활성 멤버 전원이 턴 정책 대상."""
        content = (content or "").strip()
        if not content:
            raise ServiceError("Message content is required")

        room = self._get_room(room_id)
        if not room.is_active:
            raise RoomClosedError("Room is not active")

        present = [
            character_from_orm(p.character) if p.character is not None else None
            for p in room.participants
            if p.is_active
        ]
        history = self.recent_history(room.id)
        user_message = self._append_message(room.id, content)

        saved: List[MessageInfo] = []
        outcomes = self._turns.resolve_turn(
            present,
            content,
            history,
            on_reply=lambda o: self._persist_reply(room_id, o, saved),
        )
        return TurnResult(
            conversation_id=room_id,
            user_message=MessageInfo.from_orm(user_message),
            outcomes=outcomes,
            replies=saved,
        )

    def post_character_message(
        self,
        room_id: str,
        character_id: str,
        content: str,
        message_type: MessageType = MessageType.CHAT,
        metadata: Optional[dict[str, Any]] = None,
    ) -> MessageInfo:
        """캐릭터 명의 메시지 직접 게시 (턴 정책 미적용). 활성 멤버만."""
        content = (content or "").strip()
        if not content:
            raise ServiceError("Message content is required")

        room = self._get_room(room_id)
        if not room.is_active:
            raise RoomClosedError("Room is not active")

        member = next((p for p in room.participants if p.character_id == character_id), None)
        if member is None:
            raise NotAMemberError("Character is not a member of this room")
        if not member.is_active:
            raise NotAMemberError("Character membership is not active")

        message = self._append_message(
            room_id,
            content,
            character_id=character_id,
            message_type=message_type,
            metadata=metadata,
        )
        member.last_seen = utcnow()
        self._db.commit()
        return MessageInfo.from_orm(message)

    def room_history(
        self,
        room_id: str,
        limit: int = 50,
        offset: int = 0,
        before: Optional[datetime] = None,
        after: Optional[datetime] = None,
    ) -> tuple[List[MessageInfo], bool]:
        """룸 메시지 (오래된 순) + 더 있음 여부"""
        self._get_room(room_id)
        return self._page(room_id, limit, offset, before, after)

    # ── 대화 목록 ────────────────────────────────────────────

    def list_conversations(
        self,
        kind: Optional[ConversationKind] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[ConversationInfo], int]:
        """전체 대화 (최근 갱신 순) + 전체 개수. 메시지와 참가자 포함."""
        query = self._db.query(ConversationModel)
        if kind is not None:
            query = query.filter(ConversationModel.kind == kind.value)
        total = query.count()
        rows = (
            query.order_by(ConversationModel.updated_at.desc(), ConversationModel.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [ConversationInfo.from_orm(r) for r in rows], total
