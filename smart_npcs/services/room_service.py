"""Room Service: 룸(그룹 대화) 관리

룸은 kind="room" 인 ConversationModel.
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from smart_npcs.core.logging import get_logger
from smart_npcs.db.models import (
    CharacterModel,
    ConversationModel,
    MessageModel,
    ParticipantModel,
    utcnow,
)
from smart_npcs.services.chat_types import (
    ConversationKind,
    MemberInfo,
    MessageInfo,
    RoomInfo,
)
from smart_npcs.services.errors import (
    DuplicateMemberError,
    InactiveCharacterError,
    NotFoundError,
    RoomClosedError,
    RoomFullError,
    ServiceError,
)

logger = get_logger(__name__)

DEFAULT_MAX_MEMBERS = 10
RECENT_MESSAGE_PREVIEW = 10


class RoomService:
    """룸 CRUD 및 멤버 관리"""

    def __init__(self, db_session: Session) -> None:
        self._db = db_session

    # ── 조회 ─────────────────────────────────────────────────

    def _get_row(self, room_id: str) -> Optional[ConversationModel]:
        return (
            self._db.query(ConversationModel)
            .filter(
                ConversationModel.id == room_id,
                ConversationModel.kind == ConversationKind.ROOM.value,
            )
            .first()
        )

    def _message_count(self, room_id: str) -> int:
        return (
            self._db.query(func.count(MessageModel.id))
            .filter(MessageModel.conversation_id == room_id)
            .scalar()
            or 0
        )

    def _recent_messages(self, room_id: str, limit: int) -> List[MessageInfo]:
        rows = (
            self._db.query(MessageModel)
            .filter(MessageModel.conversation_id == room_id)
            .order_by(MessageModel.message_order.desc())
            .limit(limit)
            .all()
        )
        return [MessageInfo.from_orm(r) for r in reversed(rows)]

    def _to_info(self, row: ConversationModel, preview: int = 0) -> RoomInfo:
        recent = self._recent_messages(row.id, preview) if preview > 0 else []
        return RoomInfo.from_orm(row, self._message_count(row.id), recent)

    def get_room(self, room_id: str, message_preview: int = RECENT_MESSAGE_PREVIEW) -> Optional[RoomInfo]:
        """룸 상세 (멤버 + 최근 메시지)"""
        row = self._get_row(room_id)
        if row is None:
            return None
        return self._to_info(row, message_preview)

    def list_rooms(
        self,
        limit: int = 20,
        offset: int = 0,
        include_inactive: bool = False,
    ) -> tuple[List[RoomInfo], int]:
        """룸 목록 (최근 갱신 순) + 전체 개수"""
        query = self._db.query(ConversationModel).filter(
            ConversationModel.kind == ConversationKind.ROOM.value
        )
        if not include_inactive:
            query = query.filter(ConversationModel.is_active == True)  # noqa: E712
        total = query.count()
        rows = query.order_by(ConversationModel.updated_at.desc()).offset(offset).limit(limit).all()
        return [self._to_info(r) for r in rows], total

    # ── 생성/수정/삭제 ───────────────────────────────────────

    def create_room(
        self,
        title: str,
        description: Optional[str] = None,
        max_members: int = DEFAULT_MAX_MEMBERS,
        created_by: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        character_ids: Optional[List[str]] = None,
    ) -> RoomInfo:
        """룸 생성. character_ids가 있으면 바로 참가시킨다."""
        if not title or not title.strip():
            raise ServiceError("Room title is required")
        if max_members < 1:
            raise ServiceError("max_members must be at least 1")

        row = ConversationModel(
            id=f"room_{uuid.uuid4().hex}",
            kind=ConversationKind.ROOM.value,
            title=title.strip(),
            description=description,
            max_members=max_members,
            created_by=created_by,
            extra=dict(metadata or {}),
        )
        self._db.add(row)
        self._db.flush()

        for character_id in character_ids or []:
            self._add_member_row(row, character_id)

        self._db.commit()
        logger.info("Room created: %s (%s)", row.id, row.title)
        return self._to_info(row)

    def update_room(self, room_id: str, changes: dict[str, Any]) -> Optional[RoomInfo]:
        """부분 갱신 (title, description, max_members, is_active, metadata)"""
        row = self._get_row(room_id)
        if row is None:
            return None

        if changes.get("title") is not None:
            if not str(changes["title"]).strip():
                raise ServiceError("Room title is required")
            row.title = str(changes["title"]).strip()
        if "description" in changes:
            row.description = changes["description"]
        if changes.get("max_members") is not None:
            if changes["max_members"] < 1:
                raise ServiceError("max_members must be at least 1")
            row.max_members = changes["max_members"]
        if changes.get("is_active") is not None:
            row.is_active = bool(changes["is_active"])
        if changes.get("metadata") is not None:
            row.extra = dict(changes["metadata"])

        row.updated_at = utcnow()
        self._db.commit()
        return self._to_info(row)

    def delete_room(self, room_id: str, hard: bool = False) -> bool:
        """기본은 soft delete. hard=True면 메시지/멤버까지 삭제."""
        row = self._get_row(room_id)
        if row is None:
            return False

        if hard:
            self._db.delete(row)
            logger.info("Room deleted: %s", room_id)
        else:
            row.is_active = False
            row.updated_at = utcnow()
            logger.info("Room deactivated: %s", room_id)
        self._db.commit()
        return True

    # ── 멤버 ─────────────────────────────────────────────────

    def list_members(self, room_id: str) -> Optional[List[MemberInfo]]:
        """참가 순 멤버 목록. 룸이 없으면 None."""
        row = self._get_row(room_id)
        if row is None:
            return None
        return [MemberInfo.from_orm(p) for p in row.participants]

    def _add_member_row(
        self,
        room: ConversationModel,
        character_id: str,
        member_role: str = "member",
    ) -> ParticipantModel:
        if not room.is_active:
            raise RoomClosedError("Room is not active")
        if len(room.participants) >= room.max_members:
            raise RoomFullError(f"Room is full (max {room.max_members} members)")

        character = (
            self._db.query(CharacterModel).filter(CharacterModel.id == character_id).first()
        )
        if character is None:
            raise NotFoundError(f"Character not found: {character_id}")
        if not character.is_active:
            raise InactiveCharacterError("Character is not active")
        if any(p.character_id == character_id for p in room.participants):
            raise DuplicateMemberError("Character is already in this room")

        member = ParticipantModel(
            id=f"member_{uuid.uuid4().hex}",
            conversation_id=room.id,
            character_id=character_id,
            member_role=member_role or "member",
        )
        room.participants.append(member)
        self._db.flush()
        return member

    def add_member(
        self, room_id: str, character_id: str, member_role: str = "member"
    ) -> MemberInfo:
        """룸 참가. 룸 활성/정원/캐릭터 활성/중복 여부 검증."""
        room = self._get_row(room_id)
        if room is None:
            raise NotFoundError(f"Room not found: {room_id}")

        member = self._add_member_row(room, character_id, member_role)
        room.updated_at = utcnow()
        self._db.commit()
        logger.info("Character %s joined room %s", character_id, room_id)
        return MemberInfo.from_orm(member)

    def remove_member(self, room_id: str, character_id: str) -> None:
        """룸 탈퇴 (멤버 행 삭제)"""
        room = self._get_row(room_id)
        if room is None:
            raise NotFoundError(f"Room not found: {room_id}")

        member = next((p for p in room.participants if p.character_id == character_id), None)
        if member is None:
            raise NotFoundError("Member not found in room")

        room.participants.remove(member)
        room.updated_at = utcnow()
        self._db.commit()
        logger.info("Character %s left room %s", character_id, room_id)
