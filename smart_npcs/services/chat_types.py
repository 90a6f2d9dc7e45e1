"""Room / message view types shared by room and chat services."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from smart_npcs.core.conversation.models import TurnOutcome
from smart_npcs.db.models import ConversationModel, MessageModel, ParticipantModel


class ConversationKind(str, Enum):
    DIRECT = "direct"
    ROOM = "room"


class MessageType(str, Enum):
    CHAT = "chat"
    SYSTEM = "system"
    BEHAVIOR_CHANGE = "behavior_change"


@dataclass
class MessageInfo:
    """저장된 메시지 1건. character_id가 None이면 사용자 메시지."""

    id: str
    conversation_id: str
    content: str
    message_order: int
    timestamp: datetime
    character_id: Optional[str] = None
    character_name: Optional[str] = None
    message_type: str = MessageType.CHAT.value
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_orm(cls, row: MessageModel) -> "MessageInfo":
        return cls(
            id=row.id,
            conversation_id=row.conversation_id,
            content=row.content,
            message_order=row.message_order,
            timestamp=row.timestamp,
            character_id=row.character_id,
            character_name=row.character.name if row.character is not None else None,
            message_type=row.message_type,
            metadata=dict(row.extra or {}),
        )


@dataclass
class MemberInfo:
    """룸 멤버"""

    id: str
    character_id: str
    name: str
    role: str
    member_role: str
    is_active: bool
    character_active: bool
    joined_at: datetime
    last_seen: datetime

    @classmethod
    def from_orm(cls, row: ParticipantModel) -> "MemberInfo":
        return cls(
            id=row.id,
            character_id=row.character_id,
            name=row.character.name,
            role=row.character.role,
            member_role=row.member_role,
            is_active=row.is_active,
            character_active=row.character.is_active,
            joined_at=row.joined_at,
            last_seen=row.last_seen,
        )


@dataclass
class RoomInfo:
    """룸 요약"""

    id: str
    title: Optional[str]
    description: Optional[str]
    max_members: int
    created_by: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    members: list[MemberInfo] = field(default_factory=list)
    message_count: int = 0
    recent_messages: list[MessageInfo] = field(default_factory=list)

    @property
    def member_count(self) -> int:
        return len(self.members)

    @classmethod
    def from_orm(
        cls,
        row: ConversationModel,
        message_count: int = 0,
        recent_messages: Optional[list[MessageInfo]] = None,
    ) -> "RoomInfo":
        return cls(
            id=row.id,
            title=row.title,
            description=row.description,
            max_members=row.max_members,
            created_by=row.created_by,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
            metadata=dict(row.extra or {}),
            members=[MemberInfo.from_orm(p) for p in row.participants],
            message_count=message_count,
            recent_messages=list(recent_messages or []),
        )


@dataclass
class TurnResult:
    """채팅 턴 처리 결과: 저장된 사용자 메시지 + 캐릭터별 결과 + 저장된 응답"""

    conversation_id: str
    user_message: MessageInfo
    outcomes: list[TurnOutcome] = field(default_factory=list)
    replies: list[MessageInfo] = field(default_factory=list)


@dataclass
class ConversationInfo:
    """대화 1건 (1:1 또는 룸) + 참가자 + 전체 메시지"""

    id: str
    kind: str
    title: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    direct_character_id: Optional[str] = None
    participants: list[MemberInfo] = field(default_factory=list)
    messages: list[MessageInfo] = field(default_factory=list)

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @classmethod
    def from_orm(cls, row: ConversationModel) -> "ConversationInfo":
        return cls(
            id=row.id,
            kind=row.kind,
            title=row.title,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
            direct_character_id=row.direct_character_id,
            participants=[MemberInfo.from_orm(p) for p in row.participants],
            messages=[MessageInfo.from_orm(m) for m in row.messages],
        )
