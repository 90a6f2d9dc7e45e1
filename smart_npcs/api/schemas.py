"""API request/response schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class EmotionalWeightsInput(BaseModel):
    """감정 가중치 (부분 입력 허용)"""

    happiness: Optional[float] = Field(None, ge=0.0, le=1.0)
    sadness: Optional[float] = Field(None, ge=0.0, le=1.0)
    anger: Optional[float] = Field(None, ge=0.0, le=1.0)
    fear: Optional[float] = Field(None, ge=0.0, le=1.0)
    curiosity: Optional[float] = Field(None, ge=0.0, le=1.0)
    aggression: Optional[float] = Field(None, ge=0.0, le=1.0)


class BehavioralTraitsInput(BaseModel):
    """행동 특성 (부분 입력 허용)"""

    sociability: Optional[float] = Field(None, ge=0.0, le=1.0)
    energy: Optional[float] = Field(None, ge=0.0, le=1.0)
    creativity: Optional[float] = Field(None, ge=0.0, le=1.0)
    loyalty: Optional[float] = Field(None, ge=0.0, le=1.0)
    intelligence: Optional[float] = Field(None, ge=0.0, le=1.0)


class TraitsInput(BaseModel):
    """성격 패턴 입력"""

    id: Optional[str] = None
    name: Optional[str] = None
    emotional_weights: Optional[EmotionalWeightsInput] = None
    behavioral_traits: Optional[BehavioralTraitsInput] = None


class RoutineInput(BaseModel):
    id: Optional[str] = None
    name: str
    time_slot: str = "morning"
    action: str = ""
    priority: int = 0


class ActionInput(BaseModel):
    id: Optional[str] = None
    name: str
    description: str = ""


class CharacterCreateRequest(BaseModel):
    """캐릭터 생성 요청"""

    name: str = Field(..., min_length=1, max_length=100, description="캐릭터 이름")
    role: str = Field(
        ..., description="역할: warrior, merchant, scholar, wanderer, guardian, artisan"
    )
    traits: Optional[TraitsInput] = Field(None, description="미지정 시 무작위 생성")
    current_mood: float = Field(0.5, ge=0.0, le=1.0)
    memory_bank: list[str] = Field(default_factory=list)
    routines: list[RoutineInput] = Field(default_factory=list)
    actions: list[ActionInput] = Field(default_factory=list)
    image_url: Optional[str] = None


class CharacterUpdateRequest(BaseModel):
    """캐릭터 부분 갱신 요청. 지정한 필드만 반영."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = None
    traits: Optional[TraitsInput] = None
    current_mood: Optional[float] = Field(None, ge=0.0, le=1.0)
    memory_bank: Optional[list[str]] = None
    routines: Optional[list[RoutineInput]] = None
    actions: Optional[list[ActionInput]] = None
    image_url: Optional[str] = None
    temporary_behavior_prompt: Optional[str] = None
    is_active: Optional[bool] = None


class StatusUpdateRequest(BaseModel):
    """수동 상태 조정"""

    mood: Optional[float] = Field(None, ge=0.0, le=1.0)
    is_active: Optional[bool] = None


class ChatRequest(BaseModel):
    """사용자 메시지"""

    message: str = Field(..., min_length=1, max_length=2000)


class RoomCreateRequest(BaseModel):
    """룸 생성 요청"""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    max_members: int = Field(10, ge=1, le=50)
    created_by: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    character_ids: list[str] = Field(default_factory=list)


class RoomUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    max_members: Optional[int] = Field(None, ge=1, le=50)
    is_active: Optional[bool] = None
    metadata: Optional[dict[str, Any]] = None


class MemberAddRequest(BaseModel):
    character_id: str = Field(..., min_length=1)
    member_role: str = "member"


class RoomMessageRequest(BaseModel):
    """룸 메시지. character_id가 있으면 해당 멤버 명의로 게시 (턴 없음)."""

    message: str = Field(..., min_length=1, max_length=2000)
    character_id: Optional[str] = None
    message_type: str = Field("chat", description="chat, system, behavior_change")
    metadata: dict[str, Any] = Field(default_factory=dict)


class ActionCreateRequest(BaseModel):
    """공용 행동 추가"""

    name: str = Field(..., max_length=200)
    description: str = ""


class MemoryTemplateCreateRequest(BaseModel):
    """기억 템플릿 추가"""

    heading: str = Field(..., max_length=200)
    content: str = ""


# === Response Schemas ===


class CharacterInfo(BaseModel):
    """캐릭터 정보"""

    id: str
    name: str
    role: str
    traits: dict[str, Any]
    current_mood: float
    mood_state: str
    personality: str
    memory_bank: list[str] = []
    routines: list[dict[str, Any]] = []
    actions: list[dict[str, Any]] = []
    image_url: Optional[str] = None
    temporary_behavior_prompt: Optional[str] = None
    is_active: bool = True


class CharacterListResponse(BaseModel):
    characters: list[CharacterInfo]
    total: int


class ActivityInfo(BaseModel):
    activity: str
    description: str
    status: str


class CharacterStatusInfo(BaseModel):
    """캐릭터 활동 상태"""

    character_id: str
    name: str
    role: str
    status: str
    activity: ActivityInfo
    mood: float
    mood_level: str
    is_active: bool
    is_in_conversation: bool
    active_conversations: int = 0
    total_conversations: int = 0
    recent_messages: int = 0
    last_seen: Optional[datetime] = None
    minutes_since_last_activity: int = 0
    image_url: Optional[str] = None


class StatusListResponse(BaseModel):
    statuses: list[CharacterStatusInfo]
    summary: dict[str, Any]


class MessageOut(BaseModel):
    """저장된 메시지"""

    id: str
    conversation_id: str
    content: str
    message_order: int
    timestamp: datetime
    character_id: Optional[str] = None
    character_name: Optional[str] = None
    message_type: str = "chat"
    metadata: dict[str, Any] = {}


class OutcomeInfo(BaseModel):
    """캐릭터 1명의 턴 결과"""

    character_id: Optional[str] = None
    name: Optional[str] = None
    spoken: bool
    text: Optional[str] = None
    mood_delta: Optional[float] = None
    new_mood: Optional[float] = None
    emotion: Optional[str] = None
    source: Optional[str] = None
    behavior_prompt: Optional[str] = None


class ChatResponse(BaseModel):
    """채팅 턴 응답"""

    success: bool = True
    conversation_id: str
    user_message: MessageOut
    outcomes: list[OutcomeInfo] = []
    replies: list[MessageOut] = []


class HistoryResponse(BaseModel):
    conversation_id: Optional[str] = None
    messages: list[MessageOut] = []
    has_more: bool = False


class MemberOut(BaseModel):
    id: str
    character_id: str
    name: str
    role: str
    member_role: str
    is_active: bool
    character_active: bool
    joined_at: datetime
    last_seen: datetime


class RoomOut(BaseModel):
    """룸 정보"""

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    max_members: int
    created_by: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    metadata: dict[str, Any] = {}
    members: list[MemberOut] = []
    member_count: int = 0
    message_count: int = 0
    recent_messages: list[MessageOut] = []


class RoomListResponse(BaseModel):
    rooms: list[RoomOut]
    total: int


class ConversationOut(BaseModel):
    """대화 1건 (1:1 또는 룸) + 참가자 + 전체 메시지"""

    id: str
    kind: str
    title: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    direct_character_id: Optional[str] = None
    participants: list[MemberOut] = []
    messages: list[MessageOut] = []
    message_count: int = 0


class ConversationListResponse(BaseModel):
    conversations: list[ConversationOut]
    total: int


class ActionOut(BaseModel):
    id: str
    name: str
    description: str = ""
    created_at: datetime


class MemoryTemplateOut(BaseModel):
    id: str
    heading: str
    content: str = ""
    created_at: datetime


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
