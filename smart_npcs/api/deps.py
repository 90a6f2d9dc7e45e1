"""Shared API dependencies and response builders."""

import random
from typing import NoReturn

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from smart_npcs.api.schemas import (
    ActionOut,
    ActivityInfo,
    CharacterInfo,
    CharacterStatusInfo,
    ChatResponse,
    ConversationOut,
    MemberOut,
    MemoryTemplateOut,
    MessageOut,
    OutcomeInfo,
    RoomOut,
)
from smart_npcs.core.character.models import CharacterData
from smart_npcs.core.character.mood import describe_mood
from smart_npcs.core.character.personality import summarize_personality
from smart_npcs.core.character.status import CharacterStatus
from smart_npcs.core.conversation.models import TurnOutcome
from smart_npcs.db.database import get_db
from smart_npcs.services.catalog_service import (
    ActionCatalogService,
    ActionEntry,
    MemoryTemplateEntry,
    MemoryTemplateService,
)
from smart_npcs.services.character_service import CharacterService
from smart_npcs.services.chat_service import ChatService
from smart_npcs.services.chat_types import (
    ConversationInfo,
    MemberInfo,
    MessageInfo,
    RoomInfo,
    TurnResult,
)
from smart_npcs.services.errors import ServiceError
from smart_npcs.services.room_service import RoomService
from smart_npcs.services.turn_service import TurnService


# ── 의존성 주입 ─────────────────────────────────────────────


def get_turn_service(request: Request) -> TurnService:
    """TurnService 인스턴스 반환 (의존성 주입)"""
    service: TurnService = request.app.state.turn_service
    return service


def get_rng(request: Request) -> random.Random:
    rng: random.Random = request.app.state.rng
    return rng


def get_character_service(
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_rng),
) -> CharacterService:
    """요청 단위 CharacterService"""
    return CharacterService(db, rng=rng)


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    """요청 단위 RoomService"""
    return RoomService(db)


def get_chat_service(
    db: Session = Depends(get_db),
    turn_service: TurnService = Depends(get_turn_service),
    characters: CharacterService = Depends(get_character_service),
) -> ChatService:
    """요청 단위 ChatService"""
    return ChatService(db, turn_service, characters=characters)


def get_action_catalog(db: Session = Depends(get_db)) -> ActionCatalogService:
    return ActionCatalogService(db)


def get_memory_templates(db: Session = Depends(get_db)) -> MemoryTemplateService:
    return MemoryTemplateService(db)


def raise_http(error: ServiceError) -> NoReturn:
    """서비스 규칙 위반 → HTTPException"""
    raise HTTPException(status_code=error.status_code, detail=str(error))


# ── 변환 ─────────────────────────────────────────────────────


def build_character_info(character: CharacterData) -> CharacterInfo:
    """CharacterData를 CharacterInfo로 변환"""
    return CharacterInfo(
        id=character.character_id,
        name=character.name,
        role=character.role.value,
        traits=character.traits.to_dict(),
        current_mood=character.current_mood,
        mood_state=describe_mood(character.current_mood).state,
        personality=summarize_personality(character.traits),
        memory_bank=list(character.memory_bank),
        routines=[r.to_dict() for r in character.routines],
        actions=[a.to_dict() for a in character.actions],
        image_url=character.image_url,
        temporary_behavior_prompt=character.temporary_behavior_prompt,
        is_active=character.is_active,
    )


def build_status_info(status: CharacterStatus) -> CharacterStatusInfo:
    """CharacterStatus를 CharacterStatusInfo로 변환"""
    return CharacterStatusInfo(
        character_id=status.character_id,
        name=status.name,
        role=status.role,
        status=status.status,
        activity=ActivityInfo(
            activity=status.activity.activity,
            description=status.activity.description,
            status=status.activity.status,
        ),
        mood=status.mood,
        mood_level=status.mood_level,
        is_active=status.is_active,
        is_in_conversation=status.is_in_conversation,
        active_conversations=status.active_conversations,
        total_conversations=status.total_conversations,
        recent_messages=status.recent_messages,
        last_seen=status.last_seen,
        minutes_since_last_activity=status.minutes_since_last_activity,
        image_url=status.image_url,
    )


def build_message_out(message: MessageInfo) -> MessageOut:
    return MessageOut(
        id=message.id,
        conversation_id=message.conversation_id,
        content=message.content,
        message_order=message.message_order,
        timestamp=message.timestamp,
        character_id=message.character_id,
        character_name=message.character_name,
        message_type=message.message_type,
        metadata=message.metadata,
    )


def build_outcome_info(outcome: TurnOutcome) -> OutcomeInfo:
    character = outcome.character
    return OutcomeInfo(
        character_id=character.character_id if character is not None else None,
        name=character.name if character is not None else None,
        spoken=outcome.spoken,
        text=outcome.text,
        mood_delta=outcome.mood_delta,
        new_mood=outcome.new_mood,
        emotion=outcome.emotion,
        source=outcome.source.value if outcome.source is not None else None,
        behavior_prompt=outcome.behavior_prompt,
    )


def build_chat_response(result: TurnResult) -> ChatResponse:
    """TurnResult를 ChatResponse로 변환"""
    return ChatResponse(
        conversation_id=result.conversation_id,
        user_message=build_message_out(result.user_message),
        outcomes=[build_outcome_info(o) for o in result.outcomes],
        replies=[build_message_out(m) for m in result.replies],
    )


def build_member_out(member: MemberInfo) -> MemberOut:
    return MemberOut(
        id=member.id,
        character_id=member.character_id,
        name=member.name,
        role=member.role,
        member_role=member.member_role,
        is_active=member.is_active,
        character_active=member.character_active,
        joined_at=member.joined_at,
        last_seen=member.last_seen,
    )


def build_room_out(room: RoomInfo) -> RoomOut:
    """RoomInfo를 RoomOut으로 변환"""
    return RoomOut(
        id=room.id,
        title=room.title,
        description=room.description,
        max_members=room.max_members,
        created_by=room.created_by,
        is_active=room.is_active,
        created_at=room.created_at,
        updated_at=room.updated_at,
        metadata=room.metadata,
        members=[build_member_out(m) for m in room.members],
        member_count=room.member_count,
        message_count=room.message_count,
        recent_messages=[build_message_out(m) for m in room.recent_messages],
    )


def build_conversation_out(conversation: ConversationInfo) -> ConversationOut:
    """ConversationInfo를 ConversationOut으로 변환"""
    return ConversationOut(
        id=conversation.id,
        kind=conversation.kind,
        title=conversation.title,
        is_active=conversation.is_active,
        created_at=conversation.created_at,
        updated_at=conversation.updated_at,
        direct_character_id=conversation.direct_character_id,
        participants=[build_member_out(p) for p in conversation.participants],
        messages=[build_message_out(m) for m in conversation.messages],
        message_count=conversation.message_count,
    )


def build_action_out(action: ActionEntry) -> ActionOut:
    return ActionOut(
        id=action.id,
        name=action.name,
        description=action.description,
        created_at=action.created_at,
    )


def build_memory_template_out(template: MemoryTemplateEntry) -> MemoryTemplateOut:
    return MemoryTemplateOut(
        id=template.id,
        heading=template.heading,
        content=template.content,
        created_at=template.created_at,
    )
