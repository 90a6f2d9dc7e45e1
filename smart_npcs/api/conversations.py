"""Conversation listing endpoint (direct chats and rooms together)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from smart_npcs.api.deps import build_conversation_out, get_chat_service
from smart_npcs.api.schemas import ConversationListResponse
from smart_npcs.services.chat_service import ChatService
from smart_npcs.services.chat_types import ConversationKind

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=ConversationListResponse)
def list_conversations(
    kind: Optional[ConversationKind] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: ChatService = Depends(get_chat_service),
) -> ConversationListResponse:
    """
    대화 목록 (최근 갱신 순)

    각 대화에 참가자, 전체 메시지(순번 순), 메시지 수를 포함합니다.
    """
    conversations, total = service.list_conversations(kind=kind, limit=limit, offset=offset)
    return ConversationListResponse(
        conversations=[build_conversation_out(c) for c in conversations],
        total=total,
    )
