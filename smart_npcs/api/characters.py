"""Character API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from smart_npcs.api.deps import (
    build_character_info,
    build_chat_response,
    build_message_out,
    build_status_info,
    get_character_service,
    get_chat_service,
    raise_http,
)
from smart_npcs.api.schemas import (
    CharacterCreateRequest,
    CharacterInfo,
    CharacterListResponse,
    CharacterStatusInfo,
    CharacterUpdateRequest,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HistoryResponse,
    StatusListResponse,
    StatusUpdateRequest,
)
from smart_npcs.core.logging import get_logger
from smart_npcs.services.character_service import CharacterService
from smart_npcs.services.chat_service import ChatService
from smart_npcs.services.errors import ServiceError

logger = get_logger(__name__)

router = APIRouter(prefix="/characters", tags=["characters"])


def _not_found(character_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Character not found: {character_id}")


# ── 목록/생성 ───────────────────────────────────────────────


@router.get("", response_model=CharacterListResponse)
def list_characters(
    include_inactive: bool = False,
    service: CharacterService = Depends(get_character_service),
) -> CharacterListResponse:
    """캐릭터 목록 (기본: 활성 캐릭터만)"""
    characters = service.list_characters(include_inactive=include_inactive)
    return CharacterListResponse(
        characters=[build_character_info(c) for c in characters],
        total=len(characters),
    )


@router.post(
    "",
    response_model=CharacterInfo,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
def create_character(
    request: CharacterCreateRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterInfo:
    """
    캐릭터 생성

    traits를 생략하면 성격 패턴을 무작위로 생성하고,
    actions를 생략하면 역할 기본 행동을 부여합니다.
    """
    try:
        character = service.create_character(
            name=request.name,
            role=request.role,
            traits=request.traits.model_dump(exclude_none=True) if request.traits else None,
            current_mood=request.current_mood,
            memory_bank=request.memory_bank,
            routines=[r.model_dump() for r in request.routines],
            actions=[a.model_dump() for a in request.actions],
            image_url=request.image_url,
        )
    except ServiceError as e:
        raise_http(e)
    return build_character_info(character)


# ── 상태 ─────────────────────────────────────────────────────


@router.get("/status", response_model=StatusListResponse)
def list_statuses(
    include_inactive: bool = False,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: CharacterService = Depends(get_character_service),
) -> StatusListResponse:
    """전체 캐릭터 활동 상태 + 요약"""
    statuses, summary = service.get_all_statuses(
        include_inactive=include_inactive, limit=limit, offset=offset
    )
    return StatusListResponse(
        statuses=[build_status_info(s) for s in statuses],
        summary=summary,
    )


@router.get(
    "/{character_id}/status",
    response_model=CharacterStatusInfo,
    responses={404: {"model": ErrorResponse}},
)
def get_status(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterStatusInfo:
    status = service.get_status(character_id)
    if status is None:
        raise _not_found(character_id)
    return build_status_info(status)


@router.put(
    "/{character_id}/status",
    response_model=CharacterStatusInfo,
    responses={404: {"model": ErrorResponse}},
)
def update_status(
    character_id: str,
    request: StatusUpdateRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterStatusInfo:
    """기분/활성 여부 수동 조정"""
    status = service.update_status(character_id, mood=request.mood, is_active=request.is_active)
    if status is None:
        raise _not_found(character_id)
    return build_status_info(status)


# ── 상세/수정/삭제 ───────────────────────────────────────────


@router.get(
    "/{character_id}",
    response_model=CharacterInfo,
    responses={404: {"model": ErrorResponse}},
)
def get_character(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterInfo:
    character = service.get_character(character_id)
    if character is None:
        raise _not_found(character_id)
    return build_character_info(character)


@router.put(
    "/{character_id}",
    response_model=CharacterInfo,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_character(
    character_id: str,
    request: CharacterUpdateRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterInfo:
    """부분 갱신. traits는 지정한 값만 기존 값에 병합됩니다."""
    changes = request.model_dump(exclude_unset=True)
    if request.traits is not None:
        changes["traits"] = request.traits.model_dump(exclude_none=True)

    try:
        character = service.update_character(character_id, changes)
    except ServiceError as e:
        raise_http(e)
    if character is None:
        raise _not_found(character_id)
    return build_character_info(character)


@router.delete(
    "/{character_id}",
    responses={404: {"model": ErrorResponse}},
)
def delete_character(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> dict[str, object]:
    """Soft delete (is_active=False)"""
    if not service.delete_character(character_id):
        raise _not_found(character_id)
    return {"success": True, "character_id": character_id}


# ── 1:1 대화 ─────────────────────────────────────────────────


@router.post(
    "/{character_id}/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def chat_with_character(
    character_id: str,
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    1:1 대화

    사용자 메시지를 저장하고 캐릭터의 응답 여부를 판정합니다.
    응답하지 않으면 replies가 비어 있습니다.
    """
    try:
        result = service.direct_chat(character_id, request.message)
    except ServiceError as e:
        raise_http(e)
    return build_chat_response(result)


@router.get(
    "/{character_id}/chat",
    response_model=HistoryResponse,
)
def get_chat_history(
    character_id: str,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: ChatService = Depends(get_chat_service),
) -> HistoryResponse:
    conversation_id, messages, has_more = service.direct_history(
        character_id, limit=limit, offset=offset
    )
    return HistoryResponse(
        conversation_id=conversation_id,
        messages=[build_message_out(m) for m in messages],
        has_more=has_more,
    )
