"""Room API endpoints."""

from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from smart_npcs.api.deps import (
    build_chat_response,
    build_member_out,
    build_message_out,
    build_room_out,
    get_chat_service,
    get_room_service,
    raise_http,
)
from smart_npcs.api.schemas import (
    ChatResponse,
    ErrorResponse,
    HistoryResponse,
    MemberAddRequest,
    MemberOut,
    MessageOut,
    RoomCreateRequest,
    RoomListResponse,
    RoomMessageRequest,
    RoomOut,
    RoomUpdateRequest,
)
from smart_npcs.core.logging import get_logger
from smart_npcs.services.chat_service import ChatService
from smart_npcs.services.chat_types import MessageType
from smart_npcs.services.errors import ServiceError
from smart_npcs.services.room_service import RoomService

logger = get_logger(__name__)

router = APIRouter(prefix="/rooms", tags=["rooms"])


def _not_found(room_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Room not found: {room_id}")


# ── 룸 ───────────────────────────────────────────────────────


@router.get("", response_model=RoomListResponse)
def list_rooms(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    include_inactive: bool = False,
    service: RoomService = Depends(get_room_service),
) -> RoomListResponse:
    rooms, total = service.list_rooms(
        limit=limit, offset=offset, include_inactive=include_inactive
    )
    return RoomListResponse(rooms=[build_room_out(r) for r in rooms], total=total)


@router.post(
    "",
    response_model=RoomOut,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def create_room(
    request: RoomCreateRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomOut:
    """룸 생성. character_ids의 캐릭터를 바로 참가시킵니다."""
    try:
        room = service.create_room(
            title=request.title,
            description=request.description,
            max_members=request.max_members,
            created_by=request.created_by,
            metadata=request.metadata,
            character_ids=request.character_ids,
        )
    except ServiceError as e:
        raise_http(e)
    return build_room_out(room)


@router.get(
    "/{room_id}",
    response_model=RoomOut,
    responses={404: {"model": ErrorResponse}},
)
def get_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> RoomOut:
    room = service.get_room(room_id)
    if room is None:
        raise _not_found(room_id)
    return build_room_out(room)


@router.put(
    "/{room_id}",
    response_model=RoomOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_room(
    room_id: str,
    request: RoomUpdateRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomOut:
    try:
        room = service.update_room(room_id, request.model_dump(exclude_unset=True))
    except ServiceError as e:
        raise_http(e)
    if room is None:
        raise _not_found(room_id)
    return build_room_out(room)


@router.delete(
    "/{room_id}",
    responses={404: {"model": ErrorResponse}},
)
def delete_room(
    room_id: str,
    hard: bool = False,
    service: RoomService = Depends(get_room_service),
) -> dict[str, object]:
    """기본은 비활성화. hard=true면 메시지와 멤버까지 삭제합니다."""
    if not service.delete_room(room_id, hard=hard):
        raise _not_found(room_id)
    return {"success": True, "room_id": room_id, "hard": hard}


# ── 멤버 ─────────────────────────────────────────────────────


@router.get(
    "/{room_id}/members",
    response_model=list[MemberOut],
    responses={404: {"model": ErrorResponse}},
)
def list_members(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> list[MemberOut]:
    members = service.list_members(room_id)
    if members is None:
        raise _not_found(room_id)
    return [build_member_out(m) for m in members]


@router.post(
    "/{room_id}/members",
    response_model=MemberOut,
    status_code=201,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
def add_member(
    room_id: str,
    request: MemberAddRequest,
    service: RoomService = Depends(get_room_service),
) -> MemberOut:
    """
    룸 참가

    - 404: 룸 또는 캐릭터 없음
    - 400: 비활성 룸 / 비활성 캐릭터
    - 409: 정원 초과 / 이미 참가 중
    """
    try:
        member = service.add_member(room_id, request.character_id, request.member_role)
    except ServiceError as e:
        raise_http(e)
    return build_member_out(member)


@router.delete(
    "/{room_id}/members/{character_id}",
    responses={404: {"model": ErrorResponse}},
)
def remove_member(
    room_id: str,
    character_id: str,
    service: RoomService = Depends(get_room_service),
) -> dict[str, object]:
    try:
        service.remove_member(room_id, character_id)
    except ServiceError as e:
        raise_http(e)
    return {"success": True, "room_id": room_id, "character_id": character_id}


# ── 대화 ─────────────────────────────────────────────────────


@router.get(
    "/{room_id}/chat",
    response_model=HistoryResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_room_history(
    room_id: str,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    before: Optional[datetime] = None,
    after: Optional[datetime] = None,
    service: ChatService = Depends(get_chat_service),
) -> HistoryResponse:
    try:
        messages, has_more = service.room_history(
            room_id, limit=limit, offset=offset, before=before, after=after
        )
    except ServiceError as e:
        raise_http(e)
    return HistoryResponse(
        conversation_id=room_id,
        messages=[build_message_out(m) for m in messages],
        has_more=has_more,
    )


@router.post(
    "/{room_id}/chat",
    response_model=Union[ChatResponse, MessageOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def send_room_message(
    room_id: str,
    request: RoomMessageRequest,
    service: ChatService = Depends(get_chat_service),
) -> Union[ChatResponse, MessageOut]:
    """
    룸 메시지 전송

    - character_id 없음: 사용자 메시지로 저장 후 활성 멤버 전원에 대해 턴 진행
    - character_id 있음: 해당 멤버 명의로 저장만 함 (턴 없음)
    """
    try:
        if request.character_id is None:
            return build_chat_response(service.room_chat(room_id, request.message))

        try:
            message_type = MessageType(request.message_type)
        except ValueError:
            raise HTTPException(
                status_code=400, detail=f"Unknown message_type: {request.message_type}"
            ) from None
        message = service.post_character_message(
            room_id,
            request.character_id,
            request.message,
            message_type=message_type,
            metadata=request.metadata,
        )
        return build_message_out(message)
    except ServiceError as e:
        raise_http(e)
