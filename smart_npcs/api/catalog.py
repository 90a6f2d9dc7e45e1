"""Action catalog and memory template endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from smart_npcs.api.deps import (
    build_action_out,
    build_memory_template_out,
    get_action_catalog,
    get_memory_templates,
    raise_http,
)
from smart_npcs.api.schemas import (
    ActionCreateRequest,
    ActionOut,
    ErrorResponse,
    MemoryTemplateCreateRequest,
    MemoryTemplateOut,
)
from smart_npcs.services.catalog_service import ActionCatalogService, MemoryTemplateService
from smart_npcs.services.errors import ServiceError

actions_router = APIRouter(prefix="/actions", tags=["catalog"])
memory_templates_router = APIRouter(prefix="/memory-templates", tags=["catalog"])


# ── 행동 ─────────────────────────────────────────────────────


@actions_router.get("", response_model=list[ActionOut])
def list_actions(
    service: ActionCatalogService = Depends(get_action_catalog),
) -> list[ActionOut]:
    return [build_action_out(a) for a in service.list_actions()]


@actions_router.post(
    "",
    response_model=ActionOut,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
def create_action(
    request: ActionCreateRequest,
    service: ActionCatalogService = Depends(get_action_catalog),
) -> ActionOut:
    try:
        action = service.create_action(request.name, request.description)
    except ServiceError as e:
        raise_http(e)
    return build_action_out(action)


@actions_router.delete("/{action_id}", responses={404: {"model": ErrorResponse}})
def delete_action(
    action_id: str,
    service: ActionCatalogService = Depends(get_action_catalog),
) -> dict[str, object]:
    if not service.delete_action(action_id):
        raise HTTPException(status_code=404, detail=f"Action not found: {action_id}")
    return {"success": True, "action_id": action_id}


# ── 기억 템플릿 ──────────────────────────────────────────────


@memory_templates_router.get("", response_model=list[MemoryTemplateOut])
def list_memory_templates(
    service: MemoryTemplateService = Depends(get_memory_templates),
) -> list[MemoryTemplateOut]:
    return [build_memory_template_out(t) for t in service.list_templates()]


@memory_templates_router.post(
    "",
    response_model=MemoryTemplateOut,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
def create_memory_template(
    request: MemoryTemplateCreateRequest,
    service: MemoryTemplateService = Depends(get_memory_templates),
) -> MemoryTemplateOut:
    try:
        template = service.create_template(request.heading, request.content)
    except ServiceError as e:
        raise_http(e)
    return build_memory_template_out(template)


@memory_templates_router.delete("/{template_id}", responses={404: {"model": ErrorResponse}})
def delete_memory_template(
    template_id: str,
    service: MemoryTemplateService = Depends(get_memory_templates),
) -> dict[str, object]:
    if not service.delete_template(template_id):
        raise HTTPException(status_code=404, detail=f"Memory template not found: {template_id}")
    return {"success": True, "template_id": template_id}
