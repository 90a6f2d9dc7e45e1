"""ORM row <-> core dataclass conversion."""

from typing import Any

from smart_npcs.core.character.models import (
    CharacterAction,
    CharacterData,
    DailyRoutine,
    Role,
    TraitBag,
    clamp_unit,
)
from smart_npcs.db.models import CharacterModel


def _routine_from_dict(data: dict[str, Any]) -> DailyRoutine:
    return DailyRoutine(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        time_slot=str(data.get("timeSlot", data.get("time_slot", "morning"))),
        action=str(data.get("action", "")),
        priority=int(data.get("priority", 0) or 0),
    )


def _action_from_dict(data: dict[str, Any]) -> CharacterAction:
    return CharacterAction(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
    )


def character_from_orm(row: CharacterModel) -> CharacterData:
    """Build the core view of a character row."""
    return CharacterData(
        character_id=row.id,
        name=row.name,
        role=Role.parse(row.role),
        traits=TraitBag.from_dict(row.traits),
        current_mood=clamp_unit(row.current_mood),
        memory_bank=[str(m) for m in (row.memory_bank or [])],
        routines=[_routine_from_dict(r) for r in (row.routines or []) if isinstance(r, dict)],
        actions=[_action_from_dict(a) for a in (row.actions or []) if isinstance(a, dict)],
        image_url=row.image_url,
        temporary_behavior_prompt=row.temporary_behavior_prompt,
        is_active=row.is_active,
    )


def character_to_columns(data: CharacterData) -> dict[str, Any]:
    """Column values for a CharacterModel insert or update."""
    return {
        "name": data.name,
        "role": data.role.value,
        "traits": data.traits.to_dict(),
        "current_mood": data.current_mood,
        "memory_bank": list(data.memory_bank),
        "routines": [r.to_dict() for r in data.routines],
        "actions": [a.to_dict() for a in data.actions],
        "image_url": data.image_url,
        "temporary_behavior_prompt": data.temporary_behavior_prompt,
        "is_active": data.is_active,
    }
