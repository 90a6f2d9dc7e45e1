"""Catalog Service: 공용 행동 목록과 기억 템플릿

캐릭터 편집 화면에서 고르는 재사용 항목. 캐릭터별 actions/memory_bank와는 별도 테이블.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from smart_npcs.core.logging import get_logger
from smart_npcs.db.models import ActionModel, MemoryTemplateModel
from smart_npcs.services.errors import ServiceError

logger = get_logger(__name__)


@dataclass
class ActionEntry:
    id: str
    name: str
    description: str
    created_at: datetime

    @classmethod
    def from_orm(cls, row: ActionModel) -> "ActionEntry":
        return cls(
            id=row.id,
            name=row.name,
            description=row.description or "",
            created_at=row.created_at,
        )


@dataclass
class MemoryTemplateEntry:
    id: str
    heading: str
    content: str
    created_at: datetime

    @classmethod
    def from_orm(cls, row: MemoryTemplateModel) -> "MemoryTemplateEntry":
        return cls(
            id=row.id,
            heading=row.heading,
            content=row.content or "",
            created_at=row.created_at,
        )


class ActionCatalogService:
    """행동 목록 (이름 순)"""

    def __init__(self, db_session: Session) -> None:
        self._db = db_session

    def list_actions(self) -> List[ActionEntry]:
        rows = self._db.query(ActionModel).order_by(ActionModel.name, ActionModel.id).all()
        return [ActionEntry.from_orm(r) for r in rows]

    def create_action(self, name: str, description: str = "") -> ActionEntry:
        name = (name or "").strip()
        if not name:
            raise ServiceError("Name is required")

        row = ActionModel(
            id=f"action_{uuid.uuid4().hex}",
            name=name,
            description=description or "",
        )
        self._db.add(row)
        self._db.commit()
        logger.info("Action created: %s (%s)", row.id, name)
        return ActionEntry.from_orm(row)

    def delete_action(self, action_id: str) -> bool:
        """없으면 False"""
        row = self._db.query(ActionModel).filter(ActionModel.id == action_id).first()
        if row is None:
            return False
        self._db.delete(row)
        self._db.commit()
        logger.info("Action deleted: %s", action_id)
        return True


class MemoryTemplateService:
    """기억 템플릿 (제목 순)"""

    def __init__(self, db_session: Session) -> None:
        self._db = db_session

    def list_templates(self) -> List[MemoryTemplateEntry]:
        rows = (
            self._db.query(MemoryTemplateModel)
            .order_by(MemoryTemplateModel.heading, MemoryTemplateModel.id)
            .all()
        )
        return [MemoryTemplateEntry.from_orm(r) for r in rows]

    def create_template(self, heading: str, content: str = "") -> MemoryTemplateEntry:
        heading = (heading or "").strip()
        if not heading:
            raise ServiceError("Heading is required")

        row = MemoryTemplateModel(
            id=f"memory_{uuid.uuid4().hex}",
            heading=heading,
            content=content or "",
        )
        self._db.add(row)
        self._db.commit()
        logger.info("Memory template created: %s", row.id)
        return MemoryTemplateEntry.from_orm(row)

    def delete_template(self, template_id: str) -> bool:
        """없으면 False"""
        row = (
            self._db.query(MemoryTemplateModel)
            .filter(MemoryTemplateModel.id == template_id)
            .first()
        )
        if row is None:
            return False
        self._db.delete(row)
        self._db.commit()
        logger.info("Memory template deleted: %s", template_id)
        return True
