"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smart_npcs.db.database import get_db

router = APIRouter()


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, str]:
    """Return application, database and AI backend status."""
    provider = getattr(request.app.state, "ai_provider", None)
    ai = provider.name if provider is not None else "templates"
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected", "ai_provider": ai}
    except SQLAlchemyError:
        return {"status": "error", "database": "disconnected", "ai_provider": ai}
