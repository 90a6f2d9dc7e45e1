"""SQLAlchemy declarative base and ORM models.

Characters, conversations (direct chats and rooms), participants, messages,
and the shared action / memory-template catalogs.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import JSON


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class CharacterModel(Base):
    """ORM model for NPC characters."""

    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)

    traits: Mapped[dict] = mapped_column(JSON, nullable=False)
    current_mood: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)

    memory_bank: Mapped[list] = mapped_column(JSON, default=list)
    routines: Mapped[list] = mapped_column(JSON, default=list)
    actions: Mapped[list] = mapped_column(JSON, default=list)

    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    temporary_behavior_prompt: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    participations: Mapped[list["ParticipantModel"]] = relationship(
        "ParticipantModel",
        back_populates="character",
    )

    __table_args__ = (Index("idx_character_role", "role"),)


class ConversationModel(Base):
    """ORM model for conversations.

    kind="direct" is a one-on-one chat, kind="room" is a group room.
    """

    __tablename__ = "conversations"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    kind: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_members: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    extra: Mapped[dict] = mapped_column("metadata", JSON, default=dict)
    # one direct chat per character; NULL for rooms
    direct_character_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("characters.id"), nullable=True, unique=True
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_message_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    participants: Mapped[list["ParticipantModel"]] = relationship(
        "ParticipantModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="ParticipantModel.joined_at",
    )
    messages: Mapped[list["MessageModel"]] = relationship(
        "MessageModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="MessageModel.message_order",
    )

    __table_args__ = (Index("idx_conversation_kind", "kind", "is_active"),)


class ParticipantModel(Base):
    """ORM model for conversation membership."""

    __tablename__ = "conversation_participants"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    conversation_id: Mapped[str] = mapped_column(
        String, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )
    character_id: Mapped[str] = mapped_column(
        String, ForeignKey("characters.id"), nullable=False
    )
    member_role: Mapped[str] = mapped_column(String, nullable=False, default="member")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    joined_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    last_seen: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    conversation: Mapped["ConversationModel"] = relationship(
        "ConversationModel", back_populates="participants"
    )
    character: Mapped["CharacterModel"] = relationship(
        "CharacterModel", back_populates="participations"
    )

    __table_args__ = (
        UniqueConstraint("conversation_id", "character_id", name="uq_participant"),
        Index("idx_participant_character", "character_id"),
    )


class MessageModel(Base):
    """ORM model for messages. character_id NULL means the user spoke."""

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    conversation_id: Mapped[str] = mapped_column(
        String, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )
    character_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("characters.id"), nullable=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    message_type: Mapped[str] = mapped_column(String, nullable=False, default="chat")
    extra: Mapped[dict] = mapped_column("metadata", JSON, default=dict)
    message_order: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    conversation: Mapped["ConversationModel"] = relationship(
        "ConversationModel", back_populates="messages"
    )
    character: Mapped["CharacterModel | None"] = relationship("CharacterModel")

    __table_args__ = (
        UniqueConstraint("conversation_id", "message_order", name="uq_message_order"),
        Index("idx_message_conversation_time", "conversation_id", "timestamp"),
    )


class ActionModel(Base):
    """Shared action catalog entry (independent of per-character actions)."""

    __tablename__ = "actions"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class MemoryTemplateModel(Base):
    """Reusable memory snippet offered when editing a character's memory bank."""

    __tablename__ = "memory_templates"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    heading: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
