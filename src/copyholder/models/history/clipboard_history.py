# region Docstring
"""
copyholder.models.history.clipboard_history
Persistence and domain models for clipboard history entries.
Overview:
- Provides the SQLAlchemy entity persisting one captured clipboard snippet with
    its capture timestamp.
- Provides the Pydantic model mirroring the persisted entity for safe I/O; this
    is the only representation handed out by the history store.
Contents:
- SQLAlchemy entities:
    - HistoryEntryEntity:
        Stores the entry id, the text content, and the capture timestamp. Includes
        helpers for equality, hashing, and conversion to a HistoryEntry Pydantic
        model via the .model property.
- Pydantic models:
    - HistoryEntry:
        Frozen domain model of a single clipboard history entry. Entries are never
        edited after capture, only deleted.
- Functions:
    - new_entry_id():
        Generates the opaque identifier assigned to a new entry.
Design notes:
- created_at is indexed since every listing and retention sweep orders or
    filters on it.
- content is indexed for the duplicate check done before every insert. The
    engine checks for an existing entry before inserting.
- seq is an autoincrement tiebreaker so entries captured within the same clock
    tick still list newest first.
"""
# endregion
# region Imports
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from copyholder.database import Base
from copyholder.utils import ensure_utc


# endregion
# region Identifiers
def new_entry_id() -> str:
    """Opaque unique identifier for a new history entry."""
    return uuid4().hex


# endregion
# region SQLAlchemy Model
class HistoryEntryEntity(Base):
    """
    Model representing a captured clipboard history entry.
    Attributes:
        seq (int): Autoincrement primary key, insertion order.
        id (str): Opaque unique identifier exposed to callers.
        content (str): The clipboard text.
        created_at (datetime): Timestamp when the content was captured.
    """

    __tablename__ = "clipboard_history"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, default=new_entry_id
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<HistoryEntry(id='{self.id}', created_at={self.created_at})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HistoryEntryEntity):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def model(self) -> "HistoryEntry":
        return HistoryEntry(
            id=self.id,
            content=self.content,
            created_at=self.created_at,
        )


# endregion
# region Pydantic Model
class HistoryEntry(BaseModel):
    id: str = Field(..., description="The unique ID of the clipboard history entry")
    content: str = Field(..., description="The captured clipboard text")
    created_at: datetime = Field(
        ..., description="Timestamp (UTC) of when the text was captured"
    )

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "3f0c2a9e5b7d4c1e8a6f0b2d4e6a8c0e",
                    "content": "Sample clipboard text",
                    "created_at": "2025-07-15T12:00:00Z",
                }
            ]
        },
    )

    @field_validator("created_at", mode="after")
    def validate_created_at(cls, v: datetime) -> datetime:
        return ensure_utc(v)


# endregion

__all__ = ["HistoryEntryEntity", "HistoryEntry", "new_entry_id"]
