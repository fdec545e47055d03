"""Pydantic schemas for the persisted state file."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .models import TodoEntry, TodoStatus

MANIFEST_VERSION = 1


class TodoEntryRecord(BaseModel):
    """One entry as stored on disk."""

    id: int = Field(..., ge=1, description="Unique identifier within the state file")
    name: str = Field(..., min_length=1, description="Short name of the entry")
    description: str = Field(default="", description="Free-text description")
    status: TodoStatus = Field(default=TodoStatus.PENDING)
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    completed_at: Optional[str] = Field(default=None, description="ISO-8601 completion timestamp")

    @classmethod
    def from_entry(cls, entry: TodoEntry) -> "TodoEntryRecord":
        return cls(
            id=entry.id,
            name=entry.name,
            description=entry.description,
            status=entry.status,
            created_at=entry.created_at,
            completed_at=entry.completed_at,
        )

    def to_entry(self) -> TodoEntry:
        return TodoEntry(
            id=self.id,
            name=self.name,
            description=self.description,
            status=self.status,
            created_at=self.created_at,
            completed_at=self.completed_at,
        )


class StateDocument(BaseModel):
    """Top-level document of the state file."""

    manifest_version: int = Field(..., ge=0)
    next_id: int = Field(default=1, ge=1)
    entries: List[TodoEntryRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_ids(self) -> "StateDocument":
        ids = [record.id for record in self.entries]
        if len(ids) != len(set(ids)):
            raise ValueError("duplicate entry ids")
        if ids and self.next_id <= max(ids):
            raise ValueError(f"next_id {self.next_id} must be greater than every entry id")
        return self
