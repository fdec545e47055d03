from __future__ import annotations

import logging
import dataclasses
from datetime import datetime, timezone
from typing import Iterable, Optional

from .exceptions import ValidationError
from .models import TodoEntry, TodoStatus

logger = logging.getLogger(__name__)


class TodoRepository:
    """メモリ上のTODOリスト。永続化はStateFileが担当する。"""

    def __init__(self, entries: Iterable[TodoEntry] = (), next_id: int = 1):
        self._entries: list[TodoEntry] = []
        self._next_id = 1
        self._saved: tuple[tuple[TodoEntry, ...], int] = ((), 1)
        self.replace(entries, next_id)
        self.mark_saved()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._entries)

    def list(self, status: Optional[TodoStatus] = None) -> list[TodoEntry]:
        if status is None:
            return [*self._entries]
        return [entry for entry in self._entries if entry.status is status]

    def get(self, todo_id: int) -> Optional[TodoEntry]:
        for entry in self._entries:
            if entry.id == todo_id:
                return entry
        return None

    def add(self, name: str, description: str = "") -> TodoEntry:
        name = name.strip()
        if not name:
            raise ValidationError("Name of todo entry is required")

        entry = TodoEntry(
            id=self._next_id,
            name=name,
            description=description.strip(),
            status=TodoStatus.PENDING,
            created_at=self._now(),
        )
        self._next_id += 1
        self._entries.append(entry)
        logger.info("Added entry %d (%s)", entry.id, entry.name)
        return entry

    def remove(self, todo_id: int) -> Optional[TodoEntry]:
        entry = self.get(todo_id)
        if entry is None:
            return None
        self._entries.remove(entry)
        logger.info("Removed entry %d (%s)", entry.id, entry.name)
        return entry

    def complete(self, todo_id: int) -> Optional[TodoEntry]:
        entry = self.get(todo_id)
        if entry is None or entry.done:
            return entry
        entry.status = TodoStatus.DONE
        entry.completed_at = self._now()
        logger.info("Completed entry %d", entry.id)
        return entry

    def reopen(self, todo_id: int) -> Optional[TodoEntry]:
        entry = self.get(todo_id)
        if entry is None or not entry.done:
            return entry
        entry.status = TodoStatus.PENDING
        entry.completed_at = None
        logger.info("Reopened entry %d", entry.id)
        return entry

    def toggle(self, todo_id: int) -> Optional[TodoEntry]:
        entry = self.get(todo_id)
        if entry is None:
            return None
        return self.reopen(todo_id) if entry.done else self.complete(todo_id)

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cleared %d entries", count)
        return count

    def replace(self, entries: Iterable[TodoEntry], next_id: int = 1) -> None:
        """リスト全体を置き換える（状態ファイルの読み込み用）。

        Raises:
            ValidationError: IDが重複している場合
        """
        new_entries = [dataclasses.replace(entry) for entry in entries]
        ids = [entry.id for entry in new_entries]
        if len(ids) != len(set(ids)):
            raise ValidationError("Duplicate todo entry ids")
        self._entries = new_entries
        self._next_id = max([next_id, *(i + 1 for i in ids)])

    def snapshot(self) -> tuple[list[TodoEntry], int]:
        return [dataclasses.replace(entry) for entry in self._entries], self._next_id

    def mark_saved(self) -> None:
        entries, next_id = self.snapshot()
        self._saved = (tuple(entries), next_id)

    @property
    def is_dirty(self) -> bool:
        saved_entries, saved_next_id = self._saved
        return tuple(self._entries) != saved_entries or self._next_id != saved_next_id
