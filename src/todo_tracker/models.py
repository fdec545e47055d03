from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TodoStatus(str, Enum):
    """Todoエントリの状態。"""

    PENDING = "pending"
    DONE = "done"


@dataclass(slots=True)
class TodoEntry:
    """メモリ上で管理されるTodoエントリの表現。"""

    id: int
    name: str
    description: str
    status: TodoStatus
    created_at: str
    completed_at: Optional[str] = None

    @property
    def done(self) -> bool:
        return self.status is TodoStatus.DONE
