"""Todoエントリの表示用整形"""

from __future__ import annotations

from typing import Any, Dict

from .models import TodoEntry


def format_todo_text(todo: TodoEntry) -> str:
    """Todoエントリをテキスト形式で整形"""
    mark = "x" if todo.done else " "
    description = todo.description.strip() or "no description"
    return f"[{todo.id}] [{mark}] {todo.name} | {description}"


def format_todo_json(todo: TodoEntry) -> Dict[str, Any]:
    """Todoエントリを辞書形式に変換"""
    return {
        "id": todo.id,
        "name": todo.name,
        "description": todo.description,
        "status": todo.status.value,
        "done": todo.done,
        "created_at": todo.created_at,
        "completed_at": todo.completed_at,
    }


def pluralize(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"
