"""Command-line TODO list manager with a YAML state file."""

from .commands import Command
from .config import Config, load_config
from .models import TodoEntry, TodoStatus
from .repository import TodoRepository
from .storage import LoadedState, StateFile

__all__ = [
    "Command",
    "Config",
    "load_config",
    "TodoEntry",
    "TodoStatus",
    "TodoRepository",
    "LoadedState",
    "StateFile",
]
