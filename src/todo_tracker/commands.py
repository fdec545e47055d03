"""対話シェルで使用するコマンド定義"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Command(Enum):
    """シェルコマンド（値はキー文字列）"""

    HELP = "help"
    LIST = "list"
    ADD = "add"
    REMOVE = "remove"
    COMPLETE = "complete"
    REOPEN = "reopen"
    CLEAR = "clear"
    SAVE = "save"
    LOAD = "load"
    EXIT = "exit"

    @property
    def key(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> Optional["Command"]:
        """入力文字列をコマンドに変換（大文字小文字を区別しない）"""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


_DESCRIPTIONS = {
    Command.HELP: "Displays a help message",
    Command.LIST: "Lists all todo entries",
    Command.ADD: "Adds a new todo entry",
    Command.REMOVE: "Removes a todo entry by its id",
    Command.COMPLETE: "Marks a todo entry as done",
    Command.REOPEN: "Marks a done todo entry as pending again",
    Command.CLEAR: "Clears all todo entries",
    Command.SAVE: "Saves the current todo entries to the state file",
    Command.LOAD: "Loads the todo entries from the state file",
    Command.EXIT: "Exits the program",
}
