"""
対話型Todo Trackerシェル

標準入出力ベースのREPLで、メモリ上のTODOリストを操作し、
saveコマンドで状態ファイルへ書き込む。

使用例:
    todo-tracker shell
    todo-tracker --state-file ~/todo.yaml
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, Optional, TextIO

from .commands import Command
from .exceptions import StorageError, TodoTrackerError
from .formatting import format_todo_text, pluralize
from .repository import TodoRepository
from .storage import StateFile

logger = logging.getLogger(__name__)

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")
MUTATING_COMMANDS = (
    Command.ADD,
    Command.REMOVE,
    Command.COMPLETE,
    Command.REOPEN,
    Command.CLEAR,
)


class TodoShell:
    """TODOリストを操作する対話セッション"""

    def __init__(
        self,
        repository: TodoRepository,
        state_file: StateFile,
        *,
        input_func: Callable[[], str] = input,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        autosave: bool = False,
    ) -> None:
        self.repository = repository
        self.state_file = state_file
        self.autosave = autosave
        self._input = input_func
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        self.exit_requested = False
        self._handlers: Dict[Command, Callable[[], None]] = {
            Command.HELP: self.do_help,
            Command.LIST: self.do_list,
            Command.ADD: self.do_add,
            Command.REMOVE: self.do_remove,
            Command.COMPLETE: self.do_complete,
            Command.REOPEN: self.do_reopen,
            Command.CLEAR: self.do_clear,
            Command.SAVE: self.do_save,
            Command.LOAD: self.do_load,
            Command.EXIT: self.do_exit,
        }

    def _print(self, message: str) -> None:
        print(message, file=self._out)

    def _error(self, message: str) -> None:
        print(message, file=self._err)

    def _read(self, prompt: str) -> Optional[str]:
        """プロンプトを表示して1行読み込む（EOF・中断時はNone）"""
        self._print(prompt)
        try:
            return self._input().strip()
        except (EOFError, KeyboardInterrupt):
            return None

    def _confirm(self, question: str) -> bool:
        """y/nで確認を求める。入力が中断された場合は拒否として扱う。"""
        while True:
            answer = self._read(f"{question} (y/n)")
            if answer is None:
                return False
            answer = answer.lower()
            if answer in YES_ANSWERS:
                return True
            if answer in NO_ANSWERS:
                return False
            self._error("Unknown input")

    def _read_id(self, verb: str) -> Optional[int]:
        raw = self._read(f"Id of entry to {verb}:")
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            self._error(f"No todo entry found with id {raw}")
            return None

    def run(self) -> int:
        """コマンドループを実行し、終了コードを返す"""
        self._print("Todo Tracker")

        while not self.exit_requested:
            line = self._read("Enter a command:")
            if line is None:
                break
            if not line:
                continue

            command = Command.parse(line)
            if command is None:
                self._error("Unknown command")
                continue

            self.execute(command)

        logger.debug("Shell session finished")
        return 0

    def execute(self, command: Command) -> None:
        try:
            self._handlers[command]()
            if self.autosave and command in MUTATING_COMMANDS and self.repository.is_dirty:
                self.state_file.save(self.repository)
        except TodoTrackerError as exc:
            logger.debug("Command %s failed: %s", command.key, exc)
            self._error(str(exc))

    def do_help(self) -> None:
        for command in Command:
            self._print(f"{command} ({command.key}) : {command.description}")

    def do_list(self) -> None:
        entries = self.repository.list()
        if not entries:
            self._print("Nothing to list")
            return
        for entry in entries:
            self._print(format_todo_text(entry))

    def do_add(self) -> None:
        name = self._read("Name of todo entry:")
        if name is None:
            return
        description = self._read("Description of todo entry:")
        if description is None:
            return
        entry = self.repository.add(name, description)
        self._print(f"Added entry {entry.id}: {entry.name}")

    def do_remove(self) -> None:
        todo_id = self._read_id("remove")
        if todo_id is None:
            return
        entry = self.repository.remove(todo_id)
        if entry is None:
            self._error(f"No todo entry found with id {todo_id}")
            return
        self._print(f"Removed entry {entry.name}")

    def do_complete(self) -> None:
        todo_id = self._read_id("complete")
        if todo_id is None:
            return
        entry = self.repository.complete(todo_id)
        if entry is None:
            self._error(f"No todo entry found with id {todo_id}")
            return
        self._print(f"Completed entry {entry.name}")

    def do_reopen(self) -> None:
        todo_id = self._read_id("reopen")
        if todo_id is None:
            return
        entry = self.repository.reopen(todo_id)
        if entry is None:
            self._error(f"No todo entry found with id {todo_id}")
            return
        self._print(f"Reopened entry {entry.name}")

    def do_clear(self) -> None:
        count = self.repository.clear()
        if count == 0:
            self._print("Nothing to clear")
            return
        self._print(f"{pluralize(count, 'entry', 'entries')} cleared")

    def do_save(self) -> None:
        if len(self.repository) == 0 and not self.state_file.exists():
            self._print("Nothing to save")
            return
        self.state_file.save(self.repository)
        self._print(
            f"Saved {pluralize(len(self.repository), 'entry', 'entries')} to {self.state_file.path}"
        )

    def do_load(self) -> None:
        if not self.state_file.exists():
            self._error(f"No state data file found at {self.state_file.path}")
            return

        try:
            loaded = self.state_file.load()
        except StorageError as exc:
            logger.debug("Failed to load %s: %s", self.state_file.path, exc)
            self._error(str(exc))
            self._error("Current entries were left unchanged")
            return

        if loaded.version_warning:
            self._error(loaded.version_warning)

        if len(self.repository) and self.repository.list() != loaded.entries:
            if not self._confirm("Override current entries?"):
                return

        self.repository.replace(loaded.entries, loaded.next_id)
        self.repository.mark_saved()
        self._print(
            f"Loaded {pluralize(len(loaded.entries), 'entry', 'entries')} from {self.state_file.path}"
        )

    def do_exit(self) -> None:
        if self.repository.is_dirty:
            if not self._confirm("You have unsaved changes. Are you sure you want to quit?"):
                return
        self.exit_requested = True
