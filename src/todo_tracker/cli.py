#!/usr/bin/env python3
"""
Todo Tracker CLI - TODOリストを管理するコマンドラインインターフェース

Usage:
    todo-tracker [--config PATH] [--state-file PATH] [--log-level LEVEL] [shell]
    todo-tracker list [--status all|pending|done] [--format json|text]
    todo-tracker add --name "名前" [--description "詳細"] [--format json|text]
    todo-tracker get --id ID [--format json|text]
    todo-tracker remove --id ID [--format json|text]
    todo-tracker complete --id ID [--format json|text]
    todo-tracker reopen --id ID [--format json|text]
    todo-tracker clear --yes [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import LOG_LEVELS, Config, load_config
from .exceptions import EntryNotFoundError, TodoTrackerError, ValidationError
from .formatting import format_todo_json, format_todo_text, pluralize
from .logger import setup_logger
from .models import TodoEntry, TodoStatus
from .repository import TodoRepository
from .shell import TodoShell
from .storage import StateFile

logger = logging.getLogger(__name__)


def _print_entry(todo: TodoEntry, output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(format_todo_json(todo), ensure_ascii=False))
    else:
        print(f"{prefix}{format_todo_text(todo)}")


def cmd_list(repo: TodoRepository, status: str, output_format: str) -> int:
    """Todoリストを表示"""
    items = repo.list(None if status == "all" else TodoStatus(status))
    if output_format == "json":
        print(json.dumps([format_todo_json(item) for item in items], ensure_ascii=False))
    elif not items:
        print("Nothing to list")
    else:
        for item in items:
            print(format_todo_text(item))
    return 0


def cmd_add(
    repo: TodoRepository,
    state_file: StateFile,
    name: str,
    description: str,
    output_format: str,
) -> int:
    """新しいTodoを追加"""
    created = repo.add(name, description)
    state_file.save(repo)
    _print_entry(created, output_format, prefix="Added: ")
    return 0


def cmd_get(repo: TodoRepository, todo_id: int, output_format: str) -> int:
    """特定のTodoを取得"""
    todo = repo.get(todo_id)
    if todo is None:
        raise EntryNotFoundError(todo_id)
    _print_entry(todo, output_format)
    return 0


def cmd_remove(
    repo: TodoRepository, state_file: StateFile, todo_id: int, output_format: str
) -> int:
    """Todoを削除"""
    removed = repo.remove(todo_id)
    if removed is None:
        raise EntryNotFoundError(todo_id)
    state_file.save(repo)

    if output_format == "json":
        print(json.dumps({"deleted": True, "id": todo_id}, ensure_ascii=False))
    else:
        print(f"Removed entry {removed.name}")
    return 0


def cmd_complete(
    repo: TodoRepository, state_file: StateFile, todo_id: int, output_format: str
) -> int:
    """Todoを完了状態にする"""
    updated = repo.complete(todo_id)
    if updated is None:
        raise EntryNotFoundError(todo_id)
    state_file.save(repo)
    _print_entry(updated, output_format, prefix="Completed: ")
    return 0


def cmd_reopen(
    repo: TodoRepository, state_file: StateFile, todo_id: int, output_format: str
) -> int:
    """完了済みTodoを未完了に戻す"""
    updated = repo.reopen(todo_id)
    if updated is None:
        raise EntryNotFoundError(todo_id)
    state_file.save(repo)
    _print_entry(updated, output_format, prefix="Reopened: ")
    return 0


def cmd_clear(
    repo: TodoRepository, state_file: StateFile, confirmed: bool, output_format: str
) -> int:
    """すべてのTodoを削除"""
    if not confirmed:
        raise ValidationError("Refusing to clear entries without --yes")

    count = repo.clear()
    if count:
        state_file.save(repo)

    if output_format == "json":
        print(json.dumps({"cleared": count}, ensure_ascii=False))
    elif count == 0:
        print("Nothing to clear")
    else:
        print(f"{pluralize(count, 'entry', 'entries')} cleared")
    return 0


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-tracker",
        description="Todo Tracker - コマンドラインTODOリスト管理",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, help="YAML設定ファイルのパス")
    parser.add_argument(
        "--state-file",
        type=str,
        help="状態ファイルのパス（デフォルト: state.yaml）",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="ログレベル（デフォルト: WARNING）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド")

    # shell コマンド
    subparsers.add_parser("shell", help="対話シェルを起動（デフォルト）")

    # list コマンド
    parser_list = subparsers.add_parser("list", help="TODOリストを表示")
    parser_list.add_argument(
        "--status",
        choices=["all", "pending", "done"],
        default="all",
        help="表示するステータス（デフォルト: all）",
    )
    _add_format_argument(parser_list)

    # add コマンド
    parser_add = subparsers.add_parser("add", help="新しいTODOを追加")
    parser_add.add_argument("--name", required=True, help="TODOの名前")
    parser_add.add_argument("--description", default="", help="TODOの詳細説明")
    _add_format_argument(parser_add)

    # get / remove / complete / reopen コマンド
    for name, help_text in (
        ("get", "特定のTODOを取得"),
        ("remove", "TODOを削除"),
        ("complete", "TODOを完了状態にする"),
        ("reopen", "完了済みTODOを未完了に戻す"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--id", type=int, required=True, help="対象TODOのID")
        _add_format_argument(sub)

    # clear コマンド
    parser_clear = subparsers.add_parser("clear", help="すべてのTODOを削除")
    parser_clear.add_argument("--yes", action="store_true", help="確認なしで削除を実行")
    _add_format_argument(parser_clear)

    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """設定を読み込み、コマンドライン引数で上書き"""
    config = load_config(args.config)
    if args.state_file:
        config.state_file = args.state_file
    if args.log_level:
        config.log_level = args.log_level
    return config


def run_command(args: argparse.Namespace, config: Config) -> int:
    state_file = StateFile(config.state_file)
    loaded = state_file.load_or_empty()
    if loaded.version_warning:
        print(f"Warning: {loaded.version_warning}", file=sys.stderr)
    repo = loaded.to_repository()
    command = args.command or "shell"

    if command == "shell":
        return TodoShell(repo, state_file, autosave=config.autosave).run()
    elif command == "list":
        return cmd_list(repo, args.status, args.format)
    elif command == "add":
        return cmd_add(repo, state_file, args.name, args.description, args.format)
    elif command == "get":
        return cmd_get(repo, args.id, args.format)
    elif command == "remove":
        return cmd_remove(repo, state_file, args.id, args.format)
    elif command == "complete":
        return cmd_complete(repo, state_file, args.id, args.format)
    elif command == "reopen":
        return cmd_reopen(repo, state_file, args.id, args.format)
    elif command == "clear":
        return cmd_clear(repo, state_file, args.yes, args.format)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except TodoTrackerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logger(log_level=config.log_level, log_file=config.log_file)

    try:
        return run_command(args, config)
    except TodoTrackerError as exc:
        logger.debug("Command %s failed: %s", args.command or "shell", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
