"""Todo Tracker実行用エントリポイント

Usage:
    python -m todo_tracker <command> [options]
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
