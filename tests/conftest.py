"""共通フィクスチャ"""

import pytest

from todo_tracker.repository import TodoRepository
from todo_tracker.storage import StateFile


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """ユーザー環境の設定がテストに影響しないようにする"""
    for name in (
        "TODO_TRACKER_CONFIG",
        "TODO_TRACKER_STATE_FILE",
        "TODO_TRACKER_LOG_LEVEL",
        "TODO_TRACKER_LOG_FILE",
        "TODO_TRACKER_AUTOSAVE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def repo() -> TodoRepository:
    return TodoRepository()


@pytest.fixture
def state_file(tmp_path) -> StateFile:
    return StateFile(tmp_path / "state.yaml")
