"""StateFileのテスト"""

import logging
import os
import stat
import sys

import pytest
import yaml

from todo_tracker.exceptions import StateFileCorruptError, StateFileNotFoundError
from todo_tracker.models import TodoStatus
from todo_tracker.repository import TodoRepository
from todo_tracker.schemas import MANIFEST_VERSION
from todo_tracker.storage import StateFile


def test_save_and_load_survives_restart(repo, state_file):
    """保存した状態が別インスタンスで復元できること"""
    repo.add("Buy milk", "2 liters")
    done = repo.add("Call mom")
    repo.complete(done.id)

    state_file.save(repo)
    assert not repo.is_dirty

    restored = StateFile(state_file.path).load().to_repository()
    names = [(e.name, e.description, e.status) for e in restored.list()]
    assert names == [
        ("Buy milk", "2 liters", TodoStatus.PENDING),
        ("Call mom", "", TodoStatus.DONE),
    ]
    assert restored.next_id == 3
    assert restored.add("Next").id == 3


def test_saved_document_layout(repo, state_file):
    """状態ファイルのYAML構造"""
    repo.add("会議準備", "資料作成")
    state_file.save(repo)

    data = yaml.safe_load(state_file.path.read_text(encoding="utf-8"))
    assert data["manifest_version"] == MANIFEST_VERSION
    assert data["next_id"] == 2
    assert data["entries"][0]["name"] == "会議準備"
    assert data["entries"][0]["status"] == "pending"
    # 一時ファイルが残っていないこと
    assert [p.name for p in state_file.path.parent.iterdir()] == ["state.yaml"]


def test_save_creates_parent_directories(tmp_path):
    state_file = StateFile(tmp_path / "nested" / "dir" / "state.yaml")
    state_file.save(TodoRepository())
    assert state_file.exists()
    assert state_file.load().entries == []


def test_load_missing_file(state_file):
    with pytest.raises(StateFileNotFoundError):
        state_file.load()
    assert state_file.load_or_empty().entries == []


@pytest.mark.parametrize(
    "content",
    [
        "entries: [unclosed",
        "- just\n- a list\n",
        "manifest_version: 1\nentries:\n  - id: 1\n",
        "manifest_version: 1\nnext_id: 3\nentries:\n"
        "  - {id: 1, name: A, created_at: t}\n"
        "  - {id: 1, name: B, created_at: t}\n",
        "manifest_version: 1\nnext_id: 1\nentries:\n  - {id: 4, name: A, created_at: t}\n",
        "manifest_version: 1\nentries:\n  - {id: 1, name: A, status: later, created_at: t}\n",
    ],
)
def test_load_corrupt_file(state_file, content):
    """不正な状態ファイルはStateFileCorruptErrorになること"""
    state_file.path.write_text(content, encoding="utf-8")
    with pytest.raises(StateFileCorruptError):
        state_file.load()


def test_load_newer_manifest_version_warns(state_file, caplog):
    state_file.path.write_text(
        "manifest_version: 99\nnext_id: 2\nentries:\n  - {id: 1, name: A, created_at: t}\n",
        encoding="utf-8",
    )
    with caplog.at_level(logging.INFO, logger="todo_tracker.storage"):
        loaded = state_file.load()

    assert loaded.version_mismatch == "newer"
    assert [e.name for e in loaded.entries] == ["A"]
    assert "newer version" in caplog.text


def test_current_manifest_version_has_no_mismatch(repo, state_file):
    state_file.save(repo)
    assert state_file.load().version_mismatch is None


def test_load_non_utf8_file(state_file):
    """UTF-8として読めない状態ファイルも破損として扱うこと"""
    state_file.path.write_bytes(b"manifest_version: 1\nentries: []\n# \xff\xfe\n")
    with pytest.raises(StateFileCorruptError):
        state_file.load()


def test_load_older_manifest_version(state_file):
    """古いマニフェストバージョンも読み込めること"""
    state_file.path.write_text(
        "manifest_version: 0\nnext_id: 2\nentries:\n  - {id: 1, name: A, created_at: t}\n",
        encoding="utf-8",
    )
    loaded = state_file.load()

    assert loaded.version_mismatch == "older"
    assert "old manifest version" in loaded.version_warning
    assert [e.name for e in loaded.entries] == ["A"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIXパーミッションのみ")
def test_save_keeps_existing_file_mode(repo, state_file):
    """保存してもファイルのパーミッションが変わらないこと"""
    state_file.save(repo)
    os.chmod(state_file.path, 0o644)

    repo.add("A")
    state_file.save(repo)

    assert stat.S_IMODE(state_file.path.stat().st_mode) == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIXパーミッションのみ")
def test_save_new_file_follows_umask(repo, state_file):
    umask = os.umask(0o022)
    try:
        state_file.save(repo)
    finally:
        os.umask(umask)

    assert stat.S_IMODE(state_file.path.stat().st_mode) == 0o644
