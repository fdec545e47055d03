"""State File Storage

TODOリストをYAML形式の状態ファイルへ保存・読み込みする。

Related Classes: TodoRepository (repository.py), StateDocument (schemas.py)
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError as SchemaValidationError

from .exceptions import StateFileCorruptError, StateFileNotFoundError, StorageError
from .models import TodoEntry
from .repository import TodoRepository
from .schemas import MANIFEST_VERSION, StateDocument, TodoEntryRecord

logger = logging.getLogger(__name__)


@dataclass
class LoadedState:
    """状態ファイルから読み込んだ内容"""

    entries: List[TodoEntry] = field(default_factory=list)
    next_id: int = 1
    manifest_version: int = MANIFEST_VERSION

    @property
    def version_mismatch(self) -> Optional[str]:
        """マニフェストバージョンの差異（"older" / "newer" / None）"""
        if self.manifest_version < MANIFEST_VERSION:
            return "older"
        if self.manifest_version > MANIFEST_VERSION:
            return "newer"
        return None

    @property
    def version_warning(self) -> Optional[str]:
        """利用者に表示する警告メッセージ"""
        if self.version_mismatch == "older":
            return "This save file has an old manifest version, and may not load correctly"
        if self.version_mismatch == "newer":
            return "This save file has been created with a newer version, and may not load correctly"
        return None

    def to_repository(self) -> TodoRepository:
        return TodoRepository(self.entries, self.next_id)


class StateFile:
    """YAMLベースの状態ファイル"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> LoadedState:
        """状態ファイルを読み込む

        Returns:
            LoadedState: 読み込んだエントリとカウンタ

        Raises:
            StateFileNotFoundError: ファイルが存在しない場合
            StateFileCorruptError: YAMLまたはスキーマが不正な場合
            StorageError: ファイルを読めない場合
        """
        if not self.path.exists():
            raise StateFileNotFoundError(f"No state data file found at {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise StateFileCorruptError(f"Failed to parse state data from {self.path}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read state data from {self.path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise StateFileCorruptError(f"Failed to parse state data from {self.path}: not a mapping")

        try:
            document = StateDocument.model_validate(raw)
        except SchemaValidationError as exc:
            raise StateFileCorruptError(f"Invalid state data in {self.path}: {exc}") from exc

        state = LoadedState(
            entries=[record.to_entry() for record in document.entries],
            next_id=document.next_id,
            manifest_version=document.manifest_version,
        )
        # 利用者への警告は呼び出し側（shell / cli）が表示する
        if state.version_mismatch == "older":
            logger.info(
                "State file %s has an old manifest version (%d), and may not load correctly",
                self.path,
                state.manifest_version,
            )
        elif state.version_mismatch == "newer":
            logger.info(
                "State file %s has been created with a newer version (%d), and may not load correctly",
                self.path,
                state.manifest_version,
            )
        logger.debug("Loaded %d entries from %s", len(state.entries), self.path)
        return state

    def load_or_empty(self) -> LoadedState:
        """存在しない場合は空の状態を返す"""
        if not self.path.exists():
            return LoadedState()
        return self.load()

    def _file_mode(self) -> int:
        """既存ファイルのパーミッション（新規作成時はumask適用後の0o666）"""
        if self.path.exists():
            return stat.S_IMODE(self.path.stat().st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def save(self, repository: TodoRepository) -> None:
        """リポジトリの内容をアトミックに書き込む

        Raises:
            StorageError: 書き込みに失敗した場合
        """
        entries, next_id = repository.snapshot()
        document = StateDocument(
            manifest_version=MANIFEST_VERSION,
            next_id=next_id,
            entries=[TodoEntryRecord.from_entry(entry) for entry in entries],
        )
        data = yaml.safe_dump(
            document.model_dump(mode="json"),
            allow_unicode=True,
            sort_keys=False,
        )

        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write state data to {self.path}: {exc}") from exc

        repository.mark_saved()
        logger.info("Saved %d entries to %s", len(entries), self.path)
