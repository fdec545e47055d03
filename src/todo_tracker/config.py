"""
設定管理モジュール

関連クラス:
  - cli: この設定を使用してStateFileとロガーを初期化
  - shell.TodoShell: autosave設定を使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError

CONFIG_ENV_VAR = "TODO_TRACKER_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value: Union[str, int, bool, None], default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    raise ConfigurationError(f"Invalid boolean value: {value!r}")


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # 状態ファイル
    state_file: str = "state.yaml"

    # ログ設定
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    # 対話シェル設定
    autosave: bool = False

    def __post_init__(self):
        """値の検証"""
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")
        if not str(self.state_file).strip():
            raise ConfigurationError("state_file must not be empty")

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス

        Returns:
            Config: 設定インスタンス

        Raises:
            ConfigurationError: ファイルが存在しない、または形式が不正な場合
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Failed to parse config file {config_path}: {exc}") from exc

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        # YAML構造から設定を抽出
        storage_data = yaml_data.get("storage") or {}
        log_data = yaml_data.get("log") or {}
        shell_data = yaml_data.get("shell") or {}

        return cls(
            state_file=str(storage_data.get("state_file", "state.yaml")),
            log_level=str(log_data.get("level", "WARNING")),
            log_file=log_data.get("file"),
            autosave=_parse_bool(shell_data.get("autosave"), False),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            state_file=os.getenv("TODO_TRACKER_STATE_FILE", "state.yaml"),
            log_level=os.getenv("TODO_TRACKER_LOG_LEVEL", "WARNING"),
            log_file=os.getenv("TODO_TRACKER_LOG_FILE") or None,
            autosave=_parse_bool(os.getenv("TODO_TRACKER_AUTOSAVE"), False),
        )


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """設定を読み込む

    優先順位: 引数のパス > TODO_TRACKER_CONFIG環境変数 > 個別の環境変数
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR) or None
    if config_path is not None:
        return Config.from_yaml(config_path)
    return Config.from_env()
