"""Todo Trackerのカスタム例外定義

このモジュールは、Todo Trackerで使用されるカスタム例外クラスを定義します。
CLIはこの階層の例外を捕捉し、エラーメッセージと終了コード1に変換します。
"""


class TodoTrackerError(Exception):
    """Todo Tracker基底例外"""

    pass


class ValidationError(TodoTrackerError):
    """入力値の検証エラー"""

    pass


class EntryNotFoundError(TodoTrackerError):
    """指定IDのエントリが存在しない"""

    def __init__(self, todo_id: object) -> None:
        super().__init__(f"No todo entry found with id {todo_id}")
        self.todo_id = todo_id


class StorageError(TodoTrackerError):
    """状態ファイルの読み書きエラー"""

    pass


class StateFileNotFoundError(StorageError):
    """状態ファイルが存在しない"""

    pass


class StateFileCorruptError(StorageError):
    """状態ファイルの内容が不正"""

    pass


class ConfigurationError(TodoTrackerError):
    """設定エラー"""

    pass
