"""Key-Value Store

タスクリストの永続化先となるキー・バリューストア。
値は常に文字列（タスク一覧はJSON配列として1キーに保存）。

Related Classes: TaskListStore (store.py)
"""

from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol

from .exceptions import StorageError


class KeyValueStore(Protocol):
    """永続化コラボレータの契約

    実装は読み書きの失敗を必ずStorageErrorとして送出すること
    （TaskListStoreはStorageErrorのみを捕捉して復旧する）。
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """dictベースのストア（テスト・一時セッション用）"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteKeyValueStore:
    """SQLiteベースのキー・バリューストア"""

    def __init__(self, db_path: Optional[Path] = None, default_path: Optional[Path] = None):
        """
        Args:
            db_path: 明示的なDBパス（最優先）
            default_path: 環境変数TASKLIST_DB_PATHも無い場合に使うパス（設定ファイルの値）
        """
        root = Path(__file__).resolve().parents[2]
        env_path = os.getenv("TASKLIST_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        elif default_path:
            self.db_path = Path(default_path)
        else:
            self.db_path = root / "data" / "tasklist.db"
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        """kv_storeテーブルの初期化"""
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"ストアの初期化に失敗しました: {self.db_path}") from exc

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def get(self, key: str) -> Optional[str]:
        """キーに対応する値を取得

        Args:
            key: キー

        Returns:
            保存済みの値、存在しない場合はNone

        Raises:
            StorageError: 読み込みに失敗した場合
        """
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"読み込みに失敗しました: key={key}") from exc
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """キーに値を保存（既存値は上書き）

        Raises:
            StorageError: 書き込みに失敗した場合
        """
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, value, self._now()),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"書き込みに失敗しました: key={key}") from exc
