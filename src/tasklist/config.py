"""
設定管理モジュール

関連クラス:
  - store.TaskListStore: storage設定を使用
  - server.dependencies: アプリ全体の設定を読み込む
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import FilterType, SortType, Taxonomy
from .preferences import SUPPORTED_LANGUAGES, Preferences, Theme


def _language(value: str) -> str:
    """言語コードの検証（未対応の場合はValueError）"""
    if value not in SUPPORTED_LANGUAGES:
        raise ValueError(f"未対応の言語です: {value}（対応: {', '.join(SUPPORTED_LANGUAGES)}）")
    return value


@dataclass
class StorageConfig:
    """永続化設定"""

    db_path: Optional[str] = None  # 未指定時は data/tasklist.db
    key: str = "todos"


@dataclass
class ViewConfig:
    """一覧表示のデフォルト"""

    default_filter: FilterType = FilterType.ALL
    default_sort: SortType = SortType.PRIORITY
    taxonomy: Taxonomy = Taxonomy.URGENCY


@dataclass
class ServerConfig:
    """HTTPサーバー設定"""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class Config:
    """アプリケーション設定クラス"""

    storage: StorageConfig = None  # type: ignore
    view: ViewConfig = None  # type: ignore
    server: ServerConfig = None  # type: ignore
    preferences: Preferences = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/tasklist.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.storage is None:
            self.storage = StorageConfig()
        if self.view is None:
            self.view = ViewConfig()
        if self.server is None:
            self.server = ServerConfig()
        if self.preferences is None:
            self.preferences = Preferences()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（ファイルが無い場合はデフォルト値）
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        storage_data = yaml_data.get("storage", {})
        view_data = yaml_data.get("view", {})
        server_data = yaml_data.get("server", {})
        pref_data = yaml_data.get("preferences", {})
        log_data = yaml_data.get("log", {})

        return cls(
            storage=StorageConfig(
                db_path=storage_data.get("db_path"),
                key=storage_data.get("key", "todos"),
            ),
            view=ViewConfig(
                default_filter=FilterType(view_data.get("default_filter", "all")),
                default_sort=SortType(view_data.get("default_sort", "priority")),
                taxonomy=Taxonomy(view_data.get("taxonomy", "urgency")),
            ),
            server=ServerConfig(
                host=server_data.get("host", "127.0.0.1"),
                port=int(server_data.get("port", 8000)),
            ),
            preferences=Preferences(
                theme=Theme(pref_data.get("theme", "light")),
                language=_language(pref_data.get("language", "en")),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/tasklist.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            storage=StorageConfig(
                db_path=os.getenv("TASKLIST_DB_PATH"),
                key=os.getenv("TASKLIST_STORAGE_KEY", "todos"),
            ),
            view=ViewConfig(
                default_filter=FilterType(os.getenv("TASKLIST_DEFAULT_FILTER", "all")),
                default_sort=SortType(os.getenv("TASKLIST_DEFAULT_SORT", "priority")),
                taxonomy=Taxonomy(os.getenv("TASKLIST_TAXONOMY", "urgency")),
            ),
            server=ServerConfig(
                host=os.getenv("TASKLIST_HOST", "127.0.0.1"),
                port=int(os.getenv("TASKLIST_PORT", "8000")),
            ),
            preferences=Preferences(
                theme=Theme(os.getenv("TASKLIST_THEME", "light")),
                language=_language(os.getenv("TASKLIST_LANGUAGE", "en")),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/tasklist.log"),
        )
