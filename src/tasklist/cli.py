#!/usr/bin/env python3
"""
タスクリストCLI

Usage:
    python -m src.tasklist list [--filter all|active|completed] [--sort priority|dueDate|created] [--format json|text] [--taxonomy urgency|category]
    python -m src.tasklist add --text "テキスト" [--due-date YYYY-MM-DD] [--priority high|medium|low] [--format json|text]
    python -m src.tasklist toggle --id ID [--format json|text]
    python -m src.tasklist delete --id ID [--format json|text]
    python -m src.tasklist clear-completed [--format json|text]
    python -m src.tasklist stats [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from .config import Config
from .logger import setup_logger
from .models import FilterType, Priority, SortType, Task, Taxonomy
from .serialization import TaskRecord
from .storage import SqliteKeyValueStore
from .store import TaskListStore
from .view import TaskViewItem, is_overdue

PRIORITY_LABELS: Dict[Taxonomy, Dict[Priority, str]] = {
    Taxonomy.URGENCY: {Priority.HIGH: "High", Priority.MEDIUM: "Medium", Priority.LOW: "Low"},
    Taxonomy.CATEGORY: {Priority.HIGH: "Work", Priority.MEDIUM: "Personal", Priority.LOW: "Other"},
}

SHORT_ID_LENGTH = 8


def format_due_date(due: date, today: Optional[date] = None) -> str:
    """期限日を Today / Tomorrow / "Jan 5" 形式に整形"""
    today = today or date.today()
    if due == today:
        return "Today"
    if due == today + timedelta(days=1):
        return "Tomorrow"
    return f"{due:%b} {due.day}"


def format_task_text(item: TaskViewItem, taxonomy: Taxonomy, today: Optional[date] = None) -> str:
    """タスクをテキスト形式で整形"""
    task = item.task
    mark = "x" if task.completed else " "
    parts = [f"[{task.id[:SHORT_ID_LENGTH]}] [{mark}] {task.text}", PRIORITY_LABELS[taxonomy][task.priority]]
    if task.due_date is not None:
        due = format_due_date(task.due_date, today)
        parts.append(f"due {due} (overdue)" if item.overdue else f"due {due}")
    return " | ".join(parts)


def format_task_json(task: Task, overdue: bool) -> Dict[str, Any]:
    """タスクを永続化レコード形式＋overdueフラグの辞書に変換"""
    payload = TaskRecord.from_task(task).model_dump(mode="json", by_alias=True)
    payload["overdue"] = overdue
    return payload


def _resolve_id(store: TaskListStore, raw_id: str) -> Optional[str]:
    """完全一致、または一意な前方一致でIDを解決"""
    if store.get(raw_id) is not None:
        return raw_id
    matches = [task.id for task in store.tasks if task.id.startswith(raw_id)]
    return matches[0] if len(matches) == 1 else None


def cmd_list(
    store: TaskListStore,
    filter_type: str,
    sort_type: str,
    taxonomy: str,
    output_format: str,
) -> int:
    """タスク一覧を表示"""
    view = store.view(filter_type, sort_type)
    if output_format == "json":
        print(
            json.dumps(
                [format_task_json(item.task, item.overdue) for item in view.items],
                ensure_ascii=False,
            )
        )
    else:
        if not view.items:
            if FilterType(filter_type) is FilterType.ALL:
                print("No tasks yet.")
            else:
                print(f"No {filter_type} tasks.")
        else:
            for item in view.items:
                print(format_task_text(item, Taxonomy(taxonomy)))
    return 0


def cmd_add(
    store: TaskListStore,
    text: str,
    due_date: Optional[date],
    priority: str,
    output_format: str,
) -> int:
    """タスクを追加（空テキストは何もしない）"""
    task = store.add(text, due_date=due_date, priority=priority)
    if output_format == "json":
        print(json.dumps(format_task_json(task, is_overdue(task)) if task else None, ensure_ascii=False))
    elif task is None:
        print("Nothing added: text is empty.")
    else:
        print(f"Added: [{task.id[:SHORT_ID_LENGTH]}] {task.text}")
    return 0


def cmd_toggle(store: TaskListStore, raw_id: str, output_format: str) -> int:
    """完了状態を切り替え"""
    task_id = _resolve_id(store, raw_id)
    if task_id is None:
        print(f"Error: task {raw_id} not found.", file=sys.stderr)
        return 1

    task = store.toggle_complete(task_id)
    if output_format == "json":
        print(json.dumps(format_task_json(task, is_overdue(task)), ensure_ascii=False))
    else:
        state = "completed" if task.completed else "reopened"
        print(f"Task {state}: [{task.id[:SHORT_ID_LENGTH]}] {task.text}")
    return 0


def cmd_delete(store: TaskListStore, raw_id: str, output_format: str) -> int:
    """タスクを削除"""
    task_id = _resolve_id(store, raw_id)
    if task_id is None:
        print(f"Error: task {raw_id} not found.", file=sys.stderr)
        return 1

    store.delete(task_id)
    if output_format == "json":
        print(json.dumps({"deleted": True, "id": task_id}, ensure_ascii=False))
    else:
        print(f"Deleted: {task_id[:SHORT_ID_LENGTH]}")
    return 0


def cmd_clear_completed(store: TaskListStore, output_format: str) -> int:
    """完了済みタスクを一括削除"""
    removed = store.clear_completed()
    if output_format == "json":
        print(json.dumps({"removed": removed}))
    else:
        print(f"Removed {removed} completed task(s).")
    return 0


def cmd_stats(store: TaskListStore, output_format: str) -> int:
    """件数を表示"""
    counts = store.counts()
    if output_format == "json":
        print(json.dumps({"total": counts.total, "active": counts.active, "completed": counts.completed}))
    else:
        print(f"Completed: {counts.completed} | Active: {counts.active} | Total: {counts.total}")
    return 0


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="タスクリストCLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: data/tasklist.db）",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="標準エラー出力へのログレベル（デフォルト: WARNING）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    # list コマンド
    parser_list = subparsers.add_parser("list", help="タスク一覧を表示")
    parser_list.add_argument(
        "--filter",
        choices=[f.value for f in FilterType],
        default=config.view.default_filter.value,
    )
    parser_list.add_argument(
        "--sort",
        choices=[s.value for s in SortType],
        default=config.view.default_sort.value,
    )
    parser_list.add_argument(
        "--taxonomy",
        choices=[t.value for t in Taxonomy],
        default=config.view.taxonomy.value,
        help="優先度の表示ラベル（urgency: High/Medium/Low, category: Work/Personal/Other）",
    )
    _add_format_argument(parser_list)

    # add コマンド
    parser_add = subparsers.add_parser("add", help="新しいタスクを追加")
    parser_add.add_argument("--text", required=True, help="タスクのテキスト")
    parser_add.add_argument("--due-date", type=date.fromisoformat, help="期限日（YYYY-MM-DD形式）")
    parser_add.add_argument(
        "--priority",
        choices=[p.value for p in Priority],
        default=Priority.DEFAULT.value,
        help="優先度（デフォルト: medium）",
    )
    _add_format_argument(parser_add)

    # toggle コマンド
    parser_toggle = subparsers.add_parser("toggle", help="完了状態を切り替え")
    parser_toggle.add_argument("--id", required=True, help="タスクID（前方一致可）")
    _add_format_argument(parser_toggle)

    # delete コマンド
    parser_delete = subparsers.add_parser("delete", help="タスクを削除")
    parser_delete.add_argument("--id", required=True, help="タスクID（前方一致可）")
    _add_format_argument(parser_delete)

    # clear-completed コマンド
    parser_clear = subparsers.add_parser("clear-completed", help="完了済みタスクを一括削除")
    _add_format_argument(parser_clear)

    # stats コマンド
    parser_stats = subparsers.add_parser("stats", help="件数を表示")
    _add_format_argument(parser_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    config = Config.from_yaml()
    args = build_parser(config).parse_args(argv)
    setup_logger(log_level=args.log_level, log_file=None)

    kv_store = SqliteKeyValueStore(db_path=args.db_path, default_path=config.storage.db_path)
    store = TaskListStore(kv_store, storage_key=config.storage.key)
    store.load()

    if args.command == "list":
        return cmd_list(store, args.filter, args.sort, args.taxonomy, args.format)
    elif args.command == "add":
        return cmd_add(store, args.text, args.due_date, args.priority, args.format)
    elif args.command == "toggle":
        return cmd_toggle(store, args.id, args.format)
    elif args.command == "delete":
        return cmd_delete(store, args.id, args.format)
    elif args.command == "clear-completed":
        return cmd_clear_completed(store, args.format)
    elif args.command == "stats":
        return cmd_stats(store, args.format)
    else:
        print(f"Error: unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
