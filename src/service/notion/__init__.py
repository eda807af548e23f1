"""Notion - ID 판별, 블록 변환, 동기화"""
from .client import get_notion_client
from .id_resolver import NotionTarget, normalize_notion_id, resolve_notion_target
from .block_builder import split_text, build_daily_report_blocks, build_weekly_report_blocks
from .sync_executor import NotionSyncResult, execute_sync, sync_to_notion
from .sync_service import (
    SyncOutcome,
    NotionTokenStatus,
    sync_daily_report,
    sync_weekly_report,
    describe_notion_target,
    validate_notion_token,
)

__all__ = [
    "get_notion_client",
    "NotionTarget",
    "normalize_notion_id",
    "resolve_notion_target",
    "split_text",
    "build_daily_report_blocks",
    "build_weekly_report_blocks",
    "NotionSyncResult",
    "execute_sync",
    "sync_to_notion",
    "SyncOutcome",
    "NotionTokenStatus",
    "sync_daily_report",
    "sync_weekly_report",
    "describe_notion_target",
    "validate_notion_token",
]
