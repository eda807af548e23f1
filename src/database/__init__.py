"""Database module - DB 접근 및 복합 쿼리"""

from .database import Database, OWNER_SCOPED_TABLES

from .schemas import (
    SyncStatus,
    SessionStatus,
    UserSchema,
    SessionSchema,
    MessageSchema,
    DailyReportSchema,
    WeeklyReportSchema,
    OkrPeriodSchema,
    ObjectiveSchema,
    KeyResultSchema,
    ObjectiveWithKeyResults,
)

# Session Repository
from .session_repository import (
    create_session,
    get_session,
    list_sessions,
    update_session_status,
    update_session_title,
    add_message,
    get_session_messages,
    get_conversation_turns,
)

# Report Repository
from .report_repository import (
    create_daily_report,
    get_daily_report,
    list_daily_reports,
    update_daily_report,
    delete_daily_report,
    update_daily_report_sync_status,
    create_weekly_report,
    get_weekly_report,
    list_weekly_reports,
    update_weekly_report,
    delete_weekly_report,
    update_weekly_report_sync_status,
)

# User Repository
from .user_repository import (
    get_user,
    get_notion_target_id,
    update_notion_config,
)

__all__ = [
    # Database class
    "Database",
    "OWNER_SCOPED_TABLES",

    # Schemas
    "SyncStatus",
    "SessionStatus",
    "UserSchema",
    "SessionSchema",
    "MessageSchema",
    "DailyReportSchema",
    "WeeklyReportSchema",
    "OkrPeriodSchema",
    "ObjectiveSchema",
    "KeyResultSchema",
    "ObjectiveWithKeyResults",

    # Session Repository
    "create_session",
    "get_session",
    "list_sessions",
    "update_session_status",
    "update_session_title",
    "add_message",
    "get_session_messages",
    "get_conversation_turns",

    # Report Repository
    "create_daily_report",
    "get_daily_report",
    "list_daily_reports",
    "update_daily_report",
    "delete_daily_report",
    "update_daily_report_sync_status",
    "create_weekly_report",
    "get_weekly_report",
    "list_weekly_reports",
    "update_weekly_report",
    "delete_weekly_report",
    "update_weekly_report_sync_status",

    # User Repository
    "get_user",
    "get_notion_target_id",
    "update_notion_config",
]
