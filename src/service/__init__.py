"""서비스 레이어 - LLM 호출과 Notion 동기화 비즈니스 로직"""

# Daily
from .daily import (
    detect_readiness,
    process_interview_message,
    InterviewResponse,
    extract_daily_report,
    generate_daily_report,
)

# Weekly
from .weekly import generate_weekly_report

# Notion
from .notion import (
    sync_daily_report,
    sync_weekly_report,
    describe_notion_target,
    validate_notion_token,
    SyncOutcome,
)

__all__ = [
    # Daily
    "detect_readiness",
    "process_interview_message",
    "InterviewResponse",
    "extract_daily_report",
    "generate_daily_report",
    # Weekly
    "generate_weekly_report",
    # Notion
    "sync_daily_report",
    "sync_weekly_report",
    "describe_notion_target",
    "validate_notion_token",
    "SyncOutcome",
]
