"""Utilities module"""

from .schemas import (
    ConversationTurn,
    DailyReportContent,
    OkrProgressItem,
    WeeklyReportContent,
    WeeklyReportRequest,
)
from .exceptions import (
    ReportAssistantError,
    NotionConfigError,
    ReportExtractionError,
    ReportNotFoundError,
    SessionClosedError,
    LLMCallError,
)

__all__ = [
    "ConversationTurn",
    "DailyReportContent",
    "OkrProgressItem",
    "WeeklyReportContent",
    "WeeklyReportRequest",
    "ReportAssistantError",
    "NotionConfigError",
    "ReportExtractionError",
    "ReportNotFoundError",
    "SessionClosedError",
    "LLMCallError",
]
