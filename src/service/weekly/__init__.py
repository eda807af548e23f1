"""Weekly - 주간 보고 생성"""
from .report_aggregator import generate_weekly_report, format_okr_context, fetch_daily_reports

__all__ = [
    "generate_weekly_report",
    "format_okr_context",
    "fetch_daily_reports",
]
