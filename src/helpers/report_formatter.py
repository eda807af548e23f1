"""일지/주간 보고 본문 렌더링

markdown_content는 항상 구조화 필드로부터 전체를 다시 만들어냅니다.
부분 수정(패치) 없이 매번 재생성하므로 필드와 본문이 어긋나지 않습니다.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import EMPTY_FIELD_PLACEHOLDER


# (필드명, 섹션 제목) - 순서 고정, Notion 블록도 같은 순서를 사용
DAILY_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("summary", "📋 오늘의 요약"),
    ("business_insights", "💡 업무 인사이트"),
    ("work_content", "✅ 업무 내용"),
    ("completion_status", "🎯 완료 상황"),
    ("problems", "⚠️ 문제 및 어려움"),
    ("tomorrow_plan", "📅 내일 계획"),
)

WEEKLY_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("summary", "📋 이번 주 요약"),
    ("okr_progress", "🎯 OKR 진행 상황"),
    ("achievements", "🏆 주요 성과"),
    ("problems", "⚠️ 문제 및 어려움"),
    ("next_week_plan", "📅 다음 주 계획"),
)


def or_placeholder(value: Optional[str]) -> str:
    """빈 값(None, "")을 대체 문구로 치환"""
    return value if value else EMPTY_FIELD_PLACEHOLDER


def _field(report: Any, name: str) -> Any:
    if isinstance(report, dict):
        return report.get(name)
    return getattr(report, name, None)


def daily_report_title(report_date: date) -> str:
    return f"업무 일지 - {report_date.isoformat()}"


def weekly_report_title(week_start: date) -> str:
    """ISO 주차 기준 제목 (예: 2025년 2주차 주간 보고)"""
    iso_year, iso_week, _ = week_start.isocalendar()
    return f"{iso_year}년 {iso_week}주차 주간 보고"


def format_achievements(achievements: Optional[Sequence[str]]) -> str:
    items = [a for a in (achievements or []) if a]
    return "\n".join(f"- {a}" for a in items)


def format_okr_progress(okr_progress: Optional[List[Dict[str, Any]]]) -> str:
    """OKR 진행 항목 목록을 텍스트로 변환

    항목은 dict 또는 OkrProgressItem 모두 허용
    """
    lines = []
    for item in okr_progress or []:
        title = _field(item, "objective_title") or f"Objective #{_field(item, 'objective_id')}"
        lines.append(f"[{title}]")
        lines.append(f"- 진행: {or_placeholder(_field(item, 'progress'))}")
        lines.append(f"- 관련 업무: {or_placeholder(_field(item, 'related_work'))}")
    return "\n".join(lines)


def weekly_section_text(report: Any, field_name: str) -> str:
    """주간 보고 섹션별 본문 텍스트 (리스트형 필드는 문자열로 평탄화)"""
    value = _field(report, field_name)
    if field_name == "okr_progress":
        return format_okr_progress(value)
    if field_name == "achievements":
        return format_achievements(value)
    return value or ""


def render_daily_report(report: Any, report_date: date) -> str:
    """일지 전체 본문 생성

    Args:
        report: 구조화 필드를 가진 dict 또는 모델
        report_date: 일지 날짜

    Returns:
        str: Markdown 본문
    """
    lines = [f"# {daily_report_title(report_date)}", ""]
    for field_name, label in DAILY_SECTIONS:
        lines.append(f"## {label}")
        lines.append(or_placeholder(_field(report, field_name)))
        lines.append("")
    return "\n".join(lines)


def render_weekly_report(report: Any, title: str, week_start: date, week_end: date) -> str:
    """주간 보고 전체 본문 생성"""
    lines = [
        f"# {title}",
        f"기간: {week_start.isoformat()} ~ {week_end.isoformat()}",
        "",
    ]
    for field_name, label in WEEKLY_SECTIONS:
        lines.append(f"## {label}")
        lines.append(or_placeholder(weekly_section_text(report, field_name)))
        lines.append("")
    return "\n".join(lines)
