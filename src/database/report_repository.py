"""일지/주간 보고 저장 및 동기화 상태 관리

- 생성: notion_sync_status=pending, 본문(markdown_content) 함께 생성
- 수정: 기존 필드 위에 병합 후 본문 전체 재생성 (동기화 필드는 건드리지 않음)
- 삭제: ID + 소유자 일치 시에만 삭제
- 동기화 상태: synced일 때만 notion_synced_at 갱신 (failed는 마지막 성공 시각 유지)
"""
from typing import Optional, List, Dict, Any
from datetime import date
import logging

from .schemas import DailyReportSchema, WeeklyReportSchema, SyncStatus
from ..config import get_kst_now
from ..helpers.report_formatter import render_daily_report, render_weekly_report
from ..utils.schemas import DailyReportContent, WeeklyReportContent

logger = logging.getLogger(__name__)


DAILY_EDITABLE_FIELDS = (
    "work_content",
    "completion_status",
    "problems",
    "tomorrow_plan",
    "business_insights",
    "summary",
)

WEEKLY_EDITABLE_FIELDS = (
    "title",
    "summary",
    "okr_progress",
    "achievements",
    "problems",
    "next_week_plan",
)


def _pick(fields: Dict[str, Any], allowed) -> Dict[str, Any]:
    """허용 필드 중 값이 주어진(None 아님) 것만 추림"""
    return {k: v for k, v in fields.items() if k in allowed and v is not None}


# =============================================================================
# 일일 업무 일지
# =============================================================================

async def create_daily_report(
    db,
    owner_id: str,
    session_id: int,
    report_date: date,
    content: DailyReportContent
) -> DailyReportSchema:
    """일지 생성 (동기화 상태 pending)"""
    fields = content.model_dump()
    row = await db.insert_owned("daily_reports", owner_id, {
        **fields,
        "session_id": session_id,
        "report_date": report_date.isoformat(),
        "markdown_content": render_daily_report(fields, report_date),
        "notion_sync_status": SyncStatus.PENDING.value,
    })
    logger.info(f"[ReportRepo] 일지 생성: report_id={row['id']}, session_id={session_id}")
    return DailyReportSchema(**row)


async def get_daily_report(db, owner_id: str, report_id: int) -> Optional[DailyReportSchema]:
    row = await db.get_owned("daily_reports", report_id, owner_id)
    return DailyReportSchema(**row) if row else None


async def list_daily_reports(db, owner_id: str) -> List[DailyReportSchema]:
    """일지 목록 (report_date 내림차순)"""
    rows = await db.list_owned("daily_reports", owner_id, order_by="report_date", desc=True)
    return [DailyReportSchema(**row) for row in rows]


async def update_daily_report(
    db,
    owner_id: str,
    report_id: int,
    **fields
) -> Optional[DailyReportSchema]:
    """일지 필드 수정 + 본문 재생성

    Args:
        db: Database 인스턴스
        owner_id: 사용자 ID
        report_id: 일지 ID
        **fields: 수정할 구조화 필드 (DAILY_EDITABLE_FIELDS)

    Returns:
        수정된 일지 (없거나 타인 소유면 None)
    """
    current = await get_daily_report(db, owner_id, report_id)
    if current is None:
        return None

    changes = _pick(fields, DAILY_EDITABLE_FIELDS)
    merged = {**current.model_dump(), **changes}
    changes["markdown_content"] = render_daily_report(merged, current.report_date)

    row = await db.update_owned("daily_reports", report_id, owner_id, changes)
    return DailyReportSchema(**row) if row else None


async def delete_daily_report(db, owner_id: str, report_id: int) -> bool:
    deleted = await db.delete_owned("daily_reports", report_id, owner_id)
    if not deleted:
        logger.warning(f"[ReportRepo] 일지 삭제 거부/미존재: report_id={report_id}, owner={owner_id}")
    return deleted


def _sync_changes(status: SyncStatus, page_id: Optional[str], page_url: Optional[str]) -> Dict[str, Any]:
    status = SyncStatus(status)
    changes: Dict[str, Any] = {"notion_sync_status": status.value}
    if status == SyncStatus.SYNCED:
        changes["notion_page_id"] = page_id
        changes["notion_page_url"] = page_url
        changes["notion_synced_at"] = get_kst_now().isoformat()
    return changes


async def update_daily_report_sync_status(
    db,
    owner_id: str,
    report_id: int,
    status: SyncStatus,
    page_id: Optional[str] = None,
    page_url: Optional[str] = None
) -> Optional[DailyReportSchema]:
    """일지 동기화 상태 갱신 (synced면 페이지 정보/시각 덮어쓰기)"""
    row = await db.update_owned("daily_reports", report_id, owner_id, _sync_changes(status, page_id, page_url))
    return DailyReportSchema(**row) if row else None


# =============================================================================
# 주간 보고
# =============================================================================

async def create_weekly_report(
    db,
    owner_id: str,
    title: str,
    week_start: date,
    week_end: date,
    content: WeeklyReportContent,
    source_report_ids: List[int],
    period_id: Optional[int] = None
) -> WeeklyReportSchema:
    """주간 보고 생성 (source_report_ids는 요청 그대로 고정)"""
    fields = content.model_dump()
    row = await db.insert_owned("weekly_reports", owner_id, {
        **fields,
        "title": title,
        "period_id": period_id,
        "week_start": week_start.isoformat(),
        "week_end": week_end.isoformat(),
        "source_report_ids": list(source_report_ids),
        "markdown_content": render_weekly_report(fields, title, week_start, week_end),
        "notion_sync_status": SyncStatus.PENDING.value,
    })
    logger.info(f"[ReportRepo] 주간 보고 생성: report_id={row['id']}, sources={len(source_report_ids)}")
    return WeeklyReportSchema(**row)


async def get_weekly_report(db, owner_id: str, report_id: int) -> Optional[WeeklyReportSchema]:
    row = await db.get_owned("weekly_reports", report_id, owner_id)
    return WeeklyReportSchema(**row) if row else None


async def list_weekly_reports(db, owner_id: str) -> List[WeeklyReportSchema]:
    """주간 보고 목록 (week_start 내림차순)"""
    rows = await db.list_owned("weekly_reports", owner_id, order_by="week_start", desc=True)
    return [WeeklyReportSchema(**row) for row in rows]


async def update_weekly_report(
    db,
    owner_id: str,
    report_id: int,
    **fields
) -> Optional[WeeklyReportSchema]:
    """주간 보고 수정 + 본문 재생성 (source_report_ids는 변경 불가)"""
    current = await get_weekly_report(db, owner_id, report_id)
    if current is None:
        return None

    changes = _pick(fields, WEEKLY_EDITABLE_FIELDS)
    merged = {**current.model_dump(), **changes}
    changes["markdown_content"] = render_weekly_report(
        merged, merged["title"], current.week_start, current.week_end
    )

    row = await db.update_owned("weekly_reports", report_id, owner_id, changes)
    return WeeklyReportSchema(**row) if row else None


async def delete_weekly_report(db, owner_id: str, report_id: int) -> bool:
    deleted = await db.delete_owned("weekly_reports", report_id, owner_id)
    if not deleted:
        logger.warning(f"[ReportRepo] 주간 보고 삭제 거부/미존재: report_id={report_id}, owner={owner_id}")
    return deleted


async def update_weekly_report_sync_status(
    db,
    owner_id: str,
    report_id: int,
    status: SyncStatus,
    page_id: Optional[str] = None,
    page_url: Optional[str] = None
) -> Optional[WeeklyReportSchema]:
    row = await db.update_owned("weekly_reports", report_id, owner_id, _sync_changes(status, page_id, page_url))
    return WeeklyReportSchema(**row) if row else None
