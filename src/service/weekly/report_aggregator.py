"""주간 보고 생성 서비스

일지 N개 + (선택) OKR 트리 → LLM 1회 호출 → 주간 보고 저장
"""
from typing import List, Optional
import asyncio
import logging

from langchain_core.messages import SystemMessage, HumanMessage
from langsmith import traceable

from ...config import NO_OKR_MARKER
from ...database import report_repository
from ...database import okr_repository
from ...database.schemas import DailyReportSchema, WeeklyReportSchema, ObjectiveWithKeyResults
from ...helpers.report_formatter import or_placeholder, weekly_report_title
from ...prompt.weekly_report_prompt import (
    WEEKLY_REPORT_SYSTEM_PROMPT,
    WEEKLY_REPORT_USER_PROMPT,
    DAILY_REPORT_ENTRY_TEMPLATE,
    WEEKLY_REPORT_JSON_SCHEMA,
)
from ...utils.schemas import WeeklyReportContent, WeeklyReportRequest
from ...utils.exceptions import LLMCallError
from ...utils.utils import parse_structured_output

logger = logging.getLogger(__name__)

NO_DAILY_REPORTS_MARKER = "없음 (조회된 일지 없음)"


def format_okr_context(objectives: Optional[List[ObjectiveWithKeyResults]]) -> str:
    """OKR 트리를 프롬프트 텍스트로 (없으면 미설정 마커)"""
    if not objectives:
        return NO_OKR_MARKER

    lines = []
    for objective in objectives:
        lines.append(f"- [objective_id={objective.id}] {objective.title}")
        if objective.description:
            lines.append(f"  설명: {objective.description}")
        for kr in objective.key_results:
            percent = okr_repository.key_result_progress_percent(kr)
            progress = f" ({percent}%)" if percent is not None else ""
            unit = kr.unit or ""
            lines.append(
                f"  - KR: {kr.title} / 현재 {kr.current_value or '-'}{unit}"
                f" / 목표 {kr.target_value or '-'}{unit}{progress}"
            )
    return "\n".join(lines)


def format_daily_entries(reports: List[DailyReportSchema]) -> str:
    return "\n".join(
        DAILY_REPORT_ENTRY_TEMPLATE.format(
            report_date=report.report_date.isoformat(),
            work_content=or_placeholder(report.work_content),
            business_insights=or_placeholder(report.business_insights),
            problems=or_placeholder(report.problems),
        )
        for report in reports
    )


async def fetch_daily_reports(db, owner_id: str, report_ids: List[int]) -> List[DailyReportSchema]:
    """일지 동시 조회 (요청 순서 유지, 없거나 타인 소유인 ID는 제외)"""
    results = await asyncio.gather(
        *(report_repository.get_daily_report(db, owner_id, report_id) for report_id in report_ids)
    )
    reports = [report for report in results if report is not None]
    if len(reports) < len(report_ids):
        logger.warning(f"[WeeklyReport] 조회되지 않은 일지 {len(report_ids) - len(reports)}개 제외")
    return reports


@traceable(name="synthesize_weekly_report")
async def synthesize_weekly_report(
    request: WeeklyReportRequest,
    reports: List[DailyReportSchema],
    okr_context: str,
    llm
) -> WeeklyReportContent:
    """주간 보고 구조화 생성 (순수 LLM 호출)

    Raises:
        ReportExtractionError: 스키마와 맞지 않는 응답
    """
    structured_llm = llm.bind(
        response_format={"type": "json_schema", "json_schema": WEEKLY_REPORT_JSON_SCHEMA}
    )
    user_prompt = WEEKLY_REPORT_USER_PROMPT.format(
        week_start=request.week_start.isoformat(),
        week_end=request.week_end.isoformat(),
        okr_context=okr_context,
        daily_reports=format_daily_entries(reports) or NO_DAILY_REPORTS_MARKER,
    )

    try:
        response = await structured_llm.ainvoke([
            SystemMessage(content=WEEKLY_REPORT_SYSTEM_PROMPT),
            HumanMessage(content=user_prompt)
        ])
    except Exception as e:
        logger.error(f"[WeeklyReport] LLM 호출 실패: {e}")
        raise LLMCallError(f"주간 보고 생성 중 LLM 호출에 실패했습니다: {e}") from e

    return parse_structured_output(response.content, WeeklyReportContent)


async def generate_weekly_report(
    db,
    owner_id: str,
    request: WeeklyReportRequest,
    llm
) -> WeeklyReportSchema:
    """주간 보고 생성 및 저장

    Args:
        db: Database 인스턴스
        owner_id: 사용자 ID
        request: 기간 + 일지 ID 목록 + (선택) OKR 기간 ID
        llm: 구조화 추출용 LLM 인스턴스

    Returns:
        WeeklyReportSchema: 저장된 주간 보고 (source_report_ids = 요청 ID 목록 그대로)
    """
    reports = await fetch_daily_reports(db, owner_id, request.daily_report_ids)

    # 본인 소유로 조회되는 기간만 OKR 맥락과 저장에 사용
    period_id = None
    objectives = None
    if request.period_id is not None:
        period = await okr_repository.get_period(db, owner_id, request.period_id)
        if period is None:
            logger.warning(f"[WeeklyReport] OKR 기간 조회 실패, OKR 없이 생성: period_id={request.period_id}")
        else:
            period_id = period.id
            objectives = await okr_repository.get_full_okr(db, owner_id, period.id)

    content = await synthesize_weekly_report(request, reports, format_okr_context(objectives), llm)

    weekly = await report_repository.create_weekly_report(
        db,
        owner_id,
        title=weekly_report_title(request.week_start),
        week_start=request.week_start,
        week_end=request.week_end,
        content=content,
        source_report_ids=request.daily_report_ids,
        period_id=period_id,
    )
    logger.info(
        f"[WeeklyReport] 주간 보고 생성 완료: report_id={weekly.id}, "
        f"used={len(reports)}/{len(request.daily_report_ids)}"
    )
    return weekly
