"""업무 일지 구조화 추출 및 생성

- extract_daily_report: 대화 전체 → DailyReportContent (순수 LLM 호출, DB 접근 없음)
- generate_daily_report: 세션 검증 → 추출 → 일지 저장(pending) → 세션 완료 처리
"""
from typing import List, Optional
from datetime import date
import logging

from langchain_core.messages import SystemMessage, HumanMessage
from langsmith import traceable

from ...config import get_kst_now
from ...database import session_repository, report_repository
from ...database.schemas import DailyReportSchema, SessionStatus
from ...prompt.daily_report_prompt import (
    DAILY_REPORT_SYSTEM_PROMPT,
    DAILY_REPORT_USER_PROMPT,
    DAILY_REPORT_JSON_SCHEMA,
)
from ...utils.exceptions import LLMCallError, ReportNotFoundError, SessionClosedError
from ...utils.schemas import ConversationTurn, DailyReportContent
from ...utils.single_flight import SingleFlight
from ...utils.utils import format_transcript, parse_structured_output

logger = logging.getLogger(__name__)

SESSION_TITLE_MAX_LENGTH = 20

_default_single_flight = SingleFlight()


@traceable(name="extract_daily_report")
async def extract_daily_report(turns: List[ConversationTurn], llm) -> DailyReportContent:
    """대화 턴 → 구조화 업무 일지

    Args:
        turns: 세션 전체 대화 (오래된 순)
        llm: 구조화 추출용 LLM 인스턴스

    Returns:
        DailyReportContent: 여섯 필드가 모두 채워진 결과

    Raises:
        ReportExtractionError: JSON이 아니거나 스키마와 맞지 않는 응답
    """
    structured_llm = llm.bind(
        response_format={"type": "json_schema", "json_schema": DAILY_REPORT_JSON_SCHEMA}
    )

    try:
        response = await structured_llm.ainvoke([
            SystemMessage(content=DAILY_REPORT_SYSTEM_PROMPT),
            HumanMessage(content=DAILY_REPORT_USER_PROMPT.format(conversation=format_transcript(turns)))
        ])
    except Exception as e:
        logger.error(f"[DailyReport] LLM 호출 실패: {e}")
        raise LLMCallError(f"일지 생성 중 LLM 호출에 실패했습니다: {e}") from e

    content = parse_structured_output(response.content, DailyReportContent)
    logger.info(f"[DailyReport] 구조화 추출 완료 (turns={len(turns)})")
    return content


async def generate_daily_report(
    db,
    owner_id: str,
    session_id: int,
    llm,
    report_date: Optional[date] = None,
    single_flight: Optional[SingleFlight] = None
) -> DailyReportSchema:
    """세션 대화로부터 일지 생성

    추출이 실패하면 아무것도 저장하지 않고 예외를 그대로 올립니다.
    같은 세션에 대한 동시 요청은 한 번의 생성을 함께 기다려 일지가 하나만 만들어집니다.

    Raises:
        ReportNotFoundError: 세션이 없거나 타인 소유
        SessionClosedError: 이미 일지가 생성된(완료/보관) 세션
        ReportExtractionError: 구조화 응답 검증 실패
        LLMCallError: LLM 호출 실패
    """
    async def attempt() -> DailyReportSchema:
        session = await session_repository.get_session(db, owner_id, session_id)
        if session is None:
            raise ReportNotFoundError("세션이 존재하지 않거나 권한이 없습니다.")
        if session.status != SessionStatus.ACTIVE:
            raise SessionClosedError("이미 일지가 생성된 세션입니다.")

        turns = await session_repository.get_conversation_turns(db, owner_id, session_id)
        content = await extract_daily_report(turns, llm)

        report = await report_repository.create_daily_report(
            db, owner_id, session_id, report_date or get_kst_now().date(), content
        )

        await session_repository.update_session_status(db, owner_id, session_id, SessionStatus.COMPLETED)
        if content.summary.strip():
            await session_repository.update_session_title(
                db, owner_id, session_id, content.summary.strip()[:SESSION_TITLE_MAX_LENGTH]
            )

        logger.info(f"[DailyReport] 일지 생성 완료: report_id={report.id}, session_id={session_id}")
        return report

    flight = single_flight or _default_single_flight
    return await flight.run(("daily_report", owner_id, session_id), attempt)
