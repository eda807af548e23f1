"""일지/주간 보고 Notion 동기화 흐름

설정 확인 → (failed면 pending 복귀) → 판별 + 쓰기 → 동기화 상태 기록.
같은 보고에 대한 동시 요청은 진행 중인 한 번의 시도를 함께 기다립니다.
"""
from typing import Optional
from dataclasses import dataclass
import logging

from .block_builder import build_daily_report_blocks, build_weekly_report_blocks
from .client import get_notion_client
from .id_resolver import NotionTarget, resolve_notion_target
from .sync_executor import sync_to_notion
from ...database import report_repository, user_repository
from ...database.schemas import SyncStatus
from ...helpers.report_formatter import daily_report_title
from ...utils.exceptions import NotionConfigError, ReportNotFoundError
from ...utils.single_flight import SingleFlight

logger = logging.getLogger(__name__)

MISSING_TARGET_MESSAGE = "설정에서 Notion 데이터베이스 ID를 먼저 등록해주세요."
INVALID_TOKEN_MESSAGE = "Notion 토큰이 유효하지 않습니다."


@dataclass
class SyncOutcome:
    """동기화 요청 결과 (호출자 표시용)"""
    report_id: int
    status: SyncStatus
    page_id: Optional[str] = None
    page_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == SyncStatus.SYNCED


@dataclass
class NotionTokenStatus:
    """토큰 검증 결과 (설정 화면 표시용)"""
    valid: bool
    bot_name: Optional[str] = None
    error: Optional[str] = None


_default_single_flight = SingleFlight()


async def _require_target_id(db, owner_id: str) -> str:
    target_id = await user_repository.get_notion_target_id(db, owner_id)
    if not target_id:
        raise NotionConfigError(MISSING_TARGET_MESSAGE)
    return target_id


async def sync_daily_report(
    db,
    owner_id: str,
    report_id: int,
    client=None,
    single_flight: Optional[SingleFlight] = None
) -> SyncOutcome:
    """일지 Notion 동기화

    이미 synced인 일지도 다시 실행하며, 성공하면 페이지 정보를 덮어씁니다.

    Raises:
        ReportNotFoundError: 일지가 없거나 타인 소유
        NotionConfigError: Notion 대상 ID 또는 토큰 미설정 (Notion 호출 전)
    """
    async def attempt() -> SyncOutcome:
        report = await report_repository.get_daily_report(db, owner_id, report_id)
        if report is None:
            raise ReportNotFoundError()
        target_id = await _require_target_id(db, owner_id)
        notion = client or get_notion_client()

        if report.notion_sync_status == SyncStatus.FAILED:
            await report_repository.update_daily_report_sync_status(db, owner_id, report_id, SyncStatus.PENDING)

        result = await sync_to_notion(
            notion, target_id, daily_report_title(report.report_date), build_daily_report_blocks(report)
        )
        return await _record_outcome(
            report_repository.update_daily_report_sync_status, db, owner_id, report_id, result
        )

    flight = single_flight or _default_single_flight
    return await flight.run(("daily", owner_id, report_id), attempt)


async def sync_weekly_report(
    db,
    owner_id: str,
    report_id: int,
    client=None,
    single_flight: Optional[SingleFlight] = None
) -> SyncOutcome:
    """주간 보고 Notion 동기화 (흐름은 일지와 동일)"""
    async def attempt() -> SyncOutcome:
        report = await report_repository.get_weekly_report(db, owner_id, report_id)
        if report is None:
            raise ReportNotFoundError()
        target_id = await _require_target_id(db, owner_id)
        notion = client or get_notion_client()

        if report.notion_sync_status == SyncStatus.FAILED:
            await report_repository.update_weekly_report_sync_status(db, owner_id, report_id, SyncStatus.PENDING)

        result = await sync_to_notion(notion, target_id, report.title, build_weekly_report_blocks(report))
        return await _record_outcome(
            report_repository.update_weekly_report_sync_status, db, owner_id, report_id, result
        )

    flight = single_flight or _default_single_flight
    return await flight.run(("weekly", owner_id, report_id), attempt)


async def _record_outcome(update_status, db, owner_id: str, report_id: int, result) -> SyncOutcome:
    if result.success:
        await update_status(
            db, owner_id, report_id, SyncStatus.SYNCED, page_id=result.page_id, page_url=result.page_url
        )
        logger.info(f"[NotionSync] 동기화 완료: report_id={report_id}, url={result.page_url}")
        return SyncOutcome(
            report_id=report_id,
            status=SyncStatus.SYNCED,
            page_id=result.page_id,
            page_url=result.page_url,
        )

    await update_status(db, owner_id, report_id, SyncStatus.FAILED)
    logger.warning(f"[NotionSync] 동기화 실패: report_id={report_id}, error={result.error}")
    return SyncOutcome(report_id=report_id, status=SyncStatus.FAILED, error=result.error)


async def describe_notion_target(db, owner_id: str, client=None) -> NotionTarget:
    """설정된 Notion 대상의 타입/제목 조회 (설정 화면 표시용)"""
    target_id = await _require_target_id(db, owner_id)
    return await resolve_notion_target(client or get_notion_client(), target_id)


async def validate_notion_token(client=None) -> NotionTokenStatus:
    """토큰 유효성 확인 (users.me)

    네트워크 오류를 포함한 모든 실패를 valid=False 결과로 돌려줍니다.
    """
    notion = client or get_notion_client()
    try:
        me = await notion.users.me()
    except Exception as e:
        logger.warning(f"[NotionSync] 토큰 검증 실패: {e}")
        return NotionTokenStatus(valid=False, error=str(e) or INVALID_TOKEN_MESSAGE)
    return NotionTokenStatus(valid=True, bot_name=me.get("name") or me.get("id"))
