"""일지/주간 보고 저장소 테스트 (소유자 범위, 본문 재생성, 동기화 상태)"""
from datetime import date

from src.database import report_repository
from src.database.schemas import SyncStatus
from src.utils.schemas import DailyReportContent, WeeklyReportContent


def _content(**overrides) -> DailyReportContent:
    fields = {
        "work_content": "- 로그인 플로우 구현",
        "completion_status": "완료",
        "problems": "",
        "tomorrow_plan": "캐싱 버그 수정",
        "business_insights": "",
        "summary": "로그인 구현",
    }
    fields.update(overrides)
    return DailyReportContent(**fields)


async def _create(db, owner_id, **overrides):
    return await report_repository.create_daily_report(db, owner_id, 1, date(2025, 1, 8), _content(**overrides))


async def test_create_starts_pending_with_rendered_text(db, owner_id):
    report = await _create(db, owner_id)

    assert report.notion_sync_status == SyncStatus.PENDING
    assert report.notion_synced_at is None
    assert report.markdown_content.startswith("# 업무 일지 - 2025-01-08")
    assert "로그인 플로우 구현" in report.markdown_content


async def test_empty_fields_render_placeholder(db, owner_id):
    report = await _create(db, owner_id)

    assert "## 💡 업무 인사이트\n없음" in report.markdown_content
    assert "## ⚠️ 문제 및 어려움\n없음" in report.markdown_content
    assert "None" not in report.markdown_content


async def test_update_rerenders_and_keeps_sync_fields(db, owner_id):
    report = await _create(db, owner_id)
    await report_repository.update_daily_report_sync_status(
        db, owner_id, report.id, SyncStatus.SYNCED, page_id="p-1", page_url="https://notion.so/p-1"
    )

    updated = await report_repository.update_daily_report(
        db, owner_id, report.id, problems="배포 지연", unknown_field="무시"
    )

    assert updated.problems == "배포 지연"
    assert "배포 지연" in updated.markdown_content
    assert "로그인 플로우 구현" in updated.markdown_content
    assert updated.notion_sync_status == SyncStatus.SYNCED
    assert updated.notion_page_url == "https://notion.so/p-1"


async def test_other_owner_cannot_read_update_or_delete(db, owner_id, other_owner_id):
    report = await _create(db, owner_id)

    assert await report_repository.get_daily_report(db, other_owner_id, report.id) is None
    assert await report_repository.update_daily_report(db, other_owner_id, report.id, summary="x") is None
    assert await report_repository.delete_daily_report(db, other_owner_id, report.id) is False

    kept = await report_repository.get_daily_report(db, owner_id, report.id)
    assert kept is not None
    assert kept.summary == "로그인 구현"
    assert kept.notion_sync_status == SyncStatus.PENDING


async def test_delete_by_owner(db, owner_id):
    report = await _create(db, owner_id)

    assert await report_repository.delete_daily_report(db, owner_id, report.id) is True
    assert await report_repository.get_daily_report(db, owner_id, report.id) is None


async def test_failed_sync_keeps_last_success_time(db, owner_id):
    report = await _create(db, owner_id)

    synced = await report_repository.update_daily_report_sync_status(
        db, owner_id, report.id, SyncStatus.SYNCED, page_id="p-1", page_url="u-1"
    )
    failed = await report_repository.update_daily_report_sync_status(
        db, owner_id, report.id, SyncStatus.FAILED
    )

    assert synced.notion_synced_at is not None
    assert failed.notion_sync_status == SyncStatus.FAILED
    assert failed.notion_synced_at == synced.notion_synced_at
    assert failed.notion_page_id == "p-1"


async def test_list_orders_by_report_date_desc(db, owner_id, other_owner_id):
    for day in (3, 9, 6):
        await report_repository.create_daily_report(db, owner_id, day, date(2025, 1, day), _content())
    await report_repository.create_daily_report(db, other_owner_id, 1, date(2025, 1, 10), _content())

    reports = await report_repository.list_daily_reports(db, owner_id)

    assert [r.report_date.day for r in reports] == [9, 6, 3]


async def test_weekly_update_keeps_source_ids(db, owner_id):
    content = WeeklyReportContent(
        summary="요약",
        okr_progress=[],
        achievements=["배포"],
        problems="없음",
        next_week_plan="계획",
    )
    weekly = await report_repository.create_weekly_report(
        db, owner_id, "2025년 2주차 주간 보고", date(2025, 1, 6), date(2025, 1, 12), content, [1, 2, 99]
    )

    updated = await report_repository.update_weekly_report(
        db, owner_id, weekly.id, achievements=["배포", "회고"], source_report_ids=[1]
    )

    assert updated.source_report_ids == [1, 2, 99]
    assert "- 회고" in updated.markdown_content
    assert updated.markdown_content.startswith("# 2025년 2주차 주간 보고")
