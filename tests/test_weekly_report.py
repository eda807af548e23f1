"""주간 보고 생성 테스트"""
import json
from datetime import date

import pytest

from src.database import okr_repository, report_repository
from src.service.weekly import format_okr_context, generate_weekly_report
from src.utils.exceptions import LLMCallError, ReportExtractionError
from src.utils.schemas import DailyReportContent, WeeklyReportRequest

from conftest import FakeLLM, weekly_report_payload


async def _daily(db, owner_id, day: int, work: str):
    content = DailyReportContent(
        work_content=work,
        completion_status="완료",
        problems=f"{work} 문제",
        tomorrow_plan="계획",
        business_insights=f"{work} 인사이트",
        summary=work,
    )
    return await report_repository.create_daily_report(db, owner_id, day, date(2025, 1, day), content)


async def test_missing_ids_are_dropped_but_recorded(db, owner_id, other_owner_id):
    reports = [
        await _daily(db, owner_id, 6, "월요일 작업"),
        await _daily(db, owner_id, 7, "화요일 작업"),
        await _daily(db, owner_id, 8, "수요일 작업"),
    ]
    foreign = await _daily(db, other_owner_id, 9, "남의 작업")
    ids = [reports[0].id, 999, reports[1].id, reports[2].id]
    llm = FakeLLM([weekly_report_payload()])

    weekly = await generate_weekly_report(
        db, owner_id, WeeklyReportRequest(week_start=date(2025, 1, 6), week_end=date(2025, 1, 12), daily_report_ids=ids), llm
    )

    prompt = llm.calls[0][1].content
    assert "월요일 작업" in prompt
    assert "화요일 작업" in prompt
    assert "수요일 작업" in prompt
    assert "남의 작업" not in prompt
    # 요청 순서 유지
    assert prompt.index("월요일 작업") < prompt.index("화요일 작업") < prompt.index("수요일 작업")
    assert "없음 (OKR 미설정)" in prompt

    assert weekly.source_report_ids == ids
    assert foreign.id not in weekly.source_report_ids
    assert weekly.title == "2025년 2주차 주간 보고"
    assert weekly.markdown_content.startswith("# 2025년 2주차 주간 보고")
    assert llm.bound_kwargs[0]["response_format"]["json_schema"]["name"] == "weekly_report"


async def test_okr_context_included_when_period_given(db, owner_id):
    report = await _daily(db, owner_id, 6, "로그인 개발")
    period = await okr_repository.create_period(db, owner_id, "2025 Q1", date(2025, 1, 1), date(2025, 3, 31))
    objective = await okr_repository.create_objective(db, owner_id, period.id, "인증 경험 개선")
    await okr_repository.create_key_result(db, owner_id, objective.id, "로그인 전환율", "80", "40", "%")

    llm = FakeLLM([weekly_report_payload(okr_progress=[{
        "objective_id": objective.id,
        "objective_title": "인증 경험 개선",
        "progress": "로그인 개발 완료",
        "related_work": "로그인 개발",
    }])])

    weekly = await generate_weekly_report(
        db,
        owner_id,
        WeeklyReportRequest(
            week_start=date(2025, 1, 6), week_end=date(2025, 1, 12),
            daily_report_ids=[report.id], period_id=period.id,
        ),
        llm,
    )

    prompt = llm.calls[0][1].content
    assert f"[objective_id={objective.id}] 인증 경험 개선" in prompt
    assert "로그인 전환율" in prompt
    assert "(50%)" in prompt
    assert weekly.period_id == period.id
    assert weekly.okr_progress[0]["objective_title"] == "인증 경험 개선"
    assert "인증 경험 개선" in weekly.markdown_content


async def test_period_not_owned_is_ignored(db, owner_id, other_owner_id):
    report = await _daily(db, owner_id, 6, "로그인 개발")
    foreign_period = await okr_repository.create_period(
        db, other_owner_id, "2025 Q1", date(2025, 1, 1), date(2025, 3, 31)
    )
    await okr_repository.create_objective(db, other_owner_id, foreign_period.id, "남의 목표")

    for period_id in (foreign_period.id, 999):
        llm = FakeLLM([weekly_report_payload()])
        weekly = await generate_weekly_report(
            db,
            owner_id,
            WeeklyReportRequest(
                week_start=date(2025, 1, 6), week_end=date(2025, 1, 12),
                daily_report_ids=[report.id], period_id=period_id,
            ),
            llm,
        )

        prompt = llm.calls[0][1].content
        assert "남의 목표" not in prompt
        assert "없음 (OKR 미설정)" in prompt
        assert weekly.period_id is None
        stored = await report_repository.get_weekly_report(db, owner_id, weekly.id)
        assert stored.period_id is None


def test_okr_context_marker_when_empty():
    assert format_okr_context(None) == "없음 (OKR 미설정)"
    assert format_okr_context([]) == "없음 (OKR 미설정)"


async def test_invalid_weekly_payload_persists_nothing(db, owner_id):
    report = await _daily(db, owner_id, 6, "작업")
    payload = json.loads(weekly_report_payload())
    del payload["next_week_plan"]

    with pytest.raises(ReportExtractionError):
        await generate_weekly_report(
            db,
            owner_id,
            WeeklyReportRequest(week_start=date(2025, 1, 6), week_end=date(2025, 1, 12), daily_report_ids=[report.id]),
            FakeLLM([json.dumps(payload)]),
        )

    assert await report_repository.list_weekly_reports(db, owner_id) == []


def test_request_requires_at_least_one_id():
    with pytest.raises(ValueError):
        WeeklyReportRequest(week_start=date(2025, 1, 6), week_end=date(2025, 1, 12), daily_report_ids=[])


async def test_llm_failure_raises_call_error(db, owner_id):
    report = await _daily(db, owner_id, 6, "작업")

    with pytest.raises(LLMCallError):
        await generate_weekly_report(
            db,
            owner_id,
            WeeklyReportRequest(week_start=date(2025, 1, 6), week_end=date(2025, 1, 12), daily_report_ids=[report.id]),
            FakeLLM([], error=ConnectionError("upstream down")),
        )

    assert await report_repository.list_weekly_reports(db, owner_id) == []
