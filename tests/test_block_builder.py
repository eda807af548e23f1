"""Notion 블록 변환 테스트"""
from datetime import date

from src.database.schemas import DailyReportSchema, WeeklyReportSchema
from src.service.notion.block_builder import (
    build_daily_report_blocks,
    build_weekly_report_blocks,
    split_text,
)


def _paragraph_text(block):
    return block["paragraph"]["rich_text"][0]["text"]["content"]


def _heading_text(block):
    return block[block["type"]]["rich_text"][0]["text"]["content"]


def test_split_keeps_every_character():
    for text in ["짧은 글", "가" * 1800, "나" * 1801, "abc " * 1000]:
        chunks = split_text(text)
        assert "".join(chunks) == text
        assert all(len(chunk) <= 1800 for chunk in chunks)


def test_split_is_hard_character_cut():
    chunks = split_text("x" * 4000)
    assert [len(c) for c in chunks] == [1800, 1800, 400]


def test_split_empty_yields_single_placeholder():
    assert split_text("") == ["없음"]
    assert split_text(None) == ["없음"]


def test_daily_blocks_order():
    report = DailyReportSchema(
        id=1,
        user_id="user-a",
        session_id=1,
        report_date=date(2025, 1, 8),
        work_content="w" * 2000,
        completion_status="완료",
        problems=None,
        tomorrow_plan="배포",
        business_insights="인사이트",
        summary="요약",
    )

    blocks = build_daily_report_blocks(report)
    types = [b["type"] for b in blocks]

    assert types[0] == "heading_1"
    assert _heading_text(blocks[0]) == "업무 일지 - 2025-01-08"
    assert types[-1] == "divider"
    assert types.count("divider") == 1

    headings = [_heading_text(b) for b in blocks if b["type"] == "heading_2"]
    assert headings == [
        "📋 오늘의 요약",
        "💡 업무 인사이트",
        "✅ 업무 내용",
        "🎯 완료 상황",
        "⚠️ 문제 및 어려움",
        "📅 내일 계획",
    ]

    paragraphs = [_paragraph_text(b) for b in blocks if b["type"] == "paragraph"]
    assert "없음" in paragraphs
    assert all(len(p) <= 1800 for p in paragraphs)
    # 2000자 업무 내용은 두 문단으로 나뉨
    assert len(paragraphs) == 7


def test_weekly_blocks_flatten_list_fields():
    report = WeeklyReportSchema(
        id=1,
        user_id="user-a",
        week_start=date(2025, 1, 6),
        week_end=date(2025, 1, 12),
        title="2025년 2주차 주간 보고",
        summary="요약",
        okr_progress=[{
            "objective_id": 3,
            "objective_title": "인증 개선",
            "progress": "로그인 완료",
            "related_work": "로그인 플로우",
        }],
        achievements=["배포", "버그 수정"],
        problems="",
        next_week_plan="회원가입",
    )

    blocks = build_weekly_report_blocks(report)
    paragraphs = [_paragraph_text(b) for b in blocks if b["type"] == "paragraph"]

    assert _heading_text(blocks[0]) == "2025년 2주차 주간 보고"
    assert blocks[-1]["type"] == "divider"
    assert len([b for b in blocks if b["type"] == "heading_2"]) == 5
    assert any("인증 개선" in p for p in paragraphs)
    assert "- 배포\n- 버그 수정" in paragraphs
    assert "없음" in paragraphs
