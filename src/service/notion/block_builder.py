"""일지/주간 보고 → Notion 블록 변환

Notion rich_text 한 덩어리는 2000자 제한이 있어 본문을 1800자 단위로 자릅니다.
"""
from typing import Any, Dict, List, Optional

from ...config import EMPTY_FIELD_PLACEHOLDER, NOTION_TEXT_BLOCK_MAX_LENGTH
from ...helpers.report_formatter import (
    DAILY_SECTIONS,
    WEEKLY_SECTIONS,
    daily_report_title,
    weekly_section_text,
)


def split_text(text: Optional[str], max_length: int = NOTION_TEXT_BLOCK_MAX_LENGTH) -> List[str]:
    """글자 수 기준으로 자르기 (단어 경계 무시)

    빈 입력이면 대체 문구 한 덩어리를 돌려줍니다.
    """
    if not text:
        return [EMPTY_FIELD_PLACEHOLDER]
    return [text[i:i + max_length] for i in range(0, len(text), max_length)]


def _rich_text(content: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def heading_block(level: int, content: str) -> Dict[str, Any]:
    block_type = f"heading_{level}"
    return {"object": "block", "type": block_type, block_type: {"rich_text": _rich_text(content)}}


def paragraph_block(content: str) -> Dict[str, Any]:
    return {"object": "block", "type": "paragraph", "paragraph": {"rich_text": _rich_text(content)}}


def divider_block() -> Dict[str, Any]:
    return {"object": "block", "type": "divider", "divider": {}}


def section_blocks(label: str, text: Optional[str]) -> List[Dict[str, Any]]:
    """섹션 제목(heading_2) + 본문 문단들"""
    return [heading_block(2, label)] + [paragraph_block(chunk) for chunk in split_text(text)]


def build_daily_report_blocks(report) -> List[Dict[str, Any]]:
    """일지 블록 (제목 → 섹션 6개 → 구분선)"""
    blocks = [heading_block(1, daily_report_title(report.report_date))]
    for field_name, label in DAILY_SECTIONS:
        blocks.extend(section_blocks(label, getattr(report, field_name)))
    blocks.append(divider_block())
    return blocks


def build_weekly_report_blocks(report) -> List[Dict[str, Any]]:
    """주간 보고 블록 (제목 → 섹션 5개 → 구분선)"""
    blocks = [heading_block(1, report.title)]
    for field_name, label in WEEKLY_SECTIONS:
        blocks.extend(section_blocks(label, weekly_section_text(report, field_name)))
    blocks.append(divider_block())
    return blocks
