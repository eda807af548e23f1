"""Notion ID 정규화 및 대상 타입(database/page) 판별

판별은 조회(retrieve)만 사용하며 Notion 쪽 상태를 바꾸지 않습니다.
"""
from typing import Any, Dict, Optional
from dataclasses import dataclass
import re
import logging

from notion_client.errors import APIResponseError

from ...config import NOTION_DEFAULT_TITLE_PROPERTY

logger = logging.getLogger(__name__)

NOTION_HOST_MARKERS = ("notion.so", "notion.site")
HEX_ID_PATTERN = re.compile(r"[0-9a-fA-F]{32}")
BARE_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{32}$")

UNKNOWN_TARGET_MESSAGE = (
    "ID를 확인할 수 없습니다. Notion 페이지/데이터베이스에 통합(integration)이 추가되어 있는지 확인해주세요."
)


@dataclass
class NotionTarget:
    """ID 판별 결과

    Attributes:
        target_type: "database" | "page" | "unknown"
        id: 정규화된 ID (8-4-4-4-12)
        title: 페이지/데이터베이스 제목
        title_property: database의 title 타입 속성 이름
        error: unknown일 때 사용자 안내 문구
    """
    target_type: str
    id: str
    title: Optional[str] = None
    title_property: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_known(self) -> bool:
        return self.target_type in ("database", "page")


def normalize_notion_id(raw: str) -> str:
    """ID/URL → 하이픈 포함 UUID 형식

    잘못된 형식이어도 예외 없이 정리된 문자열을 그대로 돌려줍니다.
    """
    value = (raw or "").strip()

    if any(marker in value for marker in NOTION_HOST_MARKERS):
        match = HEX_ID_PATTERN.search(value)
        if match:
            value = match.group(0)

    value = value.split("?")[0].split("#")[0]
    if "/" in value:
        value = value.rstrip("/").split("/")[-1]

    bare = value.replace("-", "")
    if not BARE_ID_PATTERN.match(bare):
        return bare

    bare = bare.lower()
    return f"{bare[:8]}-{bare[8:12]}-{bare[12:16]}-{bare[16:20]}-{bare[20:]}"


def _plain_text(rich_text) -> str:
    return "".join(part.get("plain_text") or part.get("text", {}).get("content", "") for part in rich_text or [])


def _database_title_property(database: Dict[str, Any]) -> str:
    for name, prop in (database.get("properties") or {}).items():
        if prop.get("type") == "title":
            return name
    return NOTION_DEFAULT_TITLE_PROPERTY


def _page_title(page: Dict[str, Any]) -> str:
    for prop in (page.get("properties") or {}).values():
        if prop.get("type") == "title":
            return _plain_text(prop.get("title"))
    return ""


async def resolve_notion_target(client, raw_id: str) -> NotionTarget:
    """database로 먼저 조회하고, 실패하면 page로 조회

    Args:
        client: notion_client.AsyncClient
        raw_id: 사용자가 입력한 ID 또는 URL

    Returns:
        NotionTarget: 둘 다 실패하면 target_type="unknown"

    Raises:
        httpx.HTTPError, RequestTimeoutError: 네트워크 오류 (판별 자체를 못 한 경우)
    """
    notion_id = normalize_notion_id(raw_id)
    if not notion_id:
        return NotionTarget(target_type="unknown", id=notion_id, error=UNKNOWN_TARGET_MESSAGE)

    try:
        database = await client.databases.retrieve(database_id=notion_id)
        return NotionTarget(
            target_type="database",
            id=notion_id,
            title=_plain_text(database.get("title")),
            title_property=_database_title_property(database),
        )
    except APIResponseError as e:
        logger.debug(f"[NotionResolver] database 조회 실패 ({e.code}), page로 재시도")

    try:
        page = await client.pages.retrieve(page_id=notion_id)
        return NotionTarget(target_type="page", id=notion_id, title=_page_title(page))
    except APIResponseError as e:
        logger.warning(f"[NotionResolver] ID 판별 실패: {notion_id} ({e.code})")

    return NotionTarget(target_type="unknown", id=notion_id, error=UNKNOWN_TARGET_MESSAGE)
