"""Notion 쓰기 실행 (database → 하위 페이지 생성, page → 블록 추가)

이 경계 밖으로는 예외를 던지지 않고 NotionSyncResult로 변환합니다.
재시도는 호출자가 다시 요청하는 방식으로만 일어납니다.
"""
from typing import Any, Dict, List, Optional
from dataclasses import dataclass
import logging

from notion_client.errors import APIResponseError

from .id_resolver import NotionTarget, resolve_notion_target
from ...config import NOTION_DEFAULT_TITLE_PROPERTY

logger = logging.getLogger(__name__)


@dataclass
class NotionSyncResult:
    success: bool
    page_id: Optional[str] = None
    page_url: Optional[str] = None
    error: Optional[str] = None


def _error_message(e: Exception) -> str:
    if isinstance(e, APIResponseError):
        return f"Notion API 오류: {e}"
    return f"Notion 동기화 중 오류: {e}"


async def execute_sync(
    client,
    target: NotionTarget,
    title: str,
    blocks: List[Dict[str, Any]]
) -> NotionSyncResult:
    """판별된 대상에 한 번만 쓰기

    Args:
        client: notion_client.AsyncClient
        target: resolve_notion_target 결과
        title: 새 페이지 제목 (database 대상일 때만 사용)
        blocks: 본문 블록

    Returns:
        NotionSyncResult: 성공 시 page_id/page_url 포함
    """
    if not target.is_known:
        return NotionSyncResult(success=False, error=target.error)

    try:
        if target.target_type == "database":
            page = await client.pages.create(
                parent={"database_id": target.id},
                properties={
                    target.title_property or NOTION_DEFAULT_TITLE_PROPERTY: {
                        "title": [{"text": {"content": title}}]
                    }
                },
                children=blocks,
            )
            logger.info(f"[NotionSync] database에 페이지 생성: {page.get('id')}")
            return NotionSyncResult(success=True, page_id=page.get("id"), page_url=page.get("url"))

        await client.blocks.children.append(block_id=target.id, children=blocks)
        # append 응답에는 URL이 없어 페이지를 다시 조회
        page = await client.pages.retrieve(page_id=target.id)
        logger.info(f"[NotionSync] page에 블록 추가: {target.id} ({len(blocks)}개)")
        return NotionSyncResult(success=True, page_id=target.id, page_url=page.get("url"))

    except Exception as e:
        logger.error(f"[NotionSync] 동기화 실패 ({target.target_type}:{target.id}): {e}")
        return NotionSyncResult(success=False, error=_error_message(e))


async def sync_to_notion(
    client,
    raw_id: str,
    title: str,
    blocks: List[Dict[str, Any]]
) -> NotionSyncResult:
    """ID 판별 + 쓰기 (네트워크 오류도 실패 결과로 변환)"""
    try:
        target = await resolve_notion_target(client, raw_id)
    except Exception as e:
        logger.error(f"[NotionSync] ID 판별 중 네트워크 오류: {e}")
        return NotionSyncResult(success=False, error=_error_message(e))

    return await execute_sync(client, target, title, blocks)
