"""Notion API 클라이언트 (공식 SDK)

토큰은 프로세스 시작 시가 아니라 처음 사용할 때 읽습니다.
"""
import os
import logging

from notion_client import AsyncClient

from ...config import NOTION_API_VERSION
from ...config.config import NOTION_TIMEOUT_MS
from ...utils.exceptions import NotionConfigError

logger = logging.getLogger(__name__)

_cached_client = None


def get_notion_client() -> AsyncClient:
    """NOTION_API_TOKEN 기반 AsyncClient 반환 (캐시됨)

    Raises:
        NotionConfigError: 토큰 미설정
    """
    global _cached_client
    if _cached_client is None:
        token = os.getenv("NOTION_API_TOKEN")
        if not token:
            raise NotionConfigError("NOTION_API_TOKEN 환경변수가 설정되지 않았습니다.")
        _cached_client = AsyncClient(
            auth=token,
            notion_version=NOTION_API_VERSION,
            timeout_ms=NOTION_TIMEOUT_MS,
        )
        logger.info("[NotionClient] 클라이언트 생성")
    return _cached_client
