"""Configuration module

이 모듈은 애플리케이션의 모든 설정 값을 중앙에서 관리합니다.
"""

from datetime import datetime, timezone, timedelta

from .business_config import (
    READY_TO_GENERATE_SENTINEL,
    SESSION_GREETING,
    EMPTY_FIELD_PLACEHOLDER,
    NO_OKR_MARKER,
    NOTION_TEXT_BLOCK_MAX_LENGTH,
    NOTION_API_VERSION,
    NOTION_DEFAULT_TITLE_PROPERTY,
)

# 한국 시간대 (KST = UTC+9)
KST = timezone(timedelta(hours=9))


def get_kst_now():
    """한국 시간 기준 현재 datetime 반환 (timezone-aware)"""
    return datetime.now(KST)


__all__ = [
    "READY_TO_GENERATE_SENTINEL",
    "SESSION_GREETING",
    "EMPTY_FIELD_PLACEHOLDER",
    "NO_OKR_MARKER",
    "NOTION_TEXT_BLOCK_MAX_LENGTH",
    "NOTION_API_VERSION",
    "NOTION_DEFAULT_TITLE_PROPERTY",
    "KST",
    "get_kst_now",
]
