"""사용자 설정 관련 DB 로직"""
from typing import Optional
import logging

from .schemas import UserSchema

logger = logging.getLogger(__name__)


async def get_user(db, user_id: str) -> Optional[UserSchema]:
    row = await db.get_user(user_id)
    return UserSchema(**row) if row else None


async def get_notion_target_id(db, user_id: str) -> Optional[str]:
    """사용자가 설정한 Notion 페이지/데이터베이스 ID (미설정이면 None)"""
    user = await get_user(db, user_id)
    if not user or not user.notion_database_id:
        return None
    return user.notion_database_id.strip() or None


async def update_notion_config(db, user_id: str, notion_database_id: str) -> UserSchema:
    """Notion 동기화 대상 ID 저장

    Args:
        db: Database 인스턴스
        user_id: 사용자 ID
        notion_database_id: 페이지/데이터베이스 ID 또는 URL (원문 그대로 저장)
    """
    value = notion_database_id.strip()
    if not value:
        raise ValueError("Notion 데이터베이스 ID를 입력해주세요.")
    row = await db.upsert_user(user_id, {"notion_database_id": value})
    logger.info(f"[UserRepo] Notion 설정 저장: {user_id}")
    return UserSchema(**row)
