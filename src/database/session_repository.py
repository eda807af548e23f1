"""인터뷰 세션/메시지 관련 DB 로직"""
from typing import Optional, List
import logging

from .schemas import SessionSchema, SessionStatus, MessageSchema
from ..config import SESSION_GREETING, get_kst_now
from ..utils.schemas import ConversationTurn

logger = logging.getLogger(__name__)


async def create_session(db, owner_id: str, title: Optional[str] = None) -> SessionSchema:
    """세션 생성 + 시작 인사 메시지 저장

    Args:
        db: Database 인스턴스
        owner_id: 사용자 ID
        title: 세션 제목 (없으면 오늘 날짜 기준)

    Returns:
        SessionSchema: 생성된 세션
    """
    row = await db.insert_owned("sessions", owner_id, {
        "title": title or f"업무 일지 - {get_kst_now().date().isoformat()}",
        "status": SessionStatus.ACTIVE.value,
    })
    session = SessionSchema(**row)

    await add_message(db, session.id, "assistant", SESSION_GREETING)
    logger.info(f"[SessionRepo] 세션 생성: session_id={session.id}, owner={owner_id}")
    return session


async def get_session(db, owner_id: str, session_id: int) -> Optional[SessionSchema]:
    row = await db.get_owned("sessions", session_id, owner_id)
    return SessionSchema(**row) if row else None


async def list_sessions(db, owner_id: str) -> List[SessionSchema]:
    rows = await db.list_owned("sessions", owner_id, order_by="created_at", desc=True)
    return [SessionSchema(**row) for row in rows]


async def update_session_status(
    db,
    owner_id: str,
    session_id: int,
    status: SessionStatus
) -> Optional[SessionSchema]:
    row = await db.update_owned("sessions", session_id, owner_id, {"status": SessionStatus(status).value})
    return SessionSchema(**row) if row else None


async def update_session_title(db, owner_id: str, session_id: int, title: str) -> Optional[SessionSchema]:
    row = await db.update_owned("sessions", session_id, owner_id, {"title": title})
    return SessionSchema(**row) if row else None


async def add_message(
    db,
    session_id: int,
    role: str,
    content: str,
    audio_url: Optional[str] = None
) -> MessageSchema:
    """메시지 추가 (append-only)"""
    row = await db.insert_message({
        "session_id": session_id,
        "role": role,
        "content": content,
        "audio_url": audio_url,
    })
    return MessageSchema(**row)


async def get_session_messages(db, owner_id: str, session_id: int) -> Optional[List[MessageSchema]]:
    """세션 메시지 조회 (오래된 순)

    Returns:
        세션이 없거나 타인 소유면 None
    """
    if await db.get_owned("sessions", session_id, owner_id) is None:
        return None
    rows = await db.list_messages(session_id)
    return [MessageSchema(**row) for row in rows]


async def get_conversation_turns(db, owner_id: str, session_id: int) -> Optional[List[ConversationTurn]]:
    """LLM 입력용 대화 턴 목록"""
    messages = await get_session_messages(db, owner_id, session_id)
    if messages is None:
        return None
    return [ConversationTurn.from_dict(m.model_dump()) for m in messages]
