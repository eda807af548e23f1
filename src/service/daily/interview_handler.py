"""인터뷰 대화 처리 비즈니스 로직"""
import logging
from typing import List, Optional
from dataclasses import dataclass

from langchain_core.messages import SystemMessage, HumanMessage, AIMessage, BaseMessage
from langsmith import traceable

from .readiness import detect_readiness
from ...config import READY_TO_GENERATE_SENTINEL
from ...database import session_repository
from ...database.schemas import MessageSchema, SessionStatus
from ...prompt.interview_prompt import INTERVIEW_SYSTEM_PROMPT
from ...utils.exceptions import LLMCallError, ReportNotFoundError, SessionClosedError
from ...utils.schemas import ConversationTurn
from ...utils.utils import message_text

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "죄송해요, 지금은 답변을 드리기 어려워요. 잠시 후 다시 말씀해주세요."


@dataclass
class InterviewResponse:
    """인터뷰 한 턴 처리 결과"""
    reply: str
    ready_to_generate: bool
    user_message: MessageSchema
    assistant_message: MessageSchema


def build_interview_messages(turns: List[ConversationTurn]) -> List[BaseMessage]:
    """시스템 지시 + 전체 대화 히스토리를 LLM 메시지로 변환"""
    messages: List[BaseMessage] = [
        SystemMessage(content=INTERVIEW_SYSTEM_PROMPT.format(sentinel=READY_TO_GENERATE_SENTINEL))
    ]
    for turn in turns:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.text))
        elif turn.role == "assistant":
            messages.append(AIMessage(content=turn.text))
        else:
            messages.append(SystemMessage(content=turn.text))
    return messages


@traceable(name="generate_interview_reply")
async def generate_interview_reply(turns: List[ConversationTurn], llm) -> str:
    """인터뷰 어시스턴트 응답 생성 (순수 LLM 호출)"""
    try:
        response = await llm.ainvoke(build_interview_messages(turns))
    except Exception as e:
        logger.error(f"[Interview] LLM 호출 실패: {e}")
        raise LLMCallError(f"응답 생성 중 LLM 호출에 실패했습니다: {e}") from e
    return message_text(response.content)


async def process_interview_message(
    db,
    owner_id: str,
    session_id: int,
    content: str,
    llm,
    audio_url: Optional[str] = None
) -> InterviewResponse:
    """사용자 메시지 저장 → LLM 응답 → 준비 완료 감지 → 응답 저장

    Args:
        db: Database 인스턴스
        owner_id: 사용자 ID
        session_id: 세션 ID
        content: 사용자 메시지 (음성이면 전사 텍스트)
        llm: 인터뷰용 LLM 인스턴스
        audio_url: 음성 원본 위치 (선택)

    Returns:
        InterviewResponse: 마커가 제거된 응답과 준비 완료 여부

    Raises:
        ReportNotFoundError: 세션이 없거나 타인 소유
        SessionClosedError: 이미 완료/보관된 세션
    """
    session = await session_repository.get_session(db, owner_id, session_id)
    if session is None:
        raise ReportNotFoundError("세션이 존재하지 않거나 권한이 없습니다.")
    if session.status != SessionStatus.ACTIVE:
        raise SessionClosedError("이미 완료된 세션에는 메시지를 추가할 수 없습니다.")

    user_message = await session_repository.add_message(db, session_id, "user", content, audio_url)
    turns = await session_repository.get_conversation_turns(db, owner_id, session_id)

    raw_reply = await generate_interview_reply(turns, llm)
    reply, ready = detect_readiness(raw_reply)
    if not reply:
        reply = FALLBACK_REPLY

    assistant_message = await session_repository.add_message(db, session_id, "assistant", reply)
    logger.info(f"[Interview] session_id={session_id} 응답 완료 (ready_to_generate={ready})")

    return InterviewResponse(
        reply=reply,
        ready_to_generate=ready,
        user_message=user_message,
        assistant_message=assistant_message,
    )
