import json
from typing import List, Type, TypeVar
import logging

from pydantic import BaseModel, ValidationError

from .schemas import ConversationTurn
from .exceptions import ReportExtractionError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


# -----------------------------------------------------------------------------
# 1. 대화 히스토리 처리 관련
# -----------------------------------------------------------------------------

ROLE_LABELS = {
    "user": "사용자",
    "assistant": "어시스턴트",
}


def format_transcript(turns: List[ConversationTurn]) -> str:
    """
    대화 턴 목록을 추출 프롬프트용 텍스트로 포맷팅

    Args:
        turns: 오래된 순으로 정렬된 대화 턴

    Returns:
        "사용자: ...\\n어시스턴트: ..." 형식 문자열 (system 턴 제외)

    Usage:
        일지 구조화 추출 시 전체 대화 제공
    """
    return "\n".join(
        f"{ROLE_LABELS[turn.role]}: {turn.text}"
        for turn in turns
        if turn.role != "system"
    )


# -----------------------------------------------------------------------------
# 2. 구조화 응답 파싱
# -----------------------------------------------------------------------------

def message_text(content) -> str:
    """AIMessage.content(str 또는 content block 리스트)를 문자열로"""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return ""


def parse_structured_output(content, model_cls: Type[ModelT]) -> ModelT:
    """
    LLM JSON 응답을 Pydantic 모델로 검증

    Args:
        content: AIMessage.content
        model_cls: extra="forbid" 모델

    Returns:
        검증된 모델 인스턴스

    Raises:
        ReportExtractionError: JSON이 아니거나 필드 누락/추가 필드가 있을 때
    """
    text = message_text(content).strip()
    if text.startswith("```"):
        text = text.replace("```json", "").replace("```", "").strip()

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"[StructuredOutput] JSON 파싱 실패: {text[:200]}")
        raise ReportExtractionError(f"LLM 응답이 JSON 형식이 아닙니다: {e}") from e

    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        logger.error(f"[StructuredOutput] 스키마 검증 실패 ({model_cls.__name__}): {e}")
        raise ReportExtractionError(f"LLM 응답이 {model_cls.__name__} 스키마와 맞지 않습니다.") from e
