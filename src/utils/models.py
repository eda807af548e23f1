from langchain_google_vertexai import ChatVertexAI
from langchain_openai import ChatOpenAI
from ..config.config import (
    CHAT_MODEL_NAME,
    CHAT_TEMPERATURE,
    CHAT_MAX_TOKENS,
    SUMMARY_MODEL_NAME,
    SUMMARY_TEMPERATURE,
    SUMMARY_MAX_TOKENS,
    SUMMARY_TIMEOUT,
)


# 인터뷰 대화 모델 (Vertex AI, credentials는 환경변수에서 자동 로드)
CHAT_MODEL_CONFIG = {
    "model_name": CHAT_MODEL_NAME,
    "temperature": CHAT_TEMPERATURE,
    "max_output_tokens": CHAT_MAX_TOKENS,
}

# 구조화 추출 모델 (OpenAI, OPENAI_API_KEY 환경변수 사용)
# json_schema strict 모드는 OpenAI response_format으로만 보장됨
SUMMARY_MODEL_CONFIG = {
    "model": SUMMARY_MODEL_NAME,
    "temperature": SUMMARY_TEMPERATURE,
    "max_tokens": SUMMARY_MAX_TOKENS,
    "timeout": SUMMARY_TIMEOUT,
}


# =============================================================================
# LLM 인스턴스 캐싱 (싱글톤 패턴)
# =============================================================================

_cached_chat_llm = None
_cached_summary_llm = None


def get_chat_llm() -> ChatVertexAI:
    """인터뷰 대화용 LLM 인스턴스 반환 (캐시됨)"""
    global _cached_chat_llm
    if _cached_chat_llm is None:
        _cached_chat_llm = ChatVertexAI(**CHAT_MODEL_CONFIG)
    return _cached_chat_llm


def get_summary_llm() -> ChatOpenAI:
    """일지/주간 보고 구조화 추출용 LLM 인스턴스 반환 (캐시됨)"""
    global _cached_summary_llm
    if _cached_summary_llm is None:
        _cached_summary_llm = ChatOpenAI(**SUMMARY_MODEL_CONFIG)
    return _cached_summary_llm
