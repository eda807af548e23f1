"""인터뷰 응답의 준비 완료 마커 처리"""
from typing import Tuple

from ...config import READY_TO_GENERATE_SENTINEL


def detect_readiness(text: str) -> Tuple[str, bool]:
    """준비 완료 마커 감지 후 제거

    감지는 제거 전에 수행하며, 단계 전환은 이 함수의 결과로만 판단합니다.

    Args:
        text: 인터뷰 LLM 원문 응답

    Returns:
        (cleaned_text, ready): 마커를 모두 제거하고 trim한 텍스트, 마커 존재 여부
    """
    text = text or ""
    ready = READY_TO_GENERATE_SENTINEL in text
    cleaned = text.replace(READY_TO_GENERATE_SENTINEL, "").strip()
    return cleaned, ready
