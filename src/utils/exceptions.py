"""도메인 예외 정의

Resolver/Sync Executor는 예상 가능한 실패를 결과 값으로 변환하고,
LLM/저장소 계층은 아래 예외를 그대로 올려보냅니다.
최종 변환(HTTP 응답)은 main.py에서만 수행합니다.
"""


class ReportAssistantError(Exception):
    """애플리케이션 공통 예외"""


class NotionConfigError(ReportAssistantError):
    """Notion 토큰 또는 동기화 대상 ID 미설정"""


class ReportExtractionError(ReportAssistantError):
    """LLM 구조화 응답이 스키마와 맞지 않음 (부분 저장 없음)"""


class ReportNotFoundError(ReportAssistantError):
    """존재하지 않거나 소유자가 아닌 레코드

    다른 사용자의 레코드 존재 여부가 드러나지 않도록 두 경우를 구분하지 않습니다.
    """

    def __init__(self, message: str = "존재하지 않거나 권한이 없습니다."):
        super().__init__(message)


class SessionClosedError(ReportAssistantError):
    """완료/보관된 세션에 대한 변경 시도"""


class LLMCallError(ReportAssistantError):
    """LLM 호출 자체가 실패 (네트워크/제공자 오류, 자동 재시도 없음)"""
