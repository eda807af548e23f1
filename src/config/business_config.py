"""애플리케이션 전역 상수 정의

이 파일에 정의된 상수를 변경하면 전체 시스템에 반영됩니다.
"""

# =============================================================================
# 인터뷰(일일 대화) 관련 상수
# =============================================================================

# 일지 생성 준비 완료 신호
READY_TO_GENERATE_SENTINEL = "[READY_TO_GENERATE]"
"""인터뷰 LLM이 응답 본문에 포함시키는 준비 완료 마커
- 감지 후 사용자에게 보여주기 전에 제거됨
- 변경 시 영향: prompt/interview_prompt.py, service/daily/readiness.py
"""

# 세션 시작 인사
SESSION_GREETING = "안녕하세요! 업무 일지 도우미입니다. 오늘 주로 어떤 업무를 하셨나요?"

# =============================================================================
# 일지/주간 보고 렌더링 관련 상수
# =============================================================================

# 빈 필드 대체 문구 (보고서 본문과 같은 언어)
EMPTY_FIELD_PLACEHOLDER = "없음"

# OKR 미지정 시 프롬프트에 들어가는 마커
NO_OKR_MARKER = "없음 (OKR 미설정)"

# =============================================================================
# Notion 동기화 관련 상수
# =============================================================================

# Notion 텍스트 블록 1개당 최대 글자 수
NOTION_TEXT_BLOCK_MAX_LENGTH = 1800
"""Notion API의 rich_text 2000자 제한보다 여유를 둔 값
- 변경 시 영향: service/notion/block_builder.py
"""

NOTION_API_VERSION = "2022-06-28"

# 데이터베이스 제목 속성을 찾지 못했을 때 사용하는 이름
NOTION_DEFAULT_TITLE_PROPERTY = "Name"
