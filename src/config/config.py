# 인터뷰 대화 모델 설정 (Google Vertex AI)
CHAT_MODEL_NAME = "gemini-2.5-flash-lite"
CHAT_TEMPERATURE = 0.3
CHAT_MAX_TOKENS = 800

# 구조화 추출 모델 설정 (OpenAI, json_schema strict 모드)
SUMMARY_MODEL_NAME = "gpt-4.1-mini"
SUMMARY_TEMPERATURE = 0.0
SUMMARY_MAX_TOKENS = 2000
SUMMARY_TIMEOUT = 60.0

# Notion API 요청 타임아웃 (ms)
NOTION_TIMEOUT_MS = 30_000
