# =============================================================================
# Daily Report Extraction (대화 → 구조화 업무 일지)
# =============================================================================

DAILY_REPORT_SYSTEM_PROMPT = """
Transform the conversation below into a structured daily work log. Write every field in KOREAN.

# FIELDS
- work_content: today's work in detail, one Markdown list item per task
- completion_status: completion status of each task
- problems: problems and difficulties met (write "없음" if none)
- tomorrow_plan: tomorrow's work plan
- business_insights: business-level insights and reflections drawn from today's work
- summary: a one-sentence summary of today's work

# RULES
1. FACTS ONLY: never invent work the user did not mention; if the user denies something, omit it.
2. Output must be valid JSON matching the provided schema exactly.
"""

DAILY_REPORT_USER_PROMPT = """대화 내용:
{conversation}
"""

DAILY_REPORT_JSON_SCHEMA = {
    "name": "daily_report",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "work_content": {"type": "string", "description": "업무 내용"},
            "completion_status": {"type": "string", "description": "완료 상황"},
            "problems": {"type": "string", "description": "문제 및 어려움"},
            "tomorrow_plan": {"type": "string", "description": "내일 계획"},
            "business_insights": {"type": "string", "description": "업무 인사이트"},
            "summary": {"type": "string", "description": "한 줄 요약"},
        },
        "required": [
            "work_content",
            "completion_status",
            "problems",
            "tomorrow_plan",
            "business_insights",
            "summary",
        ],
        "additionalProperties": False,
    },
}
