# =============================================================================
# Weekly Report Aggregation (일지 N개 + OKR → 주간 보고)
# =============================================================================

WEEKLY_REPORT_SYSTEM_PROMPT = """
# ROLE & GOAL
You are a work-report assistant. Combine the user's daily work logs of one week into a structured weekly report, relating the work to the user's OKRs. Write every field in KOREAN.

# FIELDS
- summary: 3-5 sentence overview of the week
- okr_progress: one entry per Objective that this week's work touched
  (objective_id and objective_title copied exactly from the OKR list, progress = how far it moved, related_work = which work contributed)
  Use an empty list when no OKR is given.
- achievements: list of key achievements, one sentence each
- problems: problems and risks of the week (write "없음" if none)
- next_week_plan: plan for next week

# RULES
1. Use only facts found in the daily logs.
2. Output must be valid JSON matching the provided schema exactly.
"""

WEEKLY_REPORT_USER_PROMPT = """# 기간
{week_start} ~ {week_end}

# OKR
{okr_context}

# 일일 업무 일지
{daily_reports}
"""

DAILY_REPORT_ENTRY_TEMPLATE = """## {report_date}
- 업무 내용: {work_content}
- 업무 인사이트: {business_insights}
- 문제 및 어려움: {problems}
"""

WEEKLY_REPORT_JSON_SCHEMA = {
    "name": "weekly_report",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "summary": {"type": "string", "description": "주간 요약"},
            "okr_progress": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "objective_id": {"type": "integer"},
                        "objective_title": {"type": "string"},
                        "progress": {"type": "string"},
                        "related_work": {"type": "string"},
                    },
                    "required": ["objective_id", "objective_title", "progress", "related_work"],
                    "additionalProperties": False,
                },
            },
            "achievements": {"type": "array", "items": {"type": "string"}},
            "problems": {"type": "string", "description": "문제 및 어려움"},
            "next_week_plan": {"type": "string", "description": "다음 주 계획"},
        },
        "required": ["summary", "okr_progress", "achievements", "problems", "next_week_plan"],
        "additionalProperties": False,
    },
}
