"""AI Service Layer Schemas

AI 로직(LLM 호출)의 Input/Output을 명확히 정의하여
데이터 레이어(Repository)와 비즈니스 로직(Service)을 분리합니다.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from dataclasses import dataclass
from datetime import date


# ============================================
# 대화 히스토리 스키마
# ============================================

@dataclass
class ConversationTurn:
    """대화 턴 스키마 (DB: messages)

    ⚠️ IMPORTANT: 세션 내 created_at ASC 정렬 (오래된 것이 [0])

    Attributes:
        role: "user" | "assistant" | "system"
        text: 메시지 내용
        created_at: 생성 시각 (ISO 8601 형식)
        audio_url: 음성 메시지인 경우 원본 파일 위치
    """
    role: Literal["user", "assistant", "system"]
    text: str
    created_at: Optional[str] = None
    audio_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ConversationTurn":
        """DB 결과(dict)를 ConversationTurn으로 변환"""
        return cls(
            role=data["role"],
            text=data["content"],
            created_at=data.get("created_at"),
            audio_url=data.get("audio_url"),
        )


# ============================================
# 일일 업무 일지 (구조화 추출 결과)
# ============================================

class DailyReportContent(BaseModel):
    """일지 구조화 추출 출력 데이터

    strict json_schema 응답을 그대로 검증합니다.
    필드 누락/추가 필드는 모두 검증 오류입니다.
    """
    model_config = ConfigDict(extra="forbid")

    work_content: str = Field(description="오늘 한 업무 내용")
    completion_status: str = Field(description="업무별 완료 상황")
    problems: str = Field(description="겪은 문제와 어려움")
    tomorrow_plan: str = Field(description="내일 업무 계획")
    business_insights: str = Field(description="업무/비즈니스 관점의 인사이트와 생각")
    summary: str = Field(description="오늘 업무 한 줄 요약")


# ============================================
# 주간 보고 Input/Output
# ============================================

class OkrProgressItem(BaseModel):
    """Objective 단위 진행 상황"""
    model_config = ConfigDict(extra="forbid")

    objective_id: int
    objective_title: str
    progress: str
    related_work: str


class WeeklyReportContent(BaseModel):
    """주간 보고 구조화 출력 데이터"""
    model_config = ConfigDict(extra="forbid")

    summary: str
    okr_progress: List[OkrProgressItem]
    achievements: List[str]
    problems: str
    next_week_plan: str


class WeeklyReportRequest(BaseModel):
    """주간 보고 생성 요청

    daily_report_ids는 호출자가 이미 기간으로 골라낸 일지 ID 목록입니다.
    """
    week_start: date
    week_end: date
    daily_report_ids: List[int] = Field(min_length=1)
    period_id: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "week_start": "2025-01-06",
                "week_end": "2025-01-12",
                "daily_report_ids": [11, 12, 14],
                "period_id": 3,
            }
        }
    )
