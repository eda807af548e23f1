"""Database Pydantic Schemas"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List, Literal
from datetime import date
from enum import Enum


class SyncStatus(str, Enum):
    """Notion 동기화 상태

    pending → synced | failed, failed → pending(재시도) → synced | failed
    """
    PENDING = "pending"
    SYNCED = "synced"
    FAILED = "failed"


class SessionStatus(str, Enum):
    """인터뷰 세션 상태"""
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


# ============================================
# 1. users 테이블 스키마
# ============================================

class UserSchema(BaseModel):
    """users 테이블 스키마"""
    id: str
    name: Optional[str] = None

    # Notion 연동 설정 (페이지 또는 데이터베이스 ID/URL)
    notion_database_id: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# ============================================
# 2. sessions / messages 테이블 스키마
# ============================================

class SessionSchema(BaseModel):
    """sessions 테이블 스키마"""
    id: int
    user_id: str
    title: Optional[str] = None
    status: SessionStatus = SessionStatus.ACTIVE
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MessageSchema(BaseModel):
    """messages 테이블 스키마 (세션 내 append-only)"""
    id: int
    session_id: int
    role: Literal["user", "assistant", "system"]
    content: str
    audio_url: Optional[str] = None
    created_at: Optional[str] = None


# ============================================
# 3. daily_reports / weekly_reports 테이블 스키마
# ============================================

class DailyReportSchema(BaseModel):
    """daily_reports 테이블 스키마"""
    id: int
    user_id: str
    session_id: int
    report_date: date

    # 구조화 필드
    work_content: Optional[str] = None
    completion_status: Optional[str] = None
    problems: Optional[str] = None
    tomorrow_plan: Optional[str] = None
    business_insights: Optional[str] = None
    summary: Optional[str] = None

    # 구조화 필드로부터 매번 재생성되는 본문
    markdown_content: Optional[str] = None

    # Notion 동기화
    notion_sync_status: SyncStatus = SyncStatus.PENDING
    notion_page_id: Optional[str] = None
    notion_page_url: Optional[str] = None
    notion_synced_at: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class WeeklyReportSchema(BaseModel):
    """weekly_reports 테이블 스키마"""
    id: int
    user_id: str
    period_id: Optional[int] = None
    week_start: date
    week_end: date
    title: str

    summary: Optional[str] = None
    okr_progress: List[Dict[str, Any]] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)
    problems: Optional[str] = None
    next_week_plan: Optional[str] = None

    markdown_content: Optional[str] = None

    # 생성 시점에 고정 (요청한 ID 그대로, 조회 실패 ID 포함)
    source_report_ids: List[int] = Field(default_factory=list)

    notion_sync_status: SyncStatus = SyncStatus.PENDING
    notion_page_id: Optional[str] = None
    notion_page_url: Optional[str] = None
    notion_synced_at: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# ============================================
# 4. OKR 테이블 스키마 (period → objective → key result)
# ============================================

class OkrPeriodSchema(BaseModel):
    """okr_periods 테이블 스키마"""
    id: int
    user_id: str
    title: str
    start_date: date
    end_date: date
    created_at: Optional[str] = None


class KeyResultSchema(BaseModel):
    """key_results 테이블 스키마

    target/current 값과 단위는 숫자 검증 없이 문자열로 저장
    """
    id: int
    user_id: str
    objective_id: int
    title: str
    target_value: Optional[str] = None
    current_value: Optional[str] = None
    unit: Optional[str] = None
    created_at: Optional[str] = None


class ObjectiveSchema(BaseModel):
    """objectives 테이블 스키마"""
    id: int
    user_id: str
    period_id: int
    title: str
    description: Optional[str] = None
    created_at: Optional[str] = None


class ObjectiveWithKeyResults(ObjectiveSchema):
    """Objective + 하위 Key Result 트리 (조회 전용)"""
    key_results: List[KeyResultSchema] = Field(default_factory=list)
