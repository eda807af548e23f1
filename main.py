from fastapi import FastAPI, HTTPException, Header, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import date
import logging
from dotenv import load_dotenv

from src.database import (
    Database,
    SessionStatus,
    create_session,
    get_session,
    list_sessions,
    update_session_status,
    get_session_messages,
    get_daily_report,
    list_daily_reports,
    update_daily_report,
    delete_daily_report,
    get_weekly_report,
    list_weekly_reports,
    update_weekly_report,
    delete_weekly_report,
    update_notion_config,
)
from src.database import okr_repository
from src.service import (
    process_interview_message,
    generate_daily_report,
    generate_weekly_report,
    sync_daily_report,
    sync_weekly_report,
    describe_notion_target,
    validate_notion_token,
)
from src.utils import (
    WeeklyReportRequest,
    OkrProgressItem,
    ReportAssistantError,
    NotionConfigError,
    ReportExtractionError,
    ReportNotFoundError,
    SessionClosedError,
    LLMCallError,
)
from src.utils.models import get_chat_llm, get_summary_llm

# 환경 변수 로드
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="업무 일지 어시스턴트")


# 저장소 핸들은 시작 시 한 번 생성 (연결 실패는 여기서 바로 드러남)
@app.on_event("startup")
async def startup_event():
    app.state.db = Database.from_env()


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_owner_id(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    """요청 헤더의 사용자 ID (인증은 앞단에서 처리)"""
    return x_user_id


# ============================================
# 도메인 예외 → HTTP 응답
# ============================================

ERROR_STATUS_CODES = {
    NotionConfigError: 400,
    ReportNotFoundError: 404,
    SessionClosedError: 409,
    ReportExtractionError: 502,
    LLMCallError: 502,
}


@app.exception_handler(ReportAssistantError)
async def report_assistant_error_handler(request: Request, exc: ReportAssistantError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    logger.warning(f"[API] {request.method} {request.url.path} → {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def not_found() -> HTTPException:
    return HTTPException(status_code=404, detail=ReportNotFoundError().args[0])


# ============================================
# 요청 바디
# ============================================

class SessionCreateRequest(BaseModel):
    title: Optional[str] = None


class SessionStatusRequest(BaseModel):
    status: SessionStatus


class MessageRequest(BaseModel):
    content: str = Field(min_length=1)
    audio_url: Optional[str] = None


class DailyReportUpdateRequest(BaseModel):
    work_content: Optional[str] = None
    completion_status: Optional[str] = None
    problems: Optional[str] = None
    tomorrow_plan: Optional[str] = None
    business_insights: Optional[str] = None
    summary: Optional[str] = None


class WeeklyReportUpdateRequest(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    okr_progress: Optional[List[OkrProgressItem]] = None
    achievements: Optional[List[str]] = None
    problems: Optional[str] = None
    next_week_plan: Optional[str] = None


class PeriodRequest(BaseModel):
    title: str
    start_date: date
    end_date: date


class PeriodUpdateRequest(BaseModel):
    title: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ObjectiveRequest(BaseModel):
    title: str
    description: Optional[str] = None


class ObjectiveUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None


class KeyResultRequest(BaseModel):
    title: str
    target_value: Optional[str] = None
    current_value: Optional[str] = None
    unit: Optional[str] = None


class KeyResultUpdateRequest(BaseModel):
    title: Optional[str] = None
    target_value: Optional[str] = None
    current_value: Optional[str] = None
    unit: Optional[str] = None


class NotionConfigRequest(BaseModel):
    notion_database_id: str


@app.get("/api/status")
async def get_status():
    """서버 상태 확인"""
    return {"status": "running", "message": "업무 일지 어시스턴트 서버가 정상 작동 중입니다."}


# ============================================
# 세션 / 인터뷰
# ============================================

@app.post("/api/sessions")
async def create_session_api(
    body: SessionCreateRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    return await create_session(db, owner_id, body.title)


@app.get("/api/sessions")
async def list_sessions_api(owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    return await list_sessions(db, owner_id)


@app.get("/api/sessions/{session_id}")
async def get_session_api(session_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    session = await get_session(db, owner_id, session_id)
    if session is None:
        raise not_found()
    return session


@app.patch("/api/sessions/{session_id}")
async def update_session_status_api(
    session_id: int,
    body: SessionStatusRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    session = await update_session_status(db, owner_id, session_id, body.status)
    if session is None:
        raise not_found()
    return session


@app.get("/api/sessions/{session_id}/messages")
async def get_messages_api(session_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    messages = await get_session_messages(db, owner_id, session_id)
    if messages is None:
        raise not_found()
    return messages


@app.post("/api/sessions/{session_id}/messages")
async def send_message_api(
    session_id: int,
    body: MessageRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db),
    llm=Depends(get_chat_llm)
):
    """사용자 메시지 → 어시스턴트 응답 + 일지 생성 가능 여부"""
    response = await process_interview_message(db, owner_id, session_id, body.content, llm, body.audio_url)
    return {
        "reply": response.reply,
        "ready_to_generate": response.ready_to_generate,
        "user_message": response.user_message,
        "assistant_message": response.assistant_message,
    }


@app.post("/api/sessions/{session_id}/report")
async def generate_report_api(
    session_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db),
    llm=Depends(get_summary_llm)
):
    """세션 대화로 일지 생성 (명시적 요청 시에만)"""
    return await generate_daily_report(db, owner_id, session_id, llm)


# ============================================
# 일일 업무 일지
# ============================================

@app.get("/api/reports")
async def list_reports_api(owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    return await list_daily_reports(db, owner_id)


@app.get("/api/reports/{report_id}")
async def get_report_api(report_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    report = await get_daily_report(db, owner_id, report_id)
    if report is None:
        raise not_found()
    return report


@app.patch("/api/reports/{report_id}")
async def update_report_api(
    report_id: int,
    body: DailyReportUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    report = await update_daily_report(db, owner_id, report_id, **body.model_dump(exclude_none=True))
    if report is None:
        raise not_found()
    return report


@app.delete("/api/reports/{report_id}")
async def delete_report_api(report_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    if not await delete_daily_report(db, owner_id, report_id):
        raise not_found()
    return {"deleted": True}


@app.post("/api/reports/{report_id}/sync")
async def sync_report_api(report_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    """Notion 동기화 (이미 synced여도 다시 실행)"""
    outcome = await sync_daily_report(db, owner_id, report_id)
    return {"status": outcome.status, "page_url": outcome.page_url, "error": outcome.error}


# ============================================
# 주간 보고
# ============================================

@app.post("/api/weekly-reports")
async def generate_weekly_report_api(
    body: WeeklyReportRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db),
    llm=Depends(get_summary_llm)
):
    if body.week_end < body.week_start:
        raise HTTPException(status_code=422, detail="week_end가 week_start보다 빠릅니다.")
    return await generate_weekly_report(db, owner_id, body, llm)


@app.get("/api/weekly-reports")
async def list_weekly_reports_api(owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    return await list_weekly_reports(db, owner_id)


@app.get("/api/weekly-reports/{report_id}")
async def get_weekly_report_api(report_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    report = await get_weekly_report(db, owner_id, report_id)
    if report is None:
        raise not_found()
    return report


@app.patch("/api/weekly-reports/{report_id}")
async def update_weekly_report_api(
    report_id: int,
    body: WeeklyReportUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    report = await update_weekly_report(db, owner_id, report_id, **body.model_dump(exclude_none=True))
    if report is None:
        raise not_found()
    return report


@app.delete("/api/weekly-reports/{report_id}")
async def delete_weekly_report_api(report_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    if not await delete_weekly_report(db, owner_id, report_id):
        raise not_found()
    return {"deleted": True}


@app.post("/api/weekly-reports/{report_id}/sync")
async def sync_weekly_report_api(report_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    outcome = await sync_weekly_report(db, owner_id, report_id)
    return {"status": outcome.status, "page_url": outcome.page_url, "error": outcome.error}


# ============================================
# OKR
# ============================================

@app.post("/api/okr/periods")
async def create_period_api(body: PeriodRequest, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    try:
        return await okr_repository.create_period(db, owner_id, body.title, body.start_date, body.end_date)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/api/okr/periods")
async def list_periods_api(owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    return await okr_repository.list_periods(db, owner_id)


@app.get("/api/okr/periods/active")
async def get_active_period_api(owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    period = await okr_repository.get_active_period(db, owner_id)
    if period is None:
        raise not_found()
    return period


@app.get("/api/okr/periods/{period_id}")
async def get_period_api(period_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    period = await okr_repository.get_period(db, owner_id, period_id)
    if period is None:
        raise not_found()
    return period


@app.patch("/api/okr/periods/{period_id}")
async def update_period_api(
    period_id: int,
    body: PeriodUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    period = await okr_repository.update_period(db, owner_id, period_id, **body.model_dump(exclude_none=True))
    if period is None:
        raise not_found()
    return period


@app.delete("/api/okr/periods/{period_id}")
async def delete_period_api(period_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    if not await okr_repository.delete_period(db, owner_id, period_id):
        raise not_found()
    return {"deleted": True}


@app.get("/api/okr/periods/{period_id}/tree")
async def get_okr_tree_api(period_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    """기간의 Objective → Key Result 트리 (KR 진척률 포함)"""
    if await okr_repository.get_period(db, owner_id, period_id) is None:
        raise not_found()

    tree: List[Dict[str, Any]] = []
    for objective in await okr_repository.get_full_okr(db, owner_id, period_id):
        item = objective.model_dump()
        item["key_results"] = [
            {**kr.model_dump(), "progress_percent": okr_repository.key_result_progress_percent(kr)}
            for kr in objective.key_results
        ]
        tree.append(item)
    return tree


@app.post("/api/okr/periods/{period_id}/objectives")
async def create_objective_api(
    period_id: int,
    body: ObjectiveRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    objective = await okr_repository.create_objective(db, owner_id, period_id, body.title, body.description)
    if objective is None:
        raise not_found()
    return objective


@app.patch("/api/okr/objectives/{objective_id}")
async def update_objective_api(
    objective_id: int,
    body: ObjectiveUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    objective = await okr_repository.update_objective(db, owner_id, objective_id, **body.model_dump(exclude_none=True))
    if objective is None:
        raise not_found()
    return objective


@app.delete("/api/okr/objectives/{objective_id}")
async def delete_objective_api(objective_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    if not await okr_repository.delete_objective(db, owner_id, objective_id):
        raise not_found()
    return {"deleted": True}


@app.post("/api/okr/objectives/{objective_id}/key-results")
async def create_key_result_api(
    objective_id: int,
    body: KeyResultRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    key_result = await okr_repository.create_key_result(
        db, owner_id, objective_id, body.title, body.target_value, body.current_value, body.unit
    )
    if key_result is None:
        raise not_found()
    return key_result


@app.patch("/api/okr/key-results/{key_result_id}")
async def update_key_result_api(
    key_result_id: int,
    body: KeyResultUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    key_result = await okr_repository.update_key_result(
        db, owner_id, key_result_id, **body.model_dump(exclude_none=True)
    )
    if key_result is None:
        raise not_found()
    return key_result


@app.delete("/api/okr/key-results/{key_result_id}")
async def delete_key_result_api(key_result_id: int, owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    if not await okr_repository.delete_key_result(db, owner_id, key_result_id):
        raise not_found()
    return {"deleted": True}


# ============================================
# 설정 (Notion)
# ============================================

@app.put("/api/settings/notion")
async def update_notion_config_api(
    body: NotionConfigRequest,
    owner_id: str = Depends(get_owner_id),
    db: Database = Depends(get_db)
):
    try:
        user = await update_notion_config(db, owner_id, body.notion_database_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"notion_database_id": user.notion_database_id}


@app.get("/api/settings/notion")
async def get_notion_target_api(owner_id: str = Depends(get_owner_id), db: Database = Depends(get_db)):
    """설정된 Notion 대상 타입/제목"""
    target = await describe_notion_target(db, owner_id)
    return {
        "target_type": target.target_type,
        "id": target.id,
        "title": target.title,
        "error": target.error,
    }


@app.get("/api/settings/notion/validate")
async def validate_notion_token_api():
    """토큰 유효성 + 연결된 bot 이름"""
    status = await validate_notion_token()
    return {"valid": status.valid, "bot_name": status.bot_name, "error": status.error}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
