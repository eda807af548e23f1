"""OKR(기간 → Objective → Key Result) 관련 DB 로직"""
from typing import Optional, List
from datetime import date
import logging

from .schemas import (
    OkrPeriodSchema,
    ObjectiveSchema,
    KeyResultSchema,
    ObjectiveWithKeyResults,
)
from ..config import get_kst_now

logger = logging.getLogger(__name__)


# =============================================================================
# OKR 기간
# =============================================================================

async def create_period(db, owner_id: str, title: str, start_date: date, end_date: date) -> OkrPeriodSchema:
    if end_date < start_date:
        raise ValueError("OKR 기간의 종료일이 시작일보다 빠릅니다.")
    row = await db.insert_owned("okr_periods", owner_id, {
        "title": title,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
    })
    return OkrPeriodSchema(**row)


async def get_period(db, owner_id: str, period_id: int) -> Optional[OkrPeriodSchema]:
    row = await db.get_owned("okr_periods", period_id, owner_id)
    return OkrPeriodSchema(**row) if row else None


async def list_periods(db, owner_id: str) -> List[OkrPeriodSchema]:
    rows = await db.list_owned("okr_periods", owner_id, order_by="start_date", desc=True)
    return [OkrPeriodSchema(**row) for row in rows]


async def get_active_period(db, owner_id: str, today: Optional[date] = None) -> Optional[OkrPeriodSchema]:
    """오늘이 포함된 기간, 없으면 가장 최근 시작한 기간"""
    today = today or get_kst_now().date()
    periods = await list_periods(db, owner_id)
    for period in periods:
        if period.start_date <= today <= period.end_date:
            return period
    return periods[0] if periods else None


async def update_period(db, owner_id: str, period_id: int, **fields) -> Optional[OkrPeriodSchema]:
    changes = {}
    for key in ("title", "start_date", "end_date"):
        value = fields.get(key)
        if value is not None:
            changes[key] = value.isoformat() if isinstance(value, date) else value
    row = await db.update_owned("okr_periods", period_id, owner_id, changes)
    return OkrPeriodSchema(**row) if row else None


async def delete_period(db, owner_id: str, period_id: int) -> bool:
    """기간 삭제 (하위 Objective/Key Result까지 삭제)"""
    objectives = await db.list_owned("objectives", owner_id, filters={"period_id": period_id})
    objective_ids = [o["id"] for o in objectives]

    if not await db.delete_owned("okr_periods", period_id, owner_id):
        return False

    await db.delete_owned_where("key_results", owner_id, "objective_id", objective_ids)
    await db.delete_owned_where("objectives", owner_id, "period_id", [period_id])
    logger.info(f"[OkrRepo] 기간 삭제: period_id={period_id}, objectives={len(objective_ids)}")
    return True


# =============================================================================
# Objective
# =============================================================================

async def create_objective(
    db,
    owner_id: str,
    period_id: int,
    title: str,
    description: Optional[str] = None
) -> Optional[ObjectiveSchema]:
    """Objective 생성 (기간이 없거나 타인 소유면 None)"""
    if await get_period(db, owner_id, period_id) is None:
        return None
    row = await db.insert_owned("objectives", owner_id, {
        "period_id": period_id,
        "title": title,
        "description": description,
    })
    return ObjectiveSchema(**row)


async def update_objective(db, owner_id: str, objective_id: int, **fields) -> Optional[ObjectiveSchema]:
    changes = {k: v for k, v in fields.items() if k in ("title", "description") and v is not None}
    row = await db.update_owned("objectives", objective_id, owner_id, changes)
    return ObjectiveSchema(**row) if row else None


async def delete_objective(db, owner_id: str, objective_id: int) -> bool:
    """Objective 삭제 (하위 Key Result까지 삭제)"""
    if not await db.delete_owned("objectives", objective_id, owner_id):
        return False
    await db.delete_owned_where("key_results", owner_id, "objective_id", [objective_id])
    return True


# =============================================================================
# Key Result
# =============================================================================

async def create_key_result(
    db,
    owner_id: str,
    objective_id: int,
    title: str,
    target_value: Optional[str] = None,
    current_value: Optional[str] = None,
    unit: Optional[str] = None
) -> Optional[KeyResultSchema]:
    """Key Result 생성 (Objective가 없거나 타인 소유면 None)"""
    if await db.get_owned("objectives", objective_id, owner_id) is None:
        return None
    row = await db.insert_owned("key_results", owner_id, {
        "objective_id": objective_id,
        "title": title,
        "target_value": target_value,
        "current_value": current_value,
        "unit": unit,
    })
    return KeyResultSchema(**row)


async def update_key_result(db, owner_id: str, key_result_id: int, **fields) -> Optional[KeyResultSchema]:
    allowed = ("title", "target_value", "current_value", "unit")
    changes = {k: v for k, v in fields.items() if k in allowed and v is not None}
    row = await db.update_owned("key_results", key_result_id, owner_id, changes)
    return KeyResultSchema(**row) if row else None


async def delete_key_result(db, owner_id: str, key_result_id: int) -> bool:
    return await db.delete_owned("key_results", key_result_id, owner_id)


# =============================================================================
# 트리 조회
# =============================================================================

async def get_full_okr(db, owner_id: str, period_id: int) -> List[ObjectiveWithKeyResults]:
    """기간의 Objective 목록 + 각 Objective의 Key Result"""
    objectives = await db.list_owned(
        "objectives", owner_id, order_by="created_at", desc=False, filters={"period_id": period_id}
    )
    key_results = await db.list_owned("key_results", owner_id, order_by="created_at", desc=False)

    tree = []
    for objective in objectives:
        children = [KeyResultSchema(**kr) for kr in key_results if kr["objective_id"] == objective["id"]]
        tree.append(ObjectiveWithKeyResults(**objective, key_results=children))
    return tree


def key_result_progress_percent(key_result: KeyResultSchema) -> Optional[int]:
    """current/target 진척률(%) - 숫자가 아니거나 target이 0이면 None"""
    try:
        current = float(key_result.current_value or "0")
        target = float(key_result.target_value)
    except (TypeError, ValueError):
        return None
    if target == 0:
        return None
    return round(current / target * 100)
