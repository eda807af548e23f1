import os
import copy
import logging
from supabase import create_client, Client
from typing import Optional, Dict, Any, List
from datetime import datetime

logger = logging.getLogger(__name__)


# 소유자(user_id) 컬럼으로 범위가 제한되는 테이블
OWNER_SCOPED_TABLES = (
    "sessions",
    "daily_reports",
    "weekly_reports",
    "okr_periods",
    "objectives",
    "key_results",
)


class Database:
    """저장소 핸들

    프로세스 시작 시 한 번 생성해서 모든 Repository 함수에 주입합니다.
    supabase 클라이언트가 없으면 메모리 모드로 동작합니다 (로컬/테스트용).

    소유자 범위 테이블의 읽기/쓰기는 모두 owner_id를 필수 인자로 받아
    쿼리 조건에 포함시킵니다.
    """

    def __init__(self, supabase: Optional[Client] = None):
        self.supabase = supabase

        # 모킹 데이터 저장소 (실제 DB 없을 때 사용)
        self._mock_tables: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._mock_ids: Dict[str, int] = {}
        self._mock_users: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def from_env(cls) -> "Database":
        """환경 변수로 Database 생성

        SUPABASE_URL/SUPABASE_ANON_KEY가 있으면 연결을 바로 확인하고,
        실패하면 생성 시점에 예외를 올립니다.
        """
        url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_ANON_KEY")

        if not (url and key):
            logger.warning("⚠️ Supabase 환경 변수가 설정되지 않았습니다. 메모리 모드로 실행됩니다.")
            return cls()

        db = cls(create_client(url, key))
        if not db.test_connection():
            raise RuntimeError("Supabase 연결에 실패했습니다. SUPABASE_URL/SUPABASE_ANON_KEY를 확인해주세요.")
        logger.info("✅ Supabase 클라이언트 초기화 성공")
        return db

    def test_connection(self) -> bool:
        """데이터베이스 연결 테스트"""
        if not self.supabase:
            return True

        try:
            self.supabase.table("users").select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.error(f"❌ Supabase 연결 실패: {e}")
            return False

    # ============================================
    # 공통 헬퍼
    # ============================================

    @staticmethod
    def _now() -> str:
        return datetime.now().isoformat()

    def _mock_table(self, table: str) -> Dict[int, Dict[str, Any]]:
        return self._mock_tables.setdefault(table, {})

    @staticmethod
    def _check_owner_scoped(table: str) -> None:
        if table not in OWNER_SCOPED_TABLES:
            raise ValueError(f"소유자 범위 테이블이 아닙니다: {table}")

    # ============================================
    # 소유자 범위 CRUD
    # ============================================

    async def insert_owned(self, table: str, owner_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """레코드 생성 (user_id는 owner_id로 강제)"""
        self._check_owner_scoped(table)
        now = self._now()
        row = {**data, "user_id": owner_id, "created_at": now, "updated_at": now}

        if not self.supabase:
            next_id = self._mock_ids.get(table, 0) + 1
            self._mock_ids[table] = next_id
            row["id"] = next_id
            self._mock_table(table)[next_id] = row
            return copy.deepcopy(row)

        response = self.supabase.table(table).insert(row).execute()
        if not response.data:
            raise RuntimeError(f"{table} 생성 결과가 비어 있습니다.")
        return response.data[0]

    async def get_owned(self, table: str, record_id: int, owner_id: str) -> Optional[Dict[str, Any]]:
        """ID + 소유자로 단건 조회 (타인 소유면 None)"""
        self._check_owner_scoped(table)

        if not self.supabase:
            row = self._mock_table(table).get(record_id)
            if row is None or row.get("user_id") != owner_id:
                return None
            return copy.deepcopy(row)

        response = self.supabase.table(table).select("*") \
            .eq("id", record_id) \
            .eq("user_id", owner_id) \
            .limit(1) \
            .execute()
        return response.data[0] if response.data else None

    async def list_owned(
        self,
        table: str,
        owner_id: str,
        order_by: str = "created_at",
        desc: bool = True,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """소유자 기준 목록 조회 (기본: created_at 내림차순)"""
        self._check_owner_scoped(table)
        filters = filters or {}

        if not self.supabase:
            rows = [
                copy.deepcopy(row)
                for row in self._mock_table(table).values()
                if row.get("user_id") == owner_id
                and all(row.get(k) == v for k, v in filters.items())
            ]
            rows.sort(key=lambda r: (str(r.get(order_by) or ""), r["id"]), reverse=desc)
            return rows

        query = self.supabase.table(table).select("*").eq("user_id", owner_id)
        for column, value in filters.items():
            query = query.eq(column, value)
        response = query.order(order_by, desc=desc).execute()
        return response.data or []

    async def update_owned(
        self,
        table: str,
        record_id: int,
        owner_id: str,
        data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """ID + 소유자 조건으로 수정 (대상 없으면 None)"""
        self._check_owner_scoped(table)
        changes = {k: v for k, v in data.items() if k not in ("id", "user_id", "created_at")}
        changes["updated_at"] = self._now()

        if not self.supabase:
            row = self._mock_table(table).get(record_id)
            if row is None or row.get("user_id") != owner_id:
                return None
            row.update(changes)
            return copy.deepcopy(row)

        response = self.supabase.table(table).update(changes) \
            .eq("id", record_id) \
            .eq("user_id", owner_id) \
            .execute()
        return response.data[0] if response.data else None

    async def delete_owned(self, table: str, record_id: int, owner_id: str) -> bool:
        """ID + 소유자 조건으로 삭제 (타인 소유/미존재면 False)"""
        self._check_owner_scoped(table)

        if not self.supabase:
            rows = self._mock_table(table)
            row = rows.get(record_id)
            if row is None or row.get("user_id") != owner_id:
                return False
            del rows[record_id]
            return True

        response = self.supabase.table(table).delete() \
            .eq("id", record_id) \
            .eq("user_id", owner_id) \
            .execute()
        return bool(response.data)

    async def delete_owned_where(self, table: str, owner_id: str, column: str, values: List[Any]) -> int:
        """소유자 범위 내에서 column IN values 조건으로 일괄 삭제 (cascade용)"""
        self._check_owner_scoped(table)
        if not values:
            return 0

        if not self.supabase:
            rows = self._mock_table(table)
            targets = [
                row_id for row_id, row in rows.items()
                if row.get("user_id") == owner_id and row.get(column) in values
            ]
            for row_id in targets:
                del rows[row_id]
            return len(targets)

        response = self.supabase.table(table).delete() \
            .eq("user_id", owner_id) \
            .in_(column, values) \
            .execute()
        return len(response.data or [])

    # ============================================
    # messages (세션 범위, append-only)
    # ============================================

    async def insert_message(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """메시지 추가"""
        row = {**data, "created_at": self._now()}

        if not self.supabase:
            next_id = self._mock_ids.get("messages", 0) + 1
            self._mock_ids["messages"] = next_id
            row["id"] = next_id
            self._mock_table("messages")[next_id] = row
            return copy.deepcopy(row)

        response = self.supabase.table("messages").insert(row).execute()
        if not response.data:
            raise RuntimeError("messages 생성 결과가 비어 있습니다.")
        return response.data[0]

    async def list_messages(self, session_id: int) -> List[Dict[str, Any]]:
        """세션 메시지 조회 (오래된 순)

        세션 소유권 확인은 호출 측(session_repository)에서 먼저 수행합니다.
        """
        if not self.supabase:
            rows = [
                copy.deepcopy(row)
                for row in self._mock_table("messages").values()
                if row.get("session_id") == session_id
            ]
            rows.sort(key=lambda r: r["id"])
            return rows

        response = self.supabase.table("messages").select("*") \
            .eq("session_id", session_id) \
            .order("created_at") \
            .order("id") \
            .execute()
        return response.data or []

    # ============================================
    # users
    # ============================================

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """사용자 정보 조회"""
        if not self.supabase:
            row = self._mock_users.get(user_id)
            return copy.deepcopy(row) if row else None

        response = self.supabase.table("users").select("*").eq("id", user_id).limit(1).execute()
        return response.data[0] if response.data else None

    async def upsert_user(self, user_id: str, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """사용자 생성 또는 업데이트"""
        now = self._now()

        if not self.supabase:
            existing = self._mock_users.get(user_id)
            if existing:
                existing.update({**user_data, "updated_at": now})
            else:
                self._mock_users[user_id] = {**user_data, "id": user_id, "created_at": now, "updated_at": now}
            return copy.deepcopy(self._mock_users[user_id])

        logger.info(f"🔄 [DB] 사용자 upsert: {user_id}, 필드: {list(user_data.keys())}")
        response = self.supabase.table("users").upsert(
            {**user_data, "id": user_id, "updated_at": now},
            on_conflict="id"
        ).execute()
        return response.data[0] if response.data else None
