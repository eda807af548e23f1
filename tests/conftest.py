"""공용 테스트 픽스처

- db: 메모리 모드 Database (Supabase 연결 없음)
- FakeLLM: bind/ainvoke만 흉내 내는 LLM 대역 (호출된 메시지 기록)
- make_notion_client: notion_client.AsyncClient 대역 (AsyncMock)
"""
import asyncio
import json
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from langchain_core.messages import AIMessage
from notion_client.errors import APIResponseError

from src.database import Database


DATABASE_ID = "1429989fe8ac4effbc8f57f56486db54"
PAGE_ID = "59833787-2cf9-4fdf-8782-e53db20768a5"


class FakeLLM:
    """정해진 응답을 순서대로 돌려주는 LLM 대역 (error가 있으면 호출 시 그대로 발생)"""

    def __init__(self, responses: List[str], error: Optional[Exception] = None, delay: float = 0):
        self.responses = list(responses)
        self.error = error
        self.delay = delay
        self.calls: List[List[Any]] = []
        self.bound_kwargs: List[Dict[str, Any]] = []

    def bind(self, **kwargs):
        self.bound_kwargs.append(kwargs)
        return self

    async def ainvoke(self, messages):
        self.calls.append(list(messages))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise AssertionError("FakeLLM 응답이 더 이상 없습니다.")
        return AIMessage(content=self.responses.pop(0))


def daily_report_payload(**overrides) -> str:
    payload = {
        "work_content": "- 로그인 플로우 구현",
        "completion_status": "로그인 플로우 완료",
        "problems": "캐싱 버그 발견",
        "tomorrow_plan": "캐싱 버그 수정",
        "business_insights": "인증 단계 단순화가 이탈률에 영향을 줄 것 같음",
        "summary": "로그인 플로우 구현 및 캐싱 버그 발견",
    }
    payload.update(overrides)
    return json.dumps(payload, ensure_ascii=False)


def weekly_report_payload(okr_progress: Optional[list] = None) -> str:
    return json.dumps({
        "summary": "로그인 기능을 마무리하고 캐싱 이슈를 정리한 한 주",
        "okr_progress": okr_progress or [],
        "achievements": ["로그인 플로우 배포", "캐싱 버그 수정"],
        "problems": "없음",
        "next_week_plan": "회원가입 개선",
    }, ensure_ascii=False)


def make_api_error(status: int = 404, code: str = "object_not_found") -> APIResponseError:
    response = httpx.Response(status, request=httpx.Request("GET", "https://api.notion.com/v1/x"))
    return APIResponseError(response, "Could not find object", code)


def make_notion_client(
    database: Optional[Dict[str, Any]] = None,
    page: Optional[Dict[str, Any]] = None,
    created_page: Optional[Dict[str, Any]] = None
) -> MagicMock:
    """database/page 중 주어진 쪽만 조회에 성공하는 클라이언트"""
    client = MagicMock()
    client.databases.retrieve = AsyncMock(
        return_value=database, side_effect=None if database else make_api_error()
    )
    client.pages.retrieve = AsyncMock(
        return_value=page, side_effect=None if page else make_api_error()
    )
    client.pages.create = AsyncMock(
        return_value=created_page or {"id": "new-page-1", "url": "https://www.notion.so/new-page-1"}
    )
    client.blocks.children.append = AsyncMock(return_value={"results": []})
    client.users.me = AsyncMock(return_value={"object": "user", "type": "bot", "id": "bot-1", "name": "업무 일지 봇"})
    return client


def database_object(title: str = "업무 일지", title_property: str = "이름") -> Dict[str, Any]:
    return {
        "object": "database",
        "id": DATABASE_ID,
        "title": [{"type": "text", "plain_text": title, "text": {"content": title}}],
        "properties": {
            "날짜": {"type": "date", "date": {}},
            title_property: {"type": "title", "title": {}},
        },
    }


def page_object(title: str = "팀 위키") -> Dict[str, Any]:
    return {
        "object": "page",
        "id": PAGE_ID,
        "url": f"https://www.notion.so/{PAGE_ID.replace('-', '')}",
        "properties": {
            "title": {"type": "title", "title": [{"plain_text": title, "text": {"content": title}}]},
        },
    }


@pytest.fixture
def db():
    return Database()


@pytest.fixture
def owner_id():
    return "user-a"


@pytest.fixture
def other_owner_id():
    return "user-b"
