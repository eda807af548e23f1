"""Notion 쓰기 실행 테스트"""
import httpx
from notion_client.errors import RequestTimeoutError

from src.service.notion.block_builder import paragraph_block
from src.service.notion.id_resolver import NotionTarget
from src.service.notion.sync_executor import execute_sync, sync_to_notion

from conftest import DATABASE_ID, PAGE_ID, database_object, make_api_error, make_notion_client, page_object

BLOCKS = [paragraph_block("본문")]


async def test_database_target_creates_child_page():
    client = make_notion_client(created_page={"id": "child-1", "url": "https://www.notion.so/child-1"})
    target = NotionTarget(target_type="database", id=DATABASE_ID, title_property="이름")

    result = await execute_sync(client, target, "업무 일지 - 2025-01-08", BLOCKS)

    assert result.success
    assert result.page_id == "child-1"
    assert result.page_url == "https://www.notion.so/child-1"
    client.pages.create.assert_awaited_once_with(
        parent={"database_id": DATABASE_ID},
        properties={"이름": {"title": [{"text": {"content": "업무 일지 - 2025-01-08"}}]}},
        children=BLOCKS,
    )
    client.blocks.children.append.assert_not_called()


async def test_page_target_appends_then_fetches_url():
    client = make_notion_client(page=page_object())
    target = NotionTarget(target_type="page", id=PAGE_ID)

    result = await execute_sync(client, target, "무시되는 제목", BLOCKS)

    assert result.success
    assert result.page_id == PAGE_ID
    assert result.page_url == page_object()["url"]
    client.blocks.children.append.assert_awaited_once_with(block_id=PAGE_ID, children=BLOCKS)
    client.pages.create.assert_not_called()


async def test_unknown_target_short_circuits():
    client = make_notion_client()
    target = NotionTarget(target_type="unknown", id="x", error="판별 실패")

    result = await execute_sync(client, target, "제목", BLOCKS)

    assert not result.success
    assert result.error == "판별 실패"
    client.pages.create.assert_not_called()
    client.blocks.children.append.assert_not_called()


async def test_remote_error_becomes_failure_result():
    client = make_notion_client()
    client.pages.create.side_effect = make_api_error(400, "validation_error")
    target = NotionTarget(target_type="database", id=DATABASE_ID, title_property="Name")

    result = await execute_sync(client, target, "제목", BLOCKS)

    assert not result.success
    assert result.error
    assert client.pages.create.await_count == 1


async def test_timeout_becomes_failure_result():
    client = make_notion_client()
    client.blocks.children.append.side_effect = RequestTimeoutError()
    target = NotionTarget(target_type="page", id=PAGE_ID)

    result = await execute_sync(client, target, "제목", BLOCKS)

    assert not result.success
    assert client.blocks.children.append.await_count == 1


async def test_sync_to_notion_converts_transport_error_during_resolve():
    client = make_notion_client()
    client.databases.retrieve.side_effect = httpx.ConnectError("connection refused")

    result = await sync_to_notion(client, DATABASE_ID, "제목", BLOCKS)

    assert not result.success
    assert "connection refused" in result.error
    client.pages.create.assert_not_called()


async def test_sync_to_notion_with_url_input():
    client = make_notion_client(database=database_object())

    result = await sync_to_notion(client, f"https://www.notion.so/ws/{DATABASE_ID}?v=1", "제목", BLOCKS)

    assert result.success
    client.pages.create.assert_awaited_once()
