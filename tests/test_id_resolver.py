"""Notion ID 정규화 / 대상 판별 테스트"""
import httpx
import pytest

from src.service.notion.id_resolver import (
    UNKNOWN_TARGET_MESSAGE,
    normalize_notion_id,
    resolve_notion_target,
)

from conftest import DATABASE_ID, PAGE_ID, database_object, make_notion_client, page_object

CANONICAL_DATABASE_ID = "1429989f-e8ac-4eff-bc8f-57f56486db54"


def test_url_and_bare_id_normalize_identically():
    url = f"https://www.notion.so/myteam/Daily-Log-{DATABASE_ID}?v=7f3a4c1b2d9e4f5a8b6c0d1e2f3a4b5c"
    assert normalize_notion_id(url) == CANONICAL_DATABASE_ID
    assert normalize_notion_id(DATABASE_ID) == CANONICAL_DATABASE_ID


def test_hyphenated_and_padded_id():
    assert normalize_notion_id(f"  {CANONICAL_DATABASE_ID}\n") == CANONICAL_DATABASE_ID
    assert normalize_notion_id(DATABASE_ID.upper()) == CANONICAL_DATABASE_ID


def test_public_site_url():
    url = f"https://myteam.notion.site/{PAGE_ID.replace('-', '')}"
    assert normalize_notion_id(url) == PAGE_ID


def test_url_takes_first_32_hex_characters_of_longer_run():
    url = f"https://www.notion.so/{DATABASE_ID}abcdef12"
    assert normalize_notion_id(url) == CANONICAL_DATABASE_ID

    url = f"https://www.notion.so/{'a' * 8}{DATABASE_ID}"
    assert normalize_notion_id(url) == "aaaaaaaa-1429-989f-e8ac-4effbc8f57f5"


def test_malformed_id_is_returned_without_raising():
    assert normalize_notion_id("not-an-id") == "notanid"
    assert normalize_notion_id("") == ""


async def test_database_lookup_wins_first():
    client = make_notion_client(database=database_object(title="업무 일지", title_property="이름"))

    target = await resolve_notion_target(client, DATABASE_ID)

    assert target.target_type == "database"
    assert target.id == CANONICAL_DATABASE_ID
    assert target.title == "업무 일지"
    assert target.title_property == "이름"
    client.pages.retrieve.assert_not_called()


async def test_database_without_title_property_falls_back_to_name():
    database = database_object()
    database["properties"] = {}
    client = make_notion_client(database=database)

    target = await resolve_notion_target(client, DATABASE_ID)

    assert target.title_property == "Name"


async def test_page_lookup_after_database_miss():
    client = make_notion_client(page=page_object(title="팀 위키"))

    target = await resolve_notion_target(client, PAGE_ID)

    assert target.target_type == "page"
    assert target.title == "팀 위키"
    client.databases.retrieve.assert_awaited_once()


async def test_unknown_when_both_lookups_fail():
    client = make_notion_client()

    target = await resolve_notion_target(client, DATABASE_ID)

    assert target.target_type == "unknown"
    assert target.error == UNKNOWN_TARGET_MESSAGE
    assert not target.is_known


async def test_transport_error_propagates():
    client = make_notion_client()
    client.databases.retrieve.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(httpx.ConnectError):
        await resolve_notion_target(client, DATABASE_ID)


async def test_resolver_never_writes():
    client = make_notion_client(page=page_object())

    await resolve_notion_target(client, PAGE_ID)

    client.pages.create.assert_not_called()
    client.blocks.children.append.assert_not_called()
