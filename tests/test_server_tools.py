"""Tests for MCP server tools."""
import asyncio
import json

import pytest

from alias_search.engine import AliasSearchEngine
from alias_search.server import (
    clear_search_cache_tool,
    create_server,
    search_aliases_tool,
    set_aliases_tool,
    set_max_results_tool,
)


@pytest.fixture
def server_engine(now):
    return AliasSearchEngine(clock=lambda: now)


class TestServerTools:
    def test_server_creates(self):
        server = create_server(AliasSearchEngine())
        assert server.name == "alias-search-mcp"

    def test_all_tools_registered(self):
        from mcp.types import ListToolsRequest

        server = create_server(AliasSearchEngine())

        async def check():
            result = await server.request_handlers[ListToolsRequest](None)
            return result.root.tools

        tools = asyncio.run(check())
        tool_names = [t.name for t in tools]

        expected = [
            "search_aliases",
            "set_aliases",
            "clear_search_cache",
            "set_max_results",
        ]

        assert len(tools) == 4
        for name in expected:
            assert name in tool_names, f"Missing tool: {name}"


@pytest.mark.asyncio
class TestToolHandlers:
    async def test_search_without_aliases(self, server_engine):
        result = await search_aliases_tool(server_engine, "anything")
        assert "No aliases loaded" in result[0].text

    async def test_set_aliases_then_search(self, server_engine, sample_alias_dicts):
        loaded = await set_aliases_tool(server_engine, sample_alias_dicts)
        assert loaded[0].text == "Loaded 3 aliases"

        result = await search_aliases_tool(server_engine, "taxes")
        payload = json.loads(result[0].text)
        assert payload[0]["alias"]["name"] == "taxes"
        assert payload[0]["matched_field"] == "name"
        # exact match plus accessed five days before the frozen clock
        assert payload[0]["score"] == 1.0

    async def test_hierarchical_search(self, server_engine, sample_alias_dicts):
        await set_aliases_tool(server_engine, sample_alias_dicts)
        result = await search_aliases_tool(server_engine, "2025 taxes")
        payload = json.loads(result[0].text)
        assert payload[0]["alias"]["id"] == "2"
        assert payload[0]["matched_field"] == "hierarchical"

    async def test_empty_query_lists_everything(self, server_engine, sample_alias_dicts):
        await set_aliases_tool(server_engine, sample_alias_dicts)
        result = await search_aliases_tool(server_engine, "")
        payload = json.loads(result[0].text)
        assert [item["alias"]["id"] for item in payload] == ["1", "2", "3"]

    async def test_no_results_message(self, server_engine, sample_alias_dicts):
        await set_aliases_tool(server_engine, sample_alias_dicts)
        result = await search_aliases_tool(server_engine, "qqq")
        assert "No aliases found" in result[0].text

    async def test_invalid_alias_data(self, server_engine):
        result = await set_aliases_tool(server_engine, [{"id": "1", "name": "x"}])
        assert result[0].text.startswith("Error: invalid alias data")
        assert server_engine.aliases() == ()

    async def test_malformed_field_types_rejected(self, server_engine):
        result = await set_aliases_tool(server_engine, [
            {"id": "1", "name": "n", "path": "/p", "tags": "work", "is_favorite": "false"},
        ])
        assert result[0].text.startswith("Error: invalid alias data")
        assert server_engine.aliases() == ()

    async def test_aliases_must_be_list(self, server_engine):
        result = await set_aliases_tool(server_engine, {"id": "1"})
        assert "must be a list" in result[0].text

    async def test_set_max_results(self, server_engine, sample_alias_dicts):
        await set_aliases_tool(server_engine, sample_alias_dicts)
        result = await set_max_results_tool(server_engine, "1")
        assert result[0].text == "max_results set to 1"
        payload = json.loads((await search_aliases_tool(server_engine, "p"))[0].text)
        assert len(payload) == 1

    async def test_set_max_results_rejects_non_integer(self, server_engine):
        result = await set_max_results_tool(server_engine, "many")
        assert result[0].text.startswith("Error")
        assert server_engine.max_results() == 100

    async def test_clear_cache(self, server_engine, sample_alias_dicts):
        await set_aliases_tool(server_engine, sample_alias_dicts)
        await search_aliases_tool(server_engine, "photos")
        assert server_engine.cached_query_count() == 1

        result = await clear_search_cache_tool(server_engine)
        assert result[0].text == "Search cache cleared"
        assert server_engine.cached_query_count() == 0
