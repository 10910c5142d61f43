"""MCP server exposing alias search over stdio."""
import json
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from alias_search.config import get_config
from alias_search.engine import AliasSearchEngine
from alias_search.models import records_from_dicts


SERVER_NAME = "alias-search-mcp"


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


async def search_aliases_tool(engine: AliasSearchEngine, query: str) -> list[TextContent]:
    """Tool handler for search_aliases.

    Args:
        engine: Engine to query
        query: Search query string (empty lists every alias)

    Returns:
        List of TextContent with JSON-encoded results
    """
    if not engine.aliases():
        return _text("No aliases loaded. Call set_aliases first.")

    results = engine.search(query)

    if not results:
        return _text(f"No aliases found matching query: {query}")

    return _text(json.dumps([result.to_dict() for result in results], indent=2))


async def set_aliases_tool(engine: AliasSearchEngine, aliases: Any) -> list[TextContent]:
    """Tool handler for set_aliases.

    Args:
        engine: Engine whose snapshot is replaced
        aliases: List of alias dictionaries

    Returns:
        List of TextContent describing the outcome
    """
    if not isinstance(aliases, list):
        return _text("Error: 'aliases' must be a list of alias objects")

    try:
        records = records_from_dicts(aliases)
    except (ValueError, TypeError, AttributeError) as e:
        print(f"Rejected alias snapshot: {e}", file=sys.stderr)
        return _text(f"Error: invalid alias data: {e}")

    engine.set_aliases(records)
    return _text(f"Loaded {len(records)} aliases")


async def clear_search_cache_tool(engine: AliasSearchEngine) -> list[TextContent]:
    engine.clear_cache()
    return _text("Search cache cleared")


async def set_max_results_tool(engine: AliasSearchEngine, max_results: Any) -> list[TextContent]:
    """Tool handler for set_max_results."""
    try:
        value = int(max_results)
    except (TypeError, ValueError):
        return _text("Error: 'max_results' must be an integer")

    engine.set_max_results(value)
    return _text(f"max_results set to {engine.max_results()}")


def create_server(engine: Optional[AliasSearchEngine] = None) -> Server:
    """Create and configure the MCP server.

    Args:
        engine: Engine instance to serve. Defaults to one built from config.

    Returns:
        Configured Server instance
    """
    if engine is None:
        engine = AliasSearchEngine.from_config(get_config())

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name="search_aliases",
                description="Search aliases by name, path, tag or path hierarchy. Returns ranked aliases with score and the field that matched.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Search query; separate keywords with spaces to match path folders in order"
                        }
                    },
                    "required": ["query"]
                }
            ),
            Tool(
                name="set_aliases",
                description="Replace the full set of aliases being searched.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "aliases": {
                            "type": "array",
                            "description": "Alias objects with id, name, path and optional tags, is_favorite, last_accessed, color",
                            "items": {"type": "object"}
                        }
                    },
                    "required": ["aliases"]
                }
            ),
            Tool(
                name="clear_search_cache",
                description="Drop cached search results, e.g. after changing favorites or access times.",
                inputSchema={"type": "object", "properties": {}}
            ),
            Tool(
                name="set_max_results",
                description="Set the maximum number of results returned per search.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "max_results": {
                            "type": "integer",
                            "description": "Maximum number of results"
                        }
                    },
                    "required": ["max_results"]
                }
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """Handle tool calls."""
        arguments = arguments or {}
        if name == "search_aliases":
            return await search_aliases_tool(engine, arguments.get("query", ""))
        elif name == "set_aliases":
            return await set_aliases_tool(engine, arguments.get("aliases"))
        elif name == "clear_search_cache":
            return await clear_search_cache_tool(engine)
        elif name == "set_max_results":
            return await set_max_results_tool(engine, arguments.get("max_results"))
        else:
            raise ValueError(f"Unknown tool: {name}")

    return server


async def main():
    """Main entry point for the MCP server."""
    server = create_server()

    async with stdio_server() as (read_stream, write_stream):
        initialization_options = server.create_initialization_options()
        await server.run(read_stream, write_stream, initialization_options)
