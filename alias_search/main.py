"""Main entry point for the alias search MCP server."""
import asyncio

from alias_search.server import main as serve


def main():
    asyncio.run(serve())


if __name__ == "__main__":
    main()
