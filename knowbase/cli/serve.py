"""CLI command for running the MCP tool server."""

import asyncio

from knowbase.mcp_server.server import main


def serve():
    """Serve the knowledge base tools over MCP stdio."""
    asyncio.run(main())
