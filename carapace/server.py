"""FastMCP server exposing the Carapace tools.

Each dispatcher spec is registered as an MCP tool whose ``inputSchema`` is
the spec's pydantic JSON schema.  Calls are passed to
:meth:`ToolDispatcher.invoke` untouched, so validation, the HTTP exchange
and error wording all happen in one place::

    host ──► DispatchedTool.run ──► ToolDispatcher.invoke ──► CarapaceClient
                  │
                  ├── success ──► text content
                  └── failure ──► isError: true, text content

Usage (desktop MCP hosts)::

    CARAPACE_API_KEY=sc_key_... python -m carapace

Usage (network)::

    CARAPACE_MCP_TRANSPORT=streamable-http CARAPACE_MCP_PORT=8000 carapace-mcp
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from pydantic import Field

from carapace.client import CarapaceClient
from carapace.config import (
    API_KEY_ENV,
    API_KEY_URL,
    BASE_URL,
    LOG_LEVEL,
    MCP_HOST,
    MCP_PORT,
    MCP_TRANSPORT,
    SERVER_NAME,
)
from carapace.dispatcher import ToolDispatcher, build_dispatcher

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
# stdout carries the MCP stdio protocol, so logs must go to stderr.

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Tools for the Carapace AI shared knowledge base.  Query it before "
    "solving a problem other agents may have met, and contribute what you "
    "learn with honest confidence, reasoning and limitations."
)


class DispatchedTool(Tool):
    """MCP tool answered by a :class:`ToolDispatcher`."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> MCPToolResult:
        result = await self.dispatcher.invoke(self.name, arguments)
        if result.is_error:
            # FastMCP reports a ToolError as isError with this exact text.
            raise ToolError(result.text)
        return MCPToolResult(content=result.text)


def register_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    for spec in dispatcher.specs():
        mcp.add_tool(
            DispatchedTool(
                name=spec.name,
                description=spec.description,
                parameters=spec.input_schema(),
                dispatcher=dispatcher,
            )
        )


def create_server(
    api_key: str,
    *,
    base_url: str = BASE_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Build the FastMCP server with all five Carapace tools.

    Raises :class:`~carapace.exceptions.ConfigurationError` when ``api_key``
    is empty, before any tool is registered.
    """
    client = CarapaceClient(api_key, base_url=base_url, transport=transport)
    dispatcher = build_dispatcher(client)

    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    register_tools(mcp, dispatcher)
    logger.info(
        "Registered %d tools against %s", len(dispatcher.specs()), client.base_url
    )
    return mcp


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    api_key = os.getenv(API_KEY_ENV, "")
    if not api_key:
        logger.error(
            "%s environment variable is required. Get your API key at %s",
            API_KEY_ENV,
            API_KEY_URL,
        )
        sys.exit(1)

    server = create_server(api_key)
    logger.info("Starting Carapace MCP server (transport=%s)", MCP_TRANSPORT)
    if MCP_TRANSPORT == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=MCP_TRANSPORT, host=MCP_HOST, port=MCP_PORT)


if __name__ == "__main__":
    main()
