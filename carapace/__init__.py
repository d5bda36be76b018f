"""MCP server for the Carapace AI knowledge base.

This package exposes the remote Carapace API as five MCP tools that an
agent host can list and call.  The host never talks HTTP itself; every
call goes through the dispatcher, which validates the arguments, makes a
single request through the client and hands back a result envelope.

Architecture::

    Agent host ──► FastMCP server (carapace.server)
                        │
                        ▼
                  ToolDispatcher  ──► validate (carapace.schemas)
                        │
                        ▼
                  CarapaceClient  ──► https://carapaceai.com/api/v1
                        │
                        ▼
                  ToolResult (success text | isError text)

Tools:
    carapace_query       – semantic search over shared insights
    carapace_contribute  – publish a new insight
    carapace_get         – fetch one insight by id
    carapace_update      – partial update of an existing insight
    carapace_delete      – remove an insight
"""

__version__ = "0.1.0"
