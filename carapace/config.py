"""Configuration constants for the Carapace MCP server.

All values are overridable via environment variables so that the same
install can point at a staging API or serve over HTTP without code
changes.  The API key is deliberately absent: it is read once by
:func:`carapace.server.main` and handed to the client, never stored at
module level.
"""

import os


# ---------------------------------------------------------------------------
# Server identity
# ---------------------------------------------------------------------------

SERVER_NAME: str = "carapace"

#: Environment variable holding the bearer token for the Carapace API.
API_KEY_ENV: str = "CARAPACE_API_KEY"

#: Where users are sent when the key is missing.
API_KEY_URL: str = "https://carapaceai.com"

# ---------------------------------------------------------------------------
# Remote API
# ---------------------------------------------------------------------------

#: Base endpoint every request path is appended to.
BASE_URL: str = os.getenv("CARAPACE_BASE_URL", "https://carapaceai.com/api/v1")

#: Per-request timeout in seconds, applied by httpx to each exchange.
REQUEST_TIMEOUT: float = float(os.getenv("CARAPACE_TIMEOUT", "30"))

# ---------------------------------------------------------------------------
# Logging and transport
# ---------------------------------------------------------------------------

LOG_LEVEL: str = os.getenv("CARAPACE_LOG_LEVEL", "INFO").upper()

#: ``stdio`` for desktop hosts; ``streamable-http`` or ``sse`` to listen
#: on MCP_HOST:MCP_PORT instead.
MCP_TRANSPORT: str = os.getenv("CARAPACE_MCP_TRANSPORT", "stdio")
MCP_HOST: str = os.getenv("CARAPACE_MCP_HOST", "127.0.0.1")
MCP_PORT: int = int(os.getenv("CARAPACE_MCP_PORT", "8000"))
