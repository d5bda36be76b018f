"""Allow ``python -m carapace`` to start the MCP server."""

from carapace.server import main

main()
