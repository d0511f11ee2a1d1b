"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current session.

        Shows how many tracks are loaded, the region they cover, whether the
        graph has been built, and the preview state.
        """
        return json.dumps(state.summary(), indent=2)

    @mcp.resource("state://session")
    def session_state() -> str:
        """Current session summary as JSON."""
        return json.dumps(state.summary(), indent=2)
