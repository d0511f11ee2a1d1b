"""Preview tool: launch the map viewer and replay the graph animation."""

import webbrowser
from mcp.server.fastmcp import FastMCP

from ..state import state
from ..preview.server import start_preview_server, update_preview


def register_preview_tools(mcp: FastMCP):

    @mcp.tool()
    async def preview() -> str:
        """Open or refresh the map preview in the browser.

        Draws every loaded track as a coloured polygon. If the graph has been
        built, animates it wave by wave from a random start vertex.
        Starts a local HTTP server with WebSocket updates on localhost:3333.
        """
        from ._prereqs import require_state
        try:
            require_state(state, tracks=True)
        except ValueError as e:
            return f"Error: {e}"

        if not state.preview_running:
            await start_preview_server(
                state, http_port=state.preview_port, ws_port=state.preview_port + 1,
            )
            state.preview_running = True
            webbrowser.open(f"http://localhost:{state.preview_port}")
            return f"Preview opened at http://localhost:{state.preview_port}"
        else:
            await update_preview(state)
            return f"Preview updated at http://localhost:{state.preview_port}"
