"""MCP server for track-routing.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.tracks import register_track_tools
from .tools.graph import register_graph_tools
from .tools.query import register_query_tools
from .tools.preview import register_preview_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "track-routing",
    instructions="Build a loop graph from GPX trail tracks, animate it, and find the track nearest to a point",
)

# Register all tool groups
register_track_tools(mcp)
register_graph_tools(mcp)
register_query_tools(mcp)
register_preview_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
