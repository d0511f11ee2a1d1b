"""Graph tools: build_graph, graph_waves."""

import asyncio
import json

import numpy as np
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.graph import build_graph as build_track_graph
from ..models import Coordinate
from ._prereqs import require_state


def register_graph_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def build_graph() -> str:
        """Build the directed graph linking consecutive points of every track.

        Each track is closed into a loop (last point links back to the first).
        **Requires:** load_tracks or load_gpx first.
        **Next:** graph_waves or preview.
        """
        try:
            require_state(state, tracks=True)
        except ValueError as e:
            return f"Error: {e}"

        tracks = list(state.tracks)
        graph = await asyncio.to_thread(build_track_graph, tracks)
        if state.tracks != tracks:
            return "Error: Tracks changed while the graph was building. Run build_graph again."
        state.graph = graph

        return f"Graph built: {len(graph.vertices)} vertices, {graph.edge_count} edges."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def graph_waves(
        lat: float | None = None,
        lon: float | None = None,
        seed: int | None = None,
    ) -> str:
        """Summarise the breadth-first waves of edges reachable from a start point.

        **Requires:** build_graph first.

        Args:
            lat/lon: Start vertex. Must be a track point. Default: a random vertex.
            seed: Seed for picking the random start vertex.
        """
        try:
            require_state(state, graph=True)
        except ValueError as e:
            return f"Error: {e}"

        graph = state.graph
        if lat is not None and lon is not None:
            try:
                start = Coordinate(latitude=lat, longitude=lon)
            except ValidationError as e:
                return f"Error: Invalid start coordinate: {e}"
            if start not in graph.edges:
                return f"Error: ({lat}, {lon}) is not a graph vertex."
        else:
            try:
                start = graph.random_vertex(np.random.default_rng(seed))
            except ValueError as e:
                return f"Error: {e}"

        waves = graph.connected_waves(start)
        sources = {source for wave in waves for source, _ in wave}
        return json.dumps({
            "start": {"lat": start.latitude, "lon": start.longitude},
            "waves": len(waves),
            "edges_per_wave": [len(w) for w in waves],
            "vertices_reached": len(sources),
        }, indent=2)
