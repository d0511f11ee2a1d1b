"""Track loading tools: load_tracks, load_gpx, list_tracks."""

import asyncio
import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.gpx import load_track, load_tracks as load_trail_network
from ..models import TrackColor
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def register_track_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    async def load_tracks(directory: str | None = None, colors: list[str] | None = None) -> str:
        """Load the trail network's GPX files from a directory.

        Files are expected to be named 'wabe <colour>-strecke <n>.gpx'.
        Replaces any previously loaded tracks and clears the graph.
        **Next:** build_graph, closest_point, or preview.

        Args:
            directory: Folder holding the GPX files. Default: params.track_dir.
            colors: Only load these colours (e.g. ['pink'] or ['rosa']).
                    Default: all colours.
        """
        directory = directory or state.params.track_dir
        if not directory:
            return "Error: Provide a directory or set params.track_dir."

        try:
            wanted = [TrackColor.parse(c) for c in colors] if colors else None
        except ValueError as e:
            return f"Error: {e}"

        tracks = await asyncio.to_thread(load_trail_network, directory, colors=wanted)
        if not tracks:
            return f"Error: No tracks found in {directory}."

        state.set_tracks(tracks)
        total_points = sum(len(t.points) for t in tracks)
        return f"Tracks loaded: {len(tracks)} track(s), {total_points} points."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_gpx(file_path: str, color: str, number: int = 0) -> str:
        """Add the first track of a single GPX file to the loaded tracks.

        Clears the graph, since the track set changed.

        Args:
            file_path: Absolute path to a .gpx file.
            color: Track colour name (e.g. 'pink', 'light_blue', 'hellblau').
            number: Route number within the colour (default 0).
        """
        try:
            track_color = TrackColor.parse(color)
        except ValueError as e:
            return f"Error: {e}"

        track = load_track(file_path, track_color, number)
        if track is None:
            return f"Error: No usable track in {file_path}."
        if track in state.tracks:
            return (
                f"Track already loaded: {track.name or 'unnamed'}. "
                f"{len(state.tracks)} track(s) in session."
            )

        state.set_tracks(state.tracks + [track])
        return (
            f"Track loaded: {track.name or 'unnamed'} ({track_color.name.lower()} {number}), "
            f"{len(track.points)} points. {len(state.tracks)} track(s) in session."
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_tracks() -> str:
        """List the loaded tracks with colour, number and point count."""
        try:
            require_state(state, tracks=True)
        except ValueError as e:
            return f"Error: {e}"

        return json.dumps([
            {
                "name": t.name,
                "numbers": t.numbers,
                "color": t.color.name.lower(),
                "hex": t.color.hex,
                "number": t.number,
                "points": len(t.points),
            }
            for t in state.tracks
        ], indent=2)
