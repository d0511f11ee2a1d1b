"""Query tools: closest_point, hit_test."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.models import ClosestMatch
from ..models import Coordinate, ScreenPoint
from ._prereqs import require_state


def _match_to_dict(match: ClosestMatch) -> dict:
    return {
        "track": match.track.name,
        "color": match.track.color.name.lower(),
        "number": match.track.number,
        "lat": match.coordinate.latitude,
        "lon": match.coordinate.longitude,
        "distance_m": round(match.distance, 2),
    }


def register_query_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def closest_point(lat: float, lon: float) -> str:
        """Find the track point nearest to a coordinate, and the track it belongs to.

        **Requires:** load_tracks or load_gpx first.

        Args:
            lat: Query latitude (degrees).
            lon: Query longitude (degrees).
        """
        try:
            query = Coordinate(latitude=lat, longitude=lon)
        except ValidationError as e:
            return f"Error: Invalid coordinate: {e}"

        match = state.presenter.closest(query)
        if match is None:
            return "Error: Load tracks first with load_tracks or load_gpx."
        return json.dumps(_match_to_dict(match), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def hit_test(x_px: float, y_px: float) -> str:
        """Resolve a tap on the preview map to a track point.

        The tap only counts when the nearest track point lies within
        params.hit_threshold_px pixels (22 by default) of it on screen.
        **Requires:** load_tracks or load_gpx first.

        Args:
            x_px: Tap X in viewport pixels (west edge = 0).
            y_px: Tap Y in viewport pixels (north edge = 0).
        """
        try:
            require_state(state, tracks=True)
        except ValueError as e:
            return f"Error: {e}"

        viewport = state.viewport()
        match = state.presenter.hit_test(
            ScreenPoint(x=x_px, y=y_px), viewport, threshold_px=state.params.hit_threshold_px,
        )
        if match is None:
            return "No track within reach of the tap."
        return json.dumps(_match_to_dict(match), indent=2)
