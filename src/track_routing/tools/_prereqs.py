"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, tracks: bool = False, graph: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, tracks=True, graph=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if tracks and not state.tracks:
        raise ValueError(
            "Load tracks first with load_tracks or load_gpx."
        )
    if graph and state.graph is None:
        raise ValueError(
            "Build the graph first with build_graph."
        )
