"""Session state for the track-routing MCP server.

Holds the loaded tracks, the presenter that draws them, the built graph and
the display parameters for the current session.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from track_routing.core.animation import WaveScheduler
from track_routing.core.graph import Graph
from track_routing.core.presenter import DEFAULT_HIT_THRESHOLD_PX, Presenter
from track_routing.core.viewport import MapViewport, pad_bounds
from track_routing.models import Track


class RoutingParams(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    hit_threshold_px: float = Field(default=DEFAULT_HIT_THRESHOLD_PX, gt=0)
    wave_interval_s: float = Field(default=0.0001, ge=0)
    viewport_width_px: float = Field(default=1024.0, gt=0)
    edge_padding_m: float = Field(default=10.0, ge=0)
    track_dir: Optional[str] = None


class SessionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tracks: list[Track] = []
    presenter: Presenter = Field(default_factory=Presenter)
    graph: Optional[Graph] = None
    animation: Optional[WaveScheduler] = None
    params: RoutingParams = Field(default_factory=RoutingParams)
    preview_port: int = Field(default=3333, gt=0, le=65534)
    preview_running: bool = False

    def set_tracks(self, tracks: list[Track]) -> None:
        """Replace the track set and drop everything derived from it."""
        if self.animation is not None:
            self.animation.cancel()
        # Equal tracks share one presenter shape
        self.tracks = list(dict.fromkeys(tracks))
        self.presenter = Presenter()
        for track in self.tracks:
            self.presenter.add(track)
        self.graph = None
        self.animation = None

    def viewport(self) -> MapViewport:
        region = pad_bounds(self.presenter.bounding_region, self.params.edge_padding_m)
        return MapViewport(region, width_px=self.params.viewport_width_px)

    def summary(self) -> dict:
        region = self.presenter.bounding_region
        return {
            "tracks": {
                "count": len(self.tracks),
                "points": sum(len(t.points) for t in self.tracks),
                "colors": sorted({t.color.name.lower() for t in self.tracks}),
            },
            "region": {
                "north": region.north,
                "south": region.south,
                "east": region.east,
                "west": region.west,
            } if region.is_set else None,
            "graph": {
                "built": self.graph is not None,
                "vertices": len(self.graph.vertices) if self.graph else 0,
                "edges": self.graph.edge_count if self.graph else 0,
            },
            "params": self.params.model_dump(),
            "preview": {
                "running": self.preview_running,
                "port": self.preview_port,
                "animating": bool(self.animation and self.animation.running),
            },
        }


# Global session state, one per MCP server process
state = SessionState()
