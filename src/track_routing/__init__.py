"""Loop graphs and nearest-point queries over GPX trail tracks."""

from track_routing.core.graph import Graph, build_graph
from track_routing.core.presenter import Presenter
from track_routing.models import Coordinate, Destination, Track

__all__ = ["Coordinate", "Destination", "Graph", "Presenter", "Track", "build_graph"]
