"""Directed track graph and its breadth-first wave decomposition."""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

import numpy as np

from ..models import Coordinate, Destination, Track
from .distance import Metric, geographic_distance

logger = logging.getLogger(__name__)

Edge = tuple[Coordinate, Coordinate]
Wave = list[Edge]


class GraphFrozenError(RuntimeError):
    """Raised when adding an edge to a graph that has finished building."""


class Graph:
    """Adjacency lists keyed by coordinate.

    Edges are directed and never deduplicated: inserting the same
    (source, target) pair twice, e.g. from two tracks sharing a segment,
    leaves two destinations in the source's list.
    """

    def __init__(self, metric: Metric = geographic_distance):
        self.metric = metric
        self._edges: dict[Coordinate, list[Destination]] = {}
        self._frozen = False

    def add_edge(self, source: Coordinate, target: Coordinate) -> None:
        if self._frozen:
            raise GraphFrozenError("Graph is read-only once built.")
        dist = self.metric(source, target)
        self._edges.setdefault(source, []).append(
            Destination(coordinate=target, distance=dist)
        )

    def freeze(self) -> "Graph":
        if not self._frozen:
            self._edges = {v: tuple(ds) for v, ds in self._edges.items()}
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def edges(self) -> Mapping[Coordinate, tuple[Destination, ...]]:
        """Read-only view of vertex -> destinations."""
        if not self._frozen:
            return MappingProxyType({v: tuple(ds) for v, ds in self._edges.items()})
        return MappingProxyType(self._edges)

    @property
    def vertices(self) -> list[Coordinate]:
        """Vertices with at least one outgoing edge, in insertion order."""
        return list(self._edges)

    @property
    def edge_count(self) -> int:
        return sum(len(ds) for ds in self._edges.values())

    def destinations(self, vertex: Coordinate) -> tuple[Destination, ...]:
        return tuple(self._edges.get(vertex, ()))

    def random_vertex(self, rng: Optional[np.random.Generator] = None) -> Coordinate:
        if not self._edges:
            raise ValueError("Graph has no vertices.")
        rng = rng or np.random.default_rng()
        vertices = self.vertices
        return vertices[int(rng.integers(0, len(vertices)))]

    def iter_waves(self, start: Coordinate) -> Iterator[Wave]:
        """Yield breadth-first layers of edges reachable from ``start``.

        Each wave holds the (source, target) edges leaving the vertices of
        one BFS level. Every reachable vertex is expanded exactly once; a
        vertex can still show up as a target in several waves before it is
        expanded. The last wave yielded is always empty.
        """
        visited: set[Coordinate] = set()
        frontier = [start]
        if start not in self._edges:
            logger.debug("Wave start %s has no outgoing edges", start)

        while frontier:
            wave: Wave = []
            discovered: list[Coordinate] = []
            for source in frontier:
                visited.add(source)
                for dest in self._edges.get(source, ()):
                    wave.append((source, dest.coordinate))
                    discovered.append(dest.coordinate)
            yield wave
            # dict.fromkeys dedupes while keeping first-seen order
            frontier = [v for v in dict.fromkeys(discovered) if v not in visited]

        yield []

    def connected_waves(self, start: Coordinate) -> list[Wave]:
        return list(self.iter_waves(start))


def build_graph(tracks: Iterable[Track], metric: Metric = geographic_distance) -> Graph:
    """Connect consecutive points of every track, closing each into a loop.

    Tracks that share coordinates share vertices. The returned graph is
    frozen.
    """
    graph = Graph(metric=metric)
    n_tracks = 0
    for track in tracks:
        coords = track.coordinates
        if not coords:
            logger.warning("Skipping track %r with no coordinates", track.name)
            continue
        rotated = coords[1:] + coords[:1]
        for source, target in zip(coords, rotated):
            graph.add_edge(source, target)
        n_tracks += 1

    graph.freeze()
    logger.info(
        "Built graph from %d track(s): %d vertices, %d edges",
        n_tracks, len(graph.vertices), graph.edge_count,
    )
    return graph
