"""Track shapes, bounding region and nearest-point lookup."""

import logging
from typing import Optional

import numpy as np

from ..models import Bounds, Coordinate, ScreenPoint, Track
from .distance import geographic_distances, planar_distance
from .models import ClosestMatch, TrackShape
from .viewport import MapViewport

logger = logging.getLogger(__name__)

# Half of a 44pt touch target.
DEFAULT_HIT_THRESHOLD_PX = 22.0


def _bounds_of(coordinates: tuple[Coordinate, ...]) -> Bounds:
    lats = np.array([c.latitude for c in coordinates], dtype=float)
    lons = np.array([c.longitude for c in coordinates], dtype=float)
    return Bounds(
        north=float(lats.max()),
        south=float(lats.min()),
        east=float(lons.max()),
        west=float(lons.min()),
        is_set=True,
    )


class Presenter:
    """Keeps the tracks on display and answers hit-testing queries."""

    def __init__(self):
        self._shapes: dict[Track, TrackShape] = {}
        self._next_id = 0

    def add(self, track: Track) -> TrackShape:
        """Register a track and return the polygon drawn for it.

        Adding an equal track again replaces its shape.
        """
        coordinates = track.coordinates
        if not coordinates:
            raise ValueError(f"Track {track.name!r} has no coordinates.")

        shape = TrackShape(
            shape_id=self._next_id,
            coordinates=coordinates,
            bounds=_bounds_of(coordinates),
        )
        self._next_id += 1
        self._shapes[track] = shape
        return shape

    def track_for(self, shape: TrackShape) -> Optional[Track]:
        for track, s in self._shapes.items():
            if s.shape_id == shape.shape_id:
                return track
        return None

    @property
    def tracks(self) -> list[Track]:
        return list(self._shapes)

    @property
    def shapes(self) -> list[TrackShape]:
        return list(self._shapes.values())

    @property
    def bounding_region(self) -> Bounds:
        region = Bounds()
        for shape in self._shapes.values():
            region = region.union(shape.bounds)
        return region

    def closest(self, to: Coordinate) -> Optional[ClosestMatch]:
        """Find the track point nearest to ``to`` across all tracks.

        Scans tracks in insertion order and points in track order; on ties
        the first point found wins. Returns None when no tracks are present.
        """
        best: Optional[ClosestMatch] = None
        for track, shape in self._shapes.items():
            distances = geographic_distances(shape.coordinates, to)
            i = int(np.argmin(distances))
            d = float(distances[i])
            if best is None or d < best.distance:
                best = ClosestMatch(track=track, coordinate=shape.coordinates[i], distance=d)

        if best is None:
            logger.debug("closest(%s) queried with no tracks", to)
        return best

    def hit_test(
        self,
        tap: ScreenPoint,
        viewport: MapViewport,
        threshold_px: float = DEFAULT_HIT_THRESHOLD_PX,
    ) -> Optional[ClosestMatch]:
        """Resolve a screen tap to a track point, if one is close enough on screen."""
        match = self.closest(viewport.screen_to_coordinate(tap))
        if match is None:
            return None
        on_screen = viewport.coordinate_to_screen(match.coordinate)
        if planar_distance(on_screen, tap) < threshold_px:
            return match
        return None
