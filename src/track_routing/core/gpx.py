"""GPX file parsing and trail network loading."""

import logging
from pathlib import Path
from typing import Iterable, Optional

import gpxpy
import gpxpy.gpx
from pydantic import ValidationError

from track_routing.models import Coordinate, ParsedTrack, Track, TrackColor, TrackPoint

logger = logging.getLogger(__name__)

TRACK_NAME_PREFIX = "Laufpark Stechlin - Wabe "

# (colour, number of routes); a count of 0 means a single route numbered 0.
TRAIL_DEFINITIONS: list[tuple[TrackColor, int]] = [
    (TrackColor.RED, 4),
    (TrackColor.TURQUOISE, 5),
    (TrackColor.BRIGHT_GREEN, 7),
    (TrackColor.BEIGE, 2),
    (TrackColor.GREEN, 4),
    (TrackColor.PURPLE, 3),
    (TrackColor.VIOLET, 4),
    (TrackColor.BLUE, 3),
    (TrackColor.BROWN, 4),
    (TrackColor.YELLOW, 4),
    (TrackColor.GRAY, 0),
    (TrackColor.LIGHT_BLUE, 4),
    (TrackColor.LIGHT_BROWN, 5),
    (TrackColor.ORANGE, 0),
    (TrackColor.PINK, 4),
    (TrackColor.LIGHT_PINK, 6),
]


def _strip_prefix(name: str) -> str:
    name = name.strip()
    if name.startswith(TRACK_NAME_PREFIX):
        return name[len(TRACK_NAME_PREFIX):]
    return name


def parse_gpx_file(filepath: str | Path) -> list[ParsedTrack]:
    """Parse a GPX file and return its tracks with at least one point."""
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)

    tracks = []
    for track in gpx.tracks:
        points = []
        for segment in track.segments:
            for point in segment.points:
                points.append(TrackPoint(
                    coordinate=Coordinate(latitude=point.latitude, longitude=point.longitude),
                    elevation=point.elevation if point.elevation else 0.0,
                ))
        if not points:
            logger.warning("Skipping empty track %r in %s", track.name, filepath)
            continue
        tracks.append(ParsedTrack(
            name=_strip_prefix(track.name or ""),
            points=points,
        ))
    return tracks


def track_file_name(color: TrackColor, number: int) -> str:
    return f"wabe {color.label}-strecke {number}.gpx"


def _route_numbers(count: int) -> range:
    return range(0, 1) if count == 0 else range(1, count + 1)


def load_track(filepath: str | Path, color: TrackColor, number: int = 0) -> Optional[Track]:
    """Load the first track of a GPX file as a coloured Track.

    Returns None (and logs why) when the file is missing, unreadable or has
    no usable track.
    """
    path = Path(filepath)
    if not path.exists():
        logger.warning("GPX file not found: %s", path)
        return None
    try:
        parsed = parse_gpx_file(path)
    except (gpxpy.gpx.GPXException, ValueError, ValidationError) as exc:
        logger.warning("Could not parse %s: %s", path, exc)
        return None
    if not parsed:
        logger.warning("No track points in %s", path)
        return None

    first = parsed[0]
    return Track(points=tuple(first.points), color=color, number=number, name=first.name)


def load_tracks(
    directory: str | Path,
    definitions: Iterable[tuple[TrackColor, int]] = TRAIL_DEFINITIONS,
    colors: Optional[Iterable[TrackColor]] = None,
) -> list[Track]:
    """Load every route of the trail network found in ``directory``."""
    wanted = set(colors) if colors is not None else None
    directory = Path(directory)

    tracks = []
    for color, count in definitions:
        if wanted is not None and color not in wanted:
            continue
        for number in _route_numbers(count):
            track = load_track(directory / track_file_name(color, number), color, number)
            if track is not None:
                tracks.append(track)

    logger.info("Loaded %d track(s) from %s", len(tracks), directory)
    return tracks
