"""Geographic to screen coordinate transforms."""

import math

from ..models import Bounds, Coordinate, ScreenPoint


class MapViewport:
    """Transforms coordinates (lat/lon) to screen pixels and back.

    Screen coordinate system:
    - X: east-west (longitude), west edge at X=0
    - Y: north-south (latitude), north edge at Y=0, growing downwards
    """

    def __init__(self, bounds: Bounds, width_px: float = 1024.0):
        if not bounds.is_set:
            raise ValueError("Viewport needs a bounding region; add tracks first.")
        self.bounds = bounds

        self.lon_scale = math.cos(math.radians(bounds.center_lat))

        lat_range = bounds.lat_range
        lon_range = bounds.lon_range * self.lon_scale

        # Scale factor: map the larger dimension to width_px
        max_span = max(lat_range, lon_range)
        self.scale_factor = width_px / max_span if max_span > 0 else 1.0

        self.width_px = lon_range * self.scale_factor
        self.height_px = lat_range * self.scale_factor

    def coordinate_to_screen(self, coordinate: Coordinate) -> ScreenPoint:
        x = (coordinate.longitude - self.bounds.west) * self.lon_scale * self.scale_factor
        y = (self.bounds.north - coordinate.latitude) * self.scale_factor
        return ScreenPoint(x=x, y=y)

    def screen_to_coordinate(self, point: ScreenPoint) -> Coordinate:
        lon = self.bounds.west + point.x / (self.lon_scale * self.scale_factor)
        lat = self.bounds.north - point.y / self.scale_factor
        return Coordinate(
            latitude=max(-90.0, min(90.0, lat)),
            longitude=max(-180.0, min(180.0, lon)),
        )


def pad_bounds(bounds: Bounds, padding_m: float) -> Bounds:
    """Add padding in meters around a bounding box."""
    if not bounds.is_set:
        return bounds
    # 1 degree latitude ~ 111,000 meters
    lat_padding = padding_m / 111_000.0
    # 1 degree longitude varies with latitude
    lon_padding = padding_m / (111_000.0 * math.cos(math.radians(bounds.center_lat)))

    return Bounds(
        north=min(90.0, bounds.north + lat_padding),
        south=max(-90.0, bounds.south - lat_padding),
        east=min(180.0, bounds.east + lon_padding),
        west=max(-180.0, bounds.west - lon_padding),
        is_set=True,
    )
