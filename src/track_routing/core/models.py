"""Pydantic return models for core query functions."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from track_routing.models import Bounds, Coordinate, Track


class TrackShape(BaseModel):
    """Closed polygon handle returned when a track is added to a presenter."""
    model_config = ConfigDict(frozen=True)

    shape_id: int = Field(ge=0)
    coordinates: tuple[Coordinate, ...] = Field(min_length=1)
    bounds: Bounds

    @model_validator(mode="after")
    def bounds_must_cover_coordinates(self) -> "TrackShape":
        for i, c in enumerate(self.coordinates):
            if not self.bounds.contains(c):
                raise ValueError(f"Coordinate {i} lies outside the shape bounds")
        return self


class ClosestMatch(BaseModel):
    """Return type for nearest-point queries."""
    model_config = ConfigDict(frozen=True)

    track: Track
    coordinate: Coordinate
    distance: float = Field(ge=0)
