"""Pydantic domain models for coordinates, tracks and graph edges."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Coordinate(BaseModel):
    """A latitude/longitude pair, usable as a graph vertex and dict key.

    Also a 2D vector with x = longitude and y = latitude, so the geometry
    kernel in ``core.vector`` works on it directly.
    """
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @property
    def x(self) -> float:
        return self.longitude

    @property
    def y(self) -> float:
        return self.latitude

    @classmethod
    def from_xy(cls, x: float, y: float) -> "Coordinate":
        # Vector results (differences, scaled offsets) can leave the lat/lon range.
        return cls.model_construct(latitude=y, longitude=x)


class ScreenPoint(BaseModel):
    """A point in screen space (pixels, y pointing down)."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @classmethod
    def from_xy(cls, x: float, y: float) -> "ScreenPoint":
        return cls(x=x, y=y)


class TrackPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    elevation: float = 0.0


class TrackColor(Enum):
    RED = "rot"
    TURQUOISE = "tuerkis"
    BRIGHT_GREEN = "hellgruen"
    VIOLET = "violett"
    PURPLE = "lila"
    GREEN = "gruen"
    BEIGE = "beige"
    BLUE = "blau"
    BROWN = "braun"
    YELLOW = "gelb"
    GRAY = "grau"
    LIGHT_BLUE = "hellblau"
    LIGHT_BROWN = "hellbraun"
    ORANGE = "orange"
    PINK = "pink"
    LIGHT_PINK = "rosa"

    @property
    def label(self) -> str:
        """Name used in the trail network's GPX file names."""
        return self.value

    @property
    def hex(self) -> str:
        return _COLOR_HEX[self]

    @property
    def text_hex(self) -> str:
        if self in (TrackColor.YELLOW, TrackColor.GRAY, TrackColor.BEIGE):
            return "#000000"
        return "#FFFFFF"

    @classmethod
    def parse(cls, name: str) -> "TrackColor":
        """Look up a colour by enum name ('light_blue') or file label ('hellblau')."""
        key = name.strip()
        for color in cls:
            if key.upper() == color.name or key.lower() == color.value:
                return color
        raise ValueError(f"Unknown track color '{name}'")


_COLOR_HEX = {
    TrackColor.RED: "#FF0000",
    TrackColor.TURQUOISE: "#009F9F",
    TrackColor.BRIGHT_GREEN: "#68C30C",
    TrackColor.VIOLET: "#AEA5D5",
    TrackColor.PURPLE: "#871B8A",
    TrackColor.GREEN: "#008446",
    TrackColor.BEIGE: "#E3B197",
    TrackColor.BLUE: "#005CB5",
    TrackColor.BROWN: "#7E3237",
    TrackColor.YELLOW: "#FFF400",
    TrackColor.GRAY: "#AEA5D5",
    TrackColor.LIGHT_BLUE: "#00A6C6",
    TrackColor.LIGHT_BROWN: "#BE875A",
    TrackColor.ORANGE: "#FF7A24",
    TrackColor.PINK: "#FF005E",
    TrackColor.LIGHT_PINK: "#FF7AB7",
}


class Track(BaseModel):
    """An immutable, closed track: the last point connects back to the first."""
    model_config = ConfigDict(frozen=True)

    points: tuple[TrackPoint, ...] = Field(min_length=1)
    color: TrackColor
    number: int = Field(default=0, ge=0)
    name: str = ""

    @field_validator("points", mode="before")
    @classmethod
    def accept_bare_coordinates(cls, v):
        if isinstance(v, (list, tuple)):
            return tuple(
                TrackPoint(coordinate=p) if isinstance(p, Coordinate) else p
                for p in v
            )
        return v

    @property
    def coordinates(self) -> tuple[Coordinate, ...]:
        return tuple(p.coordinate for p in self.points)

    @property
    def numbers(self) -> str:
        """Short route label from the last word of the name: '3/4/5' -> '3-5'."""
        components = self.name.split()
        if not components:
            return ""
        numbers = components[-1].split("/")
        if len(numbers) == 1:
            return numbers[0]
        return f"{numbers[0]}-{numbers[-1]}"


class Destination(BaseModel):
    """Target vertex of a directed edge plus the precomputed edge distance."""
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    distance: float = Field(ge=0)


class Bounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    north: float = Field(default=0.0, ge=-90, le=90)
    south: float = Field(default=0.0, ge=-90, le=90)
    east: float = Field(default=0.0, ge=-180, le=180)
    west: float = Field(default=0.0, ge=-180, le=180)
    is_set: bool = False

    @model_validator(mode="after")
    def check_north_ge_south(self) -> "Bounds":
        if self.is_set and self.north < self.south:
            raise ValueError(f"north ({self.north}) must not be less than south ({self.south})")
        return self

    @model_validator(mode="after")
    def check_east_ge_west(self) -> "Bounds":
        if self.is_set and self.east < self.west:
            raise ValueError(f"east ({self.east}) must not be less than west ({self.west})")
        return self

    @property
    def lat_range(self) -> float:
        return self.north - self.south

    @property
    def lon_range(self) -> float:
        return self.east - self.west

    @property
    def center_lat(self) -> float:
        return (self.north + self.south) / 2

    @property
    def center_lon(self) -> float:
        return (self.east + self.west) / 2

    def union(self, other: "Bounds") -> "Bounds":
        """Smallest region covering both; an unset region is the identity."""
        if not self.is_set:
            return other
        if not other.is_set:
            return self
        return Bounds(
            north=max(self.north, other.north),
            south=min(self.south, other.south),
            east=max(self.east, other.east),
            west=min(self.west, other.west),
            is_set=True,
        )

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.is_set
            and self.south <= coordinate.latitude <= self.north
            and self.west <= coordinate.longitude <= self.east
        )


class ParsedTrack(BaseModel):
    """One <trk> element read from a GPX file, before it gets a colour."""
    name: str
    points: list[TrackPoint] = Field(min_length=1)
