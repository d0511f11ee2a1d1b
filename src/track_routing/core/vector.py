"""2D vector arithmetic over any point type with x/y components.

Screen points and geographic coordinates both satisfy ``Vector2``; the
functions here never care which one they get, and results keep the type of
their operands. Coordinates are treated as (longitude, latitude) vectors,
which is not a euclidean space but is good enough over a small area.
"""

from typing import Protocol, TypeVar


class Vector2(Protocol):
    """Structural interface for 2D points.

    Implementations expose numeric ``x`` and ``y`` and build new instances of
    themselves with ``from_xy``.
    """

    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...

    @classmethod
    def from_xy(cls, x: float, y: float) -> "Vector2": ...


V = TypeVar("V", bound=Vector2)


class DegenerateSegmentError(ValueError):
    """Raised when projecting onto a segment whose endpoints coincide."""


def dot(a: Vector2, b: Vector2) -> float:
    return a.x * b.x + a.y * b.y


def subtract(a: V, b: V) -> V:
    return type(a).from_xy(a.x - b.x, a.y - b.y)


def add(a: V, b: V) -> V:
    return type(a).from_xy(a.x + b.x, a.y + b.y)


def scale(k: float, v: V) -> V:
    return type(v).from_xy(k * v.x, k * v.y)


def projection_parameter(p: V, segment: tuple[V, V]) -> float:
    """Return t such that s1 + t * (s2 - s1) is the projection of p.

    t is not clamped; values outside [0, 1] fall beyond the segment ends.

    Raises:
        DegenerateSegmentError: if both segment endpoints are the same point.
    """
    s1, s2 = segment
    d = subtract(s2, s1)
    length_sq = dot(d, d)
    if length_sq == 0:
        raise DegenerateSegmentError(
            f"Cannot project onto zero-length segment at ({s1.x}, {s1.y})"
        )
    return dot(d, subtract(p, s1)) / length_sq


def closest_point_on_segment(p: V, segment: tuple[V, V]) -> V:
    """Project p onto the infinite line through the segment endpoints.

    The result is unclamped: callers that need a point between the endpoints
    clamp ``projection_parameter`` to [0, 1] themselves.

    Args:
        p: Point to project.
        segment: (s1, s2) pair defining the line.

    Returns:
        The projected point, same type as the inputs.

    Raises:
        DegenerateSegmentError: if s1 == s2.
    """
    s1, s2 = segment
    t = projection_parameter(p, segment)
    return add(s1, scale(t, subtract(s2, s1)))
