"""Geographic primitives - Pure functions.

This module provides points, polygon rings, the ring containment test and
the distance calculation used for every threat-circle comparison.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Point:
    """Immutable geographic point.

    Attributes:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
    """
    latitude: float
    longitude: float

    def distance_to(self, other: "Point") -> float:
        """Great-circle distance to another point in kilometers."""
        return calculate_distance(
            self.latitude,
            self.longitude,
            other.latitude,
            other.longitude,
        )


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


def bounding_box(points: Iterable[Point]) -> BoundingBox | None:
    """Smallest box enclosing all points.

    Pure function.

    Returns:
        BoundingBox, or None when there are no points
    """
    points = list(points)
    if not points:
        return None

    latitudes = [p.latitude for p in points]
    longitudes = [p.longitude for p in points]
    return BoundingBox(
        min_latitude=min(latitudes),
        max_latitude=max(latitudes),
        min_longitude=min(longitudes),
        max_longitude=max(longitudes),
    )


def close_ring(points: Sequence[Point]) -> tuple[Point, ...]:
    """Normalize a ring so the closing vertex is implicit.

    A ring given with its first vertex repeated at the end is the same ring
    as one without; the duplicate is dropped.
    """
    ring = tuple(points)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    return ring


@dataclass(frozen=True)
class Polygon:
    """A closed polygon ring.

    Attributes:
        points: Ring vertices, closing vertex implicit
        bounds: Bounding box of the ring, None for an empty ring
    """
    points: tuple[Point, ...]
    bounds: BoundingBox | None = field(default=None, compare=False)

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "Polygon":
        """Build a polygon, normalizing the ring and computing its bounds."""
        ring = close_ring(points)
        return cls(points=ring, bounds=bounding_box(ring))

    @property
    def is_degenerate(self) -> bool:
        """True when the ring has fewer than three distinct vertices."""
        return len(set(self.points)) < 3

    def contains(self, point: Point) -> bool:
        """Check whether the point falls inside this polygon."""
        if self.bounds is not None and not self.bounds.contains(
            point.latitude, point.longitude
        ):
            return False
        return point_in_ring(point, self.points)


def point_in_ring(point: Point, ring: Sequence[Point]) -> bool:
    """Even-odd ray casting test.

    Pure function.

    The ray runs from the point towards increasing longitude. An edge is
    crossed when exactly one of its endpoints lies strictly north of the
    point and the crossing longitude is strictly east of it. Points on an
    edge or vertex get whatever this parity rule gives, which is stable
    for repeated calls.

    Args:
        point: Point to test
        ring: Ring vertices; a repeated closing vertex is allowed

    Returns:
        True if the point is inside the ring
    """
    vertices = close_ring(ring)
    if len(set(vertices)) < 3:
        return False

    lat, lon = point.latitude, point.longitude
    inside = False
    n = len(vertices)

    for i in range(n):
        a = vertices[i]
        b = vertices[i - 1]

        if (a.latitude > lat) != (b.latitude > lat):
            crossing_lon = (
                (b.longitude - a.longitude)
                * (lat - a.latitude)
                / (b.latitude - a.latitude)
                + a.longitude
            )
            if lon < crossing_lon:
                inside = not inside

    return inside


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def is_within_radius(point: Point, center: Point, radius_km: float) -> bool:
    """Check if a point is within a radius of a center point.

    Pure function. The boundary counts as inside.
    """
    return center.distance_to(point) <= radius_km
