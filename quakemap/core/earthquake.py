"""Earthquake and city entities.

Events and cities are the point entities the engine classifies and filters.
Their location, magnitude and depth never change; only the write-once
region tag and the hidden flag are mutable.
"""

from dataclasses import dataclass
from enum import Enum

from quakemap.core.geo import Point
from quakemap.core.severity import (
    DepthBucket,
    depth_bucket,
    radius,
    threat_circle_km,
)


class EventKind(str, Enum):
    """Classification outcome of an event."""
    LAND = "land"
    OCEAN = "ocean"


@dataclass(eq=False)
class Event:
    """An earthquake.

    Compared by identity: two events at the same place with the same
    magnitude are still different events.

    Attributes:
        location: Epicenter
        magnitude: Earthquake magnitude
        depth_km: Depth in kilometers (may be negative)
        title: Opaque title from the feed
        region: Name of the enclosing region, None until tagged or if oceanic
        hidden: Visibility flag driven by the selection engine
    """
    location: Point
    magnitude: float
    depth_km: float
    title: str = ""
    region: str | None = None
    hidden: bool = False

    @property
    def kind(self) -> EventKind:
        """LAND when the event has been tagged with a region."""
        return EventKind.LAND if self.region is not None else EventKind.OCEAN

    @property
    def radius(self) -> float:
        return radius(self.magnitude)

    @property
    def threat_circle_km(self) -> float:
        return threat_circle_km(self.magnitude)

    @property
    def depth_bucket(self) -> DepthBucket:
        return depth_bucket(self.depth_km)

    def tag_region(self, name: str) -> str:
        """Set the region tag if it is not set yet.

        A tag, once set, is never overwritten. A conflicting name is
        ignored; callers can compare the returned tag to detect it.

        Args:
            name: Region name to tag with

        Returns:
            The event's tag after the call
        """
        if self.region is None:
            self.region = name
        return self.region


@dataclass(eq=False)
class City:
    """A city that may be threatened by earthquakes.

    Attributes:
        location: City location
        name: City name
        population: Population in millions (optional)
        hidden: Visibility flag driven by the selection engine
    """
    location: Point
    name: str
    population: float | None = None
    hidden: bool = False
