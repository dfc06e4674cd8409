"""Region classification - Pure functions.

Resolves an earthquake to the country it occurred in. Countries made of
several islands are regions with several polygons; a point inside any one
of them is inside the region. An earthquake in no region is an ocean
earthquake, which is a normal outcome rather than an error.
"""

from dataclasses import dataclass
from typing import Sequence

from quakemap.core.earthquake import Event
from quakemap.core.geo import Point, Polygon
from quakemap.core.risk import RiskTally, aggregate


@dataclass(frozen=True)
class Region:
    """A named area made of one or more polygons.

    Attributes:
        name: Unique region name (e.g., country name)
        polygons: Member polygons
    """
    name: str
    polygons: tuple[Polygon, ...]

    @property
    def is_composite(self) -> bool:
        """True for regions made of more than one polygon."""
        return len(self.polygons) > 1

    def contains(self, point: Point) -> bool:
        """Check if any member polygon contains the point."""
        return any(polygon.contains(point) for polygon in self.polygons)


def find_region(point: Point, regions: Sequence[Region]) -> Region | None:
    """Return the first region containing the point.

    Pure function. Regions are tried in the given order and the first
    match wins.
    """
    for region in regions:
        if region.contains(point):
            return region
    return None


def classify(event: Event, regions: Sequence[Region]) -> str | None:
    """Classify an event against regions.

    Tags the event with the matching region's name. The tag is write-once,
    so classifying again with the same regions changes nothing.

    Args:
        event: Event to classify
        regions: Regions in priority order

    Returns:
        Name of the first containing region, or None for an ocean event
    """
    region = find_region(event.location, regions)
    if region is None:
        return None

    event.tag_region(region.name)
    return region.name


def classify_all(
    events: Sequence[Event],
    regions: Sequence[Region],
) -> tuple[Sequence[Event], RiskTally]:
    """Classify every event, then tally events per region.

    Args:
        events: Events to classify
        regions: Regions in priority order

    Returns:
        Tuple of (the tagged events, RiskTally)
    """
    for event in events:
        classify(event, regions)

    return events, aggregate(events, regions)
