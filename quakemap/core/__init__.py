"""Functional Core - Pure functions with no I/O.

This module contains the engine's logic:
- Geometry primitives and distance
- Region classification (land vs. ocean)
- Severity model (radius, threat circle, depth buckets)
- Risk aggregation per region
- Selection engine (visibility filtering)
- Record parsing at the input boundary

Apart from the write-once region tag and the hidden flags on events and
cities, everything here is deterministic and side-effect free.
"""

from quakemap.core.earthquake import City, Event, EventKind
from quakemap.core.geo import Point, Polygon, calculate_distance, point_in_ring
from quakemap.core.region import Region, classify, classify_all
from quakemap.core.risk import RiskTally, aggregate, shade_level
from quakemap.core.severity import DepthBucket, Severity, severity, threat_circle_km
from quakemap.core.selection import IDLE, Selection, on_deselect, on_select
from quakemap.core.records import InputMalformed, ParseResult

__all__ = [
    # Entities
    "City",
    "Event",
    "EventKind",
    # Geo
    "Point",
    "Polygon",
    "calculate_distance",
    "point_in_ring",
    # Region
    "Region",
    "classify",
    "classify_all",
    # Risk
    "RiskTally",
    "aggregate",
    "shade_level",
    # Severity
    "DepthBucket",
    "Severity",
    "severity",
    "threat_circle_km",
    # Selection
    "IDLE",
    "Selection",
    "on_deselect",
    "on_select",
    # Records
    "InputMalformed",
    "ParseResult",
]
