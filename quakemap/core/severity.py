"""Severity model - Pure functions.

Derives marker size, threat circle and depth/magnitude categories from an
earthquake's magnitude and depth. No validation is done here; malformed
values are rejected when records are parsed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quakemap.core.earthquake import Event


# Threat circle at magnitude 5, in miles
BASE_THREAT_MILES = 20.0
THREAT_GROWTH = 1.8
MILES_TO_KM = 1.6

# Depth thresholds in km
THRESHOLD_INTERMEDIATE = 70.0
THRESHOLD_DEEP = 300.0

# Magnitude thresholds
THRESHOLD_LIGHT = 4.0
THRESHOLD_MODERATE = 5.0


class DepthBucket(str, Enum):
    """Depth category used for marker colouring."""
    SHALLOW = "shallow"
    INTERMEDIATE = "intermediate"
    DEEP = "deep"


class MagnitudeClass(str, Enum):
    """Magnitude category."""
    MINOR = "minor"
    LIGHT = "light"
    MODERATE = "moderate"


@dataclass(frozen=True)
class Severity:
    """Derived severity values for one earthquake.

    Attributes:
        radius: Display radius (marker sizing only)
        threat_circle_km: Distance within which cities are at risk
        depth_bucket: Depth category
        magnitude_class: Magnitude category
    """
    radius: float
    threat_circle_km: float
    depth_bucket: DepthBucket
    magnitude_class: MagnitudeClass


def radius(magnitude: float) -> float:
    """Display radius, linear in magnitude.

    Pure function.
    """
    return 1.75 * (2 * magnitude)


def threat_circle_km(magnitude: float) -> float:
    """Radius in km within which an earthquake threatens a city.

    Pure function.

    Every whole unit of magnitude multiplies the radius by 1.8 ** 2 (3.24).
    Magnitude 2.5 gives the base 20 miles (32 km); magnitude 5 gives about
    605 km.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        Threat radius in kilometers
    """
    return BASE_THREAT_MILES * THREAT_GROWTH ** (2 * magnitude - 5) * MILES_TO_KM


def depth_bucket(depth_km: float) -> DepthBucket:
    """Categorize a depth.

    Pure function.

    Depths of zero or less are not shallow: they fall through to DEEP,
    the same as the map colouring has always done.
    """
    if 0 < depth_km <= THRESHOLD_INTERMEDIATE:
        return DepthBucket.SHALLOW
    elif THRESHOLD_INTERMEDIATE < depth_km <= THRESHOLD_DEEP:
        return DepthBucket.INTERMEDIATE
    return DepthBucket.DEEP


def magnitude_class(magnitude: float) -> MagnitudeClass:
    """Categorize a magnitude.

    Pure function.
    """
    if magnitude >= THRESHOLD_MODERATE:
        return MagnitudeClass.MODERATE
    elif magnitude >= THRESHOLD_LIGHT:
        return MagnitudeClass.LIGHT
    return MagnitudeClass.MINOR


def severity(event: "Event") -> Severity:
    """Compute all severity values for an event.

    Pure function.

    Args:
        event: Earthquake event

    Returns:
        Severity with radius, threat circle and categories
    """
    return Severity(
        radius=radius(event.magnitude),
        threat_circle_km=threat_circle_km(event.magnitude),
        depth_bucket=depth_bucket(event.depth_km),
        magnitude_class=magnitude_class(event.magnitude),
    )
