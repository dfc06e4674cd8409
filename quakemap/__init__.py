"""Earthquake threat map engine.

Classifies earthquakes against countries, tallies them per country and
filters which cities and earthquakes are shown when one is selected.
"""

from quakemap.session import ClassificationResult, Session, configure_logging

__all__ = [
    "ClassificationResult",
    "Session",
    "configure_logging",
]
