"""Unit tests for risk aggregation.

Pure function tests - no mocks needed.
"""

import pytest

from quakemap.core.config import ShadeConfig
from quakemap.core.earthquake import Event
from quakemap.core.geo import Point, Polygon
from quakemap.core.region import Region
from quakemap.core.risk import RiskTally, aggregate, oceanic_count, shade_level, shade_levels


def tagged(region):
    event = Event(location=Point(0, 0), magnitude=4.0, depth_km=10.0)
    if region is not None:
        event.tag_region(region)
    return event


@pytest.fixture
def regions():
    polygon = Polygon.from_points([Point(0, 0), Point(0, 1), Point(1, 1)])
    return [
        Region(name="Japan", polygons=(polygon,)),
        Region(name="Chile", polygons=(polygon,)),
        Region(name="Iceland", polygons=(polygon,)),
    ]


class TestAggregate:
    """Tests for aggregate()."""

    def test_counts_per_region(self, regions):
        events = [tagged("Chile"), tagged("Japan"), tagged("Chile"), tagged(None)]

        tally = aggregate(events, regions)

        assert tally["Chile"] == 2
        assert tally["Japan"] == 1
        assert tally.total_events == 4

    def test_omits_zero_count_regions(self, regions):
        tally = aggregate([tagged("Japan")], regions)

        assert "Iceland" not in tally
        assert "Chile" not in tally
        assert len(tally) == 1
        assert tally.get("Iceland") == 0

    def test_keeps_region_order(self, regions):
        events = [tagged("Iceland"), tagged("Japan")]

        tally = aggregate(events, regions)

        assert list(tally) == ["Japan", "Iceland"]

    def test_land_plus_ocean_is_total(self, regions):
        events = [tagged("Chile"), tagged(None), tagged(None), tagged("Iceland")]

        tally = aggregate(events, regions)

        assert sum(tally.values()) + tally.oceanic_count == len(events)
        assert tally.oceanic_count == oceanic_count(events) == 2

    def test_stale_tag_counts_as_ocean_against_regions(self, regions):
        events = [tagged("Japan"), tagged("Atlantis"), tagged(None)]

        tally = aggregate(events, regions)

        assert tally.oceanic_count == oceanic_count(events, regions) == 2
        # Without regions only the untagged event is off land
        assert oceanic_count(events) == 1

    def test_empty(self, regions):
        tally = aggregate([], regions)

        assert tally == RiskTally()
        assert tally.oceanic_count == 0


class TestShadeLevel:
    """Tests for shade_level()."""

    def test_range_ends(self):
        assert shade_level(1) == 10
        assert shade_level(20) == 255

    def test_truncates(self):
        """10 + 9 * 245 / 19 = 126.05..."""
        assert shade_level(10) == 126

    def test_unclamped(self):
        assert shade_level(40) > 255

    def test_custom_range(self):
        assert shade_level(5, low=0, high=10, out_low=0, out_high=100) == 50

    def test_empty_count_range(self):
        assert shade_level(5, low=5, high=5, out_low=10, out_high=255) == 10
        assert shade_level(9, low=5, high=5) == 10


class TestShadeLevels:
    """Tests for shade_levels()."""

    def test_none_for_regions_without_events(self, regions):
        tally = RiskTally(counts={"Japan": 1, "Chile": 20}, total_events=25)

        levels = shade_levels(tally, regions)

        assert levels == {"Japan": 10, "Chile": 255, "Iceland": None}

    def test_uses_shade_config(self, regions):
        tally = RiskTally(counts={"Japan": 2}, total_events=2)
        shade = ShadeConfig(min_count=0, max_count=4, min_level=0, max_level=200)

        assert shade_levels(tally, regions, shade)["Japan"] == 100

    def test_equal_count_bounds_do_not_divide_by_zero(self, regions):
        tally = RiskTally(counts={"Japan": 5, "Chile": 1}, total_events=6)
        shade = ShadeConfig(min_count=5, max_count=5)

        levels = shade_levels(tally, regions, shade)

        assert levels == {"Japan": 10, "Chile": 10, "Iceland": None}
