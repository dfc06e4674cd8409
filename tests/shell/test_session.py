"""Tests for the Session module.

Tests the wiring between loading, classification, tallying and selection.
"""

import json
import logging
from unittest.mock import patch

import pytest

from quakemap.core.config import Config, ShadeConfig
from quakemap.core.geo import Point, Polygon
from quakemap.core.region import Region
from quakemap.core.earthquake import City
from quakemap.core.selection import IDLE
from quakemap.core.severity import DepthBucket
from quakemap.session import ClassificationResult, Session, configure_logging


def square(lat, lon, size):
    return Polygon.from_points([
        Point(lat, lon),
        Point(lat, lon + size),
        Point(lat + size, lon + size),
        Point(lat + size, lon),
    ])


@pytest.fixture
def regions():
    return [
        Region(name="Squareland", polygons=(square(0, 0, 10),)),
        Region(name="Twin Isles", polygons=(square(20, 20, 2), square(-10, 30, 2))),
    ]


@pytest.fixture
def cities():
    return [
        City(location=Point(5.9, 5.0), name="Capital"),
        City(location=Point(60.0, 5.0), name="Faraway"),
    ]


@pytest.fixture
def event_records():
    return [
        {"lat": 5.0, "lon": 5.0, "magnitude": 6.5, "depth": 10, "title": "Squareland M6.5"},
        {"lat": 5.5, "lon": 5.5, "magnitude": 3.0, "depth": 400, "title": "Squareland M3.0"},
        {"lat": -9.0, "lon": 31.0, "magnitude": 4.2, "depth": 100, "title": "Twin Isles M4.2"},
        {"lat": -40.0, "lon": -20.0, "magnitude": 5.0, "depth": 0, "title": "Ocean M5.0"},
        {"lat": 0.0, "lon": 0.0, "magnitude": "big", "depth": 1, "title": "bad"},
    ]


@pytest.fixture
def session(regions, cities, event_records):
    session = Session(regions=regions, cities=cities)
    session.load_events(event_records)
    return session


class TestLoadEvents:
    """Tests for Session.load_events()."""

    def test_skips_malformed(self, regions, cities, event_records, caplog):
        session = Session(regions=regions, cities=cities)

        with caplog.at_level(logging.WARNING):
            result = session.load_events(event_records)

        assert len(session.events) == 4
        assert [e.index for e in result.errors] == [4]
        assert "Skipping earthquake record 4" in caplog.text

    def test_resets_selection(self, session):
        session.on_select(event_hit=session.events[0])

        session.load_events([{"lat": 1, "lon": 1, "magnitude": 2, "depth": 3}])

        assert session.selection is IDLE
        assert len(session.events) == 1


class TestClassifyAll:
    """Tests for Session.classify_all()."""

    def test_tallies_countries_and_ocean(self, session):
        result = session.classify_all()

        assert isinstance(result, ClassificationResult)
        assert dict(result.tally.items()) == {"Squareland": 2, "Twin Isles": 1}
        assert result.tally.oceanic_count == 1
        assert result.conflicts == 0
        assert session.tally is result.tally

    def test_summary(self, session):
        result = session.classify_all()

        assert result.summary == (
            "Classified 4 earthquakes, 3 on land in 2 countries, 1 in the ocean"
        )

    def test_logs_counts(self, session, caplog):
        with caplog.at_level(logging.INFO):
            session.classify_all()

        assert "Squareland: 2" in caplog.text
        assert "Ocean earthquakes: 1" in caplog.text

    def test_idempotent(self, session):
        first = session.classify_all()
        second = session.classify_all()

        assert first.tally == second.tally
        assert second.conflicts == 0

    def test_conflicting_tag_kept(self, session, caplog):
        session.events[0].tag_region("Atlantis")

        with caplog.at_level(logging.WARNING):
            result = session.classify_all()

        assert session.events[0].region == "Atlantis"
        assert result.conflicts == 1
        assert "not retagging" in caplog.text


class TestShadeLevels:
    """Tests for Session.shade_levels()."""

    def test_levels_after_classification(self, session):
        session.classify_all()

        levels = session.shade_levels()

        assert levels == {"Squareland": 22, "Twin Isles": 10}

    def test_uses_configured_shade(self, regions, cities, event_records):
        config = Config(shade=ShadeConfig(min_count=0, max_count=2, min_level=0, max_level=100))
        session = Session(regions=regions, cities=cities, config=config)
        session.load_events(event_records)
        session.classify_all()

        assert session.shade_levels() == {"Squareland": 100, "Twin Isles": 50}


class TestSeverity:
    """Tests for Session.severity()."""

    def test_ocean_quake_at_zero_depth_is_deep(self, session):
        ocean = session.events[3]

        result = session.severity(ocean)

        assert result.threat_circle_km == pytest.approx(604.66176)
        assert result.depth_bucket is DepthBucket.DEEP


class TestSelection:
    """Tests for Session.on_select() / on_deselect()."""

    def test_select_event(self, session):
        big = session.events[0]

        selection = session.on_select(event_hit=big)

        assert selection.event is big
        assert session.visible_events == [big]
        assert [c.name for c in session.visible_cities] == ["Capital"]

    def test_select_city(self, session):
        capital = session.cities[0]

        session.on_select(city_hit=capital)

        # Only the M6.5 reaches 100 km away; the M3.0 circle is under 60 km
        assert [e.title for e in session.visible_events] == ["Squareland M6.5"]
        assert session.visible_cities == [capital]

    def test_second_action_clears(self, session):
        session.on_select(event_hit=session.events[0])

        selection = session.on_select()

        assert selection is IDLE
        assert len(session.visible_events) == 4
        assert len(session.visible_cities) == 2

    def test_on_deselect(self, session):
        session.on_select(city_hit=session.cities[1])

        assert session.on_deselect() is IDLE
        assert all(not e.hidden for e in session.events)
        assert all(not c.hidden for c in session.cities)

    def test_miss_while_idle(self, session):
        assert session.on_select() is IDLE
        assert len(session.visible_events) == 4


class TestFromConfig:
    """Tests for Session.from_config()."""

    def test_loads_files(self, tmp_path):
        countries = tmp_path / "countries.geo.json"
        countries.write_text(json.dumps({
            "type": "FeatureCollection",
            "features": [{
                "type": "Feature",
                "properties": {"name": "Squareland"},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[0, 0], [10, 0], [10, 10], [0, 10]]],
                },
            }],
        }))
        cities = tmp_path / "city-data.json"
        cities.write_text(json.dumps({
            "type": "FeatureCollection",
            "features": [{
                "type": "Feature",
                "properties": {"name": "Capital", "population": 1.2},
                "geometry": {"type": "Point", "coordinates": [5, 5]},
            }],
        }))

        session = Session.from_config(Config(
            countries_path=str(countries),
            cities_path=str(cities),
        ))

        assert [r.name for r in session.regions] == ["Squareland"]
        assert [c.name for c in session.cities] == ["Capital"]
        assert session.events == []

    def test_applies_log_level(self, tmp_path):
        empty = tmp_path / "empty.json"
        empty.write_text(json.dumps({"type": "FeatureCollection", "features": []}))

        with patch("quakemap.session.configure_logging") as configure:
            session = Session.from_config(Config(
                countries_path=str(empty),
                cities_path=str(empty),
                log_level="DEBUG",
            ))

        configure.assert_called_once_with("DEBUG")
        assert session.regions == ()


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_does_not_raise_for_unknown_level(self):
        configure_logging("not-a-level")
