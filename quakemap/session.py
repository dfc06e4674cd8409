"""Session - Wires Functional Core and Imperative Shell.

A Session owns the entities a map host works with: countries, cities and
earthquakes, the risk tally from the last classification pass and the
current selection. The host does the drawing and hit-testing; the session
answers what is on land, how severe it is and what should be visible.

Selection actions must be serialized by the host; a session is not
thread-safe.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from quakemap.core.config import Config
from quakemap.core.earthquake import City, Event
from quakemap.core.records import ParseResult, parse_events
from quakemap.core.region import Region, classify
from quakemap.core.risk import RiskTally, aggregate, shade_levels
from quakemap.core.selection import IDLE, Selection, on_deselect, on_select
from quakemap.core.severity import Severity, severity
from quakemap.shell.geojson_loader import load_cities, load_regions


logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging.

    Args:
        level: Level name; falls back to LOG_LEVEL, then INFO
    """
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass
class ClassificationResult:
    """Result of one classification pass.

    Attributes:
        tally: Events per region
        conflicts: Events whose existing tag disagreed with the new match
    """
    tally: RiskTally
    conflicts: int = 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the classification pass."""
        return (
            f"Classified {self.tally.total_events} earthquakes, "
            f"{self.tally.land_count} on land in {len(self.tally)} countries, "
            f"{self.tally.oceanic_count} in the ocean"
        )


class Session:
    """Holds the loaded entities and the current selection.

    Regions and cities are loaded once. Events are loaded once per session
    with ``load_events``; loading again replaces them and resets the
    selection.
    """

    def __init__(
        self,
        regions: Sequence[Region],
        cities: Sequence[City],
        config: Config | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            regions: Countries in classification priority order
            cities: Cities that can be threatened
            config: Application configuration (defaults when None)
        """
        self.config = config or Config()
        self.regions = tuple(regions)
        self.cities = list(cities)
        self.events: list[Event] = []
        self.selection: Selection = IDLE
        self.tally = RiskTally()

    @classmethod
    def from_config(cls, config: Config) -> "Session":
        """Create a session from the country and city files in ``config``.

        Applies ``config.log_level`` to logging before loading.
        """
        configure_logging(config.log_level)
        return cls(
            regions=load_regions(config.countries_path),
            cities=load_cities(config.cities_path),
            config=config,
        )

    def load_events(self, records: Iterable[Any] | dict[str, Any]) -> ParseResult[Event]:
        """Parse event records and make them the session's events.

        Malformed records are logged and skipped.

        Args:
            records: Event records or a GeoJSON FeatureCollection

        Returns:
            ParseResult with the accepted events and the rejected records
        """
        result = parse_events(records)
        for error in result.errors:
            logger.warning(
                "Skipping earthquake record %d: %s (%s)",
                error.index,
                error.message,
                error.field,
            )

        self.events = list(result.items)
        self.selection = IDLE
        self.tally = RiskTally(total_events=len(self.events))

        logger.info(
            "Loaded %d earthquakes (%d rejected)",
            len(result.items),
            len(result.errors),
        )
        return result

    def classify_all(self) -> ClassificationResult:
        """Classify every event against the regions and tally the result."""
        conflicts = 0
        for event in self.events:
            name = classify(event, self.regions)
            if name is not None and event.region != name:
                conflicts += 1
                logger.warning(
                    "Earthquake %r already tagged with %s, not retagging as %s",
                    event.title,
                    event.region,
                    name,
                )

        self.tally = aggregate(self.events, self.regions)

        for name, count in self.tally.items():
            logger.info("%s: %d", name, count)
        logger.info("Ocean earthquakes: %d", self.tally.oceanic_count)

        result = ClassificationResult(tally=self.tally, conflicts=conflicts)
        logger.info(result.summary)
        return result

    def shade_levels(self) -> dict[str, int | None]:
        """Choropleth shade level per region from the last tally."""
        return shade_levels(self.tally, self.regions, self.config.shade)

    def severity(self, event: Event) -> Severity:
        return severity(event)

    def on_select(
        self,
        event_hit: Event | None = None,
        city_hit: City | None = None,
    ) -> Selection:
        """Apply a selection action and update visibility flags.

        Args:
            event_hit: Earthquake the action landed on, if any
            city_hit: City the action landed on, if any

        Returns:
            The new selection
        """
        before = self.selection
        self.selection = on_select(
            before,
            self.events,
            self.cities,
            event_hit=event_hit,
            city_hit=city_hit,
        )

        if self.selection is not before:
            logger.debug("Selection changed: %s -> %s", _describe(before), _describe(self.selection))
        return self.selection

    def on_deselect(self) -> Selection:
        """Show everything and clear the selection."""
        self.selection = on_deselect(self.events, self.cities)
        logger.debug("Selection cleared")
        return self.selection

    @property
    def visible_events(self) -> list[Event]:
        return [e for e in self.events if not e.hidden]

    @property
    def visible_cities(self) -> list[City]:
        return [c for c in self.cities if not c.hidden]


def _describe(selection: Selection) -> str:
    if selection.event is not None:
        return f"earthquake {selection.event.title!r}"
    if selection.city is not None:
        return f"city {selection.city.name!r}"
    return "idle"
