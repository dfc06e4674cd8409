"""Selection engine - Visibility filtering for a focus action.

Clicking an earthquake shows only that earthquake and the cities inside its
threat circle. Clicking a city shows only that city and the earthquakes
whose threat circles reach it. Clicking again while something is focused
shows everything.

The current focus is an explicit Selection value: the caller keeps it and
passes it back on the next action. The only mutation is the ``hidden``
flag on events and cities.
"""

from dataclasses import dataclass
from typing import Sequence

from quakemap.core.earthquake import City, Event
from quakemap.core.geo import is_within_radius


@dataclass(frozen=True)
class Selection:
    """Current focus: nothing, one event or one city.

    Attributes:
        event: Focused event, if any
        city: Focused city, if any
    """
    event: Event | None = None
    city: City | None = None

    def __post_init__(self) -> None:
        if self.event is not None and self.city is not None:
            raise ValueError("Selection can focus an event or a city, not both")

    @property
    def is_idle(self) -> bool:
        return self.event is None and self.city is None

    @property
    def is_focused(self) -> bool:
        return not self.is_idle


IDLE = Selection()


def threatens(event: Event, city: City) -> bool:
    """Check if a city lies within an event's threat circle.

    Pure function. The circle's edge counts as inside.
    """
    return is_within_radius(city.location, event.location, event.threat_circle_km)


def cities_at_risk(event: Event, cities: Sequence[City]) -> list[City]:
    """Cities inside an event's threat circle.

    Pure function.
    """
    return [c for c in cities if threatens(event, c)]


def events_threatening(city: City, events: Sequence[Event]) -> list[Event]:
    """Events whose own threat circle reaches the city.

    Pure function.
    """
    return [e for e in events if threatens(e, city)]


def show_all(events: Sequence[Event], cities: Sequence[City]) -> None:
    """Clear the hidden flag on every event and city."""
    for event in events:
        event.hidden = False
    for city in cities:
        city.hidden = False


def focus_event(
    event: Event,
    events: Sequence[Event],
    cities: Sequence[City],
) -> Selection:
    """Show one event and the cities it threatens, hide everything else."""
    for other in events:
        other.hidden = other is not event
    for city in cities:
        city.hidden = not threatens(event, city)
    event.hidden = False
    return Selection(event=event)


def focus_city(
    city: City,
    events: Sequence[Event],
    cities: Sequence[City],
) -> Selection:
    """Show one city and the events threatening it, hide everything else."""
    for event in events:
        event.hidden = not threatens(event, city)
    for other in cities:
        other.hidden = other is not city
    city.hidden = False
    return Selection(city=city)


def on_select(
    selection: Selection,
    events: Sequence[Event],
    cities: Sequence[City],
    event_hit: Event | None = None,
    city_hit: City | None = None,
) -> Selection:
    """Apply one selection action.

    Hit-testing is the caller's job: ``event_hit`` and ``city_hit`` are
    the markers the action landed on, if any. An event hit wins over a
    city hit. Any action while focused returns to idle, whatever it hit.

    Args:
        selection: Selection before the action
        events: All events
        cities: All cities
        event_hit: Event under the action, if any
        city_hit: City under the action, if any

    Returns:
        Selection after the action
    """
    if selection.is_focused:
        return on_deselect(events, cities)

    if event_hit is not None:
        return focus_event(event_hit, events, cities)

    if city_hit is not None:
        return focus_city(city_hit, events, cities)

    return selection


def on_deselect(events: Sequence[Event], cities: Sequence[City]) -> Selection:
    """Show everything and clear the focus.

    Returns:
        The idle selection
    """
    show_all(events, cities)
    return IDLE
