"""Risk aggregation - Pure functions.

Counts earthquakes per region after classification and turns those counts
into shade levels for a choropleth. All functions are pure with no side
effects.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Sequence

from quakemap.core.config import ShadeConfig

if TYPE_CHECKING:
    from quakemap.core.earthquake import Event
    from quakemap.core.region import Region


@dataclass(frozen=True)
class RiskTally:
    """Earthquake counts per region for one classification pass.

    Attributes:
        counts: Region name -> event count, only regions with events
        total_events: Number of events in the pass, land and ocean
    """
    counts: dict[str, int] = field(default_factory=dict)
    total_events: int = 0

    def __getitem__(self, name: str) -> int:
        return self.counts[name]

    def __contains__(self, name: object) -> bool:
        return name in self.counts

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def get(self, name: str, default: int = 0) -> int:
        return self.counts.get(name, default)

    def values(self):
        return self.counts.values()

    def items(self):
        return self.counts.items()

    @property
    def land_count(self) -> int:
        """Events tagged with one of the tallied regions."""
        return sum(self.counts.values())

    @property
    def oceanic_count(self) -> int:
        """Events not tagged with one of the tallied regions.

        Untagged events count here, and so do events whose tag names a region
        outside the set passed to ``aggregate``. Equals
        ``oceanic_count(events, regions)`` for the same pass.
        """
        return self.total_events - self.land_count


def aggregate(events: Sequence["Event"], regions: Sequence["Region"]) -> RiskTally:
    """Count events per region from their tags.

    Pure function. Single pass over the events; only tags naming one of the
    given regions are counted. Regions without events are left out, and the
    rest keep the order of ``regions``.

    Args:
        events: Classified events
        regions: Regions the events were classified against

    Returns:
        RiskTally for this pass
    """
    by_tag: dict[str, int] = {}
    for event in events:
        if event.region is not None:
            by_tag[event.region] = by_tag.get(event.region, 0) + 1

    counts = {
        region.name: by_tag[region.name]
        for region in regions
        if by_tag.get(region.name, 0) > 0
    }

    return RiskTally(counts=counts, total_events=len(events))


def oceanic_count(
    events: Sequence["Event"],
    regions: Sequence["Region"] | None = None,
) -> int:
    """Count events that are not on one of the regions.

    Pure function. Without ``regions`` only untagged events count. With
    ``regions``, events whose tag names none of them count too, which matches
    ``aggregate(events, regions).oceanic_count``.
    """
    if regions is None:
        return sum(1 for e in events if e.region is None)

    names = {region.name for region in regions}
    return sum(1 for e in events if e.region not in names)


def shade_level(
    count: int,
    low: float = 1,
    high: float = 20,
    out_low: float = 10,
    out_high: float = 255,
) -> int:
    """Map an event count onto a shade level.

    Pure function. Linear and unclamped, so counts above ``high`` map past
    ``out_high``; the result is truncated toward zero. An empty count range
    (``high == low``) maps every count to ``out_low``.

    Args:
        count: Events in the region
        low: Count mapped to ``out_low``
        high: Count mapped to ``out_high``
        out_low: Lowest shade level
        out_high: Highest shade level

    Returns:
        Shade level
    """
    if high == low:
        return int(out_low)
    return int(out_low + (count - low) * (out_high - out_low) / (high - low))


def shade_levels(
    tally: RiskTally,
    regions: Sequence["Region"],
    shade: ShadeConfig | None = None,
) -> dict[str, int | None]:
    """Shade level for every region, None for regions without events.

    Pure function.

    Args:
        tally: Counts from the last classification pass
        regions: All regions to shade
        shade: Count and level ranges (defaults when None)

    Returns:
        Region name -> shade level or None
    """
    if shade is None:
        shade = ShadeConfig()

    return {
        region.name: (
            shade_level(
                tally[region.name],
                low=shade.min_count,
                high=shade.max_count,
                out_low=shade.min_level,
                out_high=shade.max_level,
            )
            if region.name in tally
            else None
        )
        for region in regions
    }
