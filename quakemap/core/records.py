"""Record parsing - Pure functions.

This module turns externally supplied records (plain dicts or GeoJSON
features) into validated regions, events and cities. Bad records never
raise: they come back as InputMalformed values next to the entities that
did parse, so everything past this boundary works on validated data.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, TypeVar

from quakemap.core.config import validate_coordinates
from quakemap.core.earthquake import City, Event
from quakemap.core.geo import Point, Polygon
from quakemap.core.region import Region


T = TypeVar("T")


@dataclass(frozen=True)
class InputMalformed:
    """A record rejected at load time.

    Attributes:
        index: Position of the record in its input sequence
        field: The offending field
        message: Human-readable description
    """
    index: int
    field: str
    message: str


@dataclass
class ParseResult(Generic[T]):
    """Entities built from a record sequence plus the rejected records.

    Attributes:
        items: Successfully parsed entities, in input order
        errors: One InputMalformed per rejected record
    """
    items: list[T] = field(default_factory=list)
    errors: list[InputMalformed] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if every record parsed."""
        return not self.errors


class _Malformed(Exception):
    """Internal signal carrying the field and message of a bad record."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def _number(value: Any, field: str) -> float:
    if value is None or isinstance(value, bool):
        raise _Malformed(field, f"Expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise _Malformed(field, f"Expected a number, got {value!r}") from None
    if not math.isfinite(number):
        raise _Malformed(field, f"Expected a finite number, got {value!r}")
    return number


def _point(lat: Any, lon: Any, field: str) -> Point:
    latitude = _number(lat, f"{field}.lat")
    longitude = _number(lon, f"{field}.lon")
    errors = validate_coordinates(latitude, longitude, field)
    if errors:
        raise _Malformed(errors[0].field, errors[0].message)
    return Point(latitude=latitude, longitude=longitude)


def _feature_parts(record: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a GeoJSON feature into (properties, geometry)."""
    properties = record.get("properties") or {}
    geometry = record.get("geometry") or {}
    if not isinstance(properties, dict):
        raise _Malformed("properties", f"Expected an object, got {type(properties).__name__}")
    if not isinstance(geometry, dict):
        raise _Malformed("geometry", f"Expected an object, got {type(geometry).__name__}")
    return properties, geometry


def _is_feature(record: Any) -> bool:
    return isinstance(record, dict) and record.get("type") == "Feature"


def _geojson_point(geometry: dict[str, Any]) -> list[Any]:
    coords = geometry.get("coordinates")
    if geometry.get("type") != "Point" or not isinstance(coords, (list, tuple)) or len(coords) < 2:
        raise _Malformed("geometry", "Expected a Point geometry with coordinates")
    return list(coords)


def _polygon(ring: Any, field: str, lon_first: bool = False) -> Polygon:
    if not isinstance(ring, (list, tuple)):
        raise _Malformed(field, "Expected a list of coordinates")

    points = []
    for i, pair in enumerate(ring):
        if not isinstance(pair, (list, tuple)) or len(pair) < 2:
            raise _Malformed(f"{field}[{i}]", f"Expected a coordinate pair, got {pair!r}")
        if lon_first:
            points.append(_point(pair[1], pair[0], f"{field}[{i}]"))
        else:
            points.append(_point(pair[0], pair[1], f"{field}[{i}]"))

    polygon = Polygon.from_points(points)
    if polygon.is_degenerate:
        raise _Malformed(field, "Polygon needs at least 3 distinct vertices")
    return polygon


def _geojson_polygons(geometry: dict[str, Any]) -> list[Polygon]:
    """Outer rings of a Polygon or MultiPolygon geometry.

    Holes are not represented.
    """
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or not coords:
        raise _Malformed("geometry.coordinates", "Missing polygon coordinates")

    if kind == "Polygon":
        return [_polygon(coords[0], "geometry.coordinates[0]", lon_first=True)]

    if kind == "MultiPolygon":
        polygons = []
        for i, rings in enumerate(coords):
            if not isinstance(rings, (list, tuple)) or not rings:
                raise _Malformed(f"geometry.coordinates[{i}]", "Empty polygon")
            polygons.append(
                _polygon(rings[0], f"geometry.coordinates[{i}][0]", lon_first=True)
            )
        return polygons

    raise _Malformed("geometry.type", f"Unsupported geometry type {kind!r}")


def _region(record: dict[str, Any]) -> Region:
    if _is_feature(record):
        properties, geometry = _feature_parts(record)
        name = properties.get("name") or record.get("id")
        polygons = _geojson_polygons(geometry)
    else:
        name = record.get("id") or record.get("name")
        rings = record.get("polygons")
        if not isinstance(rings, (list, tuple)) or not rings:
            raise _Malformed("polygons", "Region needs at least one polygon")
        polygons = [_polygon(ring, f"polygons[{i}]") for i, ring in enumerate(rings)]

    if not name or not isinstance(name, str):
        raise _Malformed("id", "Region needs a name")

    return Region(name=name, polygons=tuple(polygons))


def _event(record: dict[str, Any]) -> Event:
    if _is_feature(record):
        properties, geometry = _feature_parts(record)
        coords = _geojson_point(geometry)
        location = _point(coords[1], coords[0], "geometry.coordinates")
        magnitude = properties.get("magnitude", properties.get("mag"))
        depth = properties.get("depth")
        if depth is None and len(coords) > 2:
            depth = coords[2]
        title = properties.get("title", "")
    else:
        location = _point(record.get("lat"), record.get("lon"), "location")
        magnitude = record.get("magnitude")
        depth = record.get("depth")
        title = record.get("title", "")

    magnitude = _number(magnitude, "magnitude")
    if magnitude < 0:
        raise _Malformed("magnitude", f"Magnitude must be >= 0, got {magnitude}")

    return Event(
        location=location,
        magnitude=magnitude,
        depth_km=_number(depth, "depth"),
        title=str(title or ""),
    )


def _city(record: dict[str, Any]) -> City:
    if _is_feature(record):
        properties, geometry = _feature_parts(record)
        coords = _geojson_point(geometry)
        location = _point(coords[1], coords[0], "geometry.coordinates")
        name = properties.get("name")
        population = properties.get("population")
    else:
        location = _point(record.get("lat"), record.get("lon"), "location")
        name = record.get("name")
        population = record.get("population")

    if not name or not isinstance(name, str):
        raise _Malformed("name", "City needs a name")

    return City(
        location=location,
        name=name,
        population=None if population is None else _number(population, "population"),
    )


def _parse_one(
    record: Any,
    index: int,
    build: Callable[[dict[str, Any]], T],
) -> T | InputMalformed:
    if not isinstance(record, dict):
        return InputMalformed(index=index, field="", message="Record is not a mapping")
    try:
        return build(record)
    except _Malformed as e:
        return InputMalformed(index=index, field=e.field, message=e.message)


def _records(data: Any) -> list[Any]:
    """Accept a GeoJSON FeatureCollection or a plain sequence of records."""
    if isinstance(data, dict):
        return list(data.get("features", []))
    return list(data)


def _parse_all(data: Any, build: Callable[[dict[str, Any]], T]) -> ParseResult[T]:
    result: ParseResult[T] = ParseResult()
    for index, record in enumerate(_records(data)):
        parsed = _parse_one(record, index, build)
        if isinstance(parsed, InputMalformed):
            result.errors.append(parsed)
        else:
            result.items.append(parsed)
    return result


def parse_region(record: dict[str, Any], index: int = 0) -> Region | InputMalformed:
    """Parse a single region record.

    Pure function.

    Accepts ``{"id": name, "polygons": [[(lat, lon), ...], ...]}`` or a
    GeoJSON Polygon/MultiPolygon feature with a ``name`` property.
    """
    return _parse_one(record, index, _region)


def parse_event(record: dict[str, Any], index: int = 0) -> Event | InputMalformed:
    """Parse a single event record.

    Pure function.

    Accepts ``{lat, lon, magnitude, depth, title}`` or a GeoJSON Point
    feature.
    """
    return _parse_one(record, index, _event)


def parse_city(record: dict[str, Any], index: int = 0) -> City | InputMalformed:
    """Parse a single city record.

    Pure function.

    Accepts ``{lat, lon, name, population}`` or a GeoJSON Point feature.
    """
    return _parse_one(record, index, _city)


def parse_regions(data: Iterable[Any] | dict[str, Any]) -> ParseResult[Region]:
    """Parse region records, rejecting duplicate names.

    Pure function. The first region with a given name is kept; later ones
    are reported as malformed.

    Args:
        data: Sequence of region records or a GeoJSON FeatureCollection

    Returns:
        ParseResult with regions in input order
    """
    seen: set[str] = set()
    result: ParseResult[Region] = ParseResult()
    for index, record in enumerate(_records(data)):
        parsed = _parse_one(record, index, _region)
        if isinstance(parsed, InputMalformed):
            result.errors.append(parsed)
        elif parsed.name in seen:
            result.errors.append(InputMalformed(
                index=index,
                field="id",
                message=f"Duplicate region name {parsed.name!r}",
            ))
        else:
            seen.add(parsed.name)
            result.items.append(parsed)

    return result


def parse_events(data: Iterable[Any] | dict[str, Any]) -> ParseResult[Event]:
    """Parse event records.

    Pure function.

    Args:
        data: Sequence of event records or a GeoJSON FeatureCollection

    Returns:
        ParseResult with events in input order
    """
    return _parse_all(data, _event)


def parse_cities(data: Iterable[Any] | dict[str, Any]) -> ParseResult[City]:
    """Parse city records.

    Pure function.

    Args:
        data: Sequence of city records or a GeoJSON FeatureCollection

    Returns:
        ParseResult with cities in input order
    """
    return _parse_all(data, _city)
