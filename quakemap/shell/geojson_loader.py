"""GeoJSON Loader - Imperative Shell.

Reads country polygons and city points from GeoJSON files on disk and
hands them to the record parsers in the core. Rejected records are logged
and skipped.
"""

import json
import logging
from pathlib import Path
from typing import Any

from quakemap.core.earthquake import City
from quakemap.core.records import ParseResult, parse_cities, parse_regions
from quakemap.core.region import Region


logger = logging.getLogger(__name__)


def read_geojson(path: str | Path) -> dict[str, Any]:
    """Read a GeoJSON document.

    Args:
        path: File to read

    Returns:
        Decoded JSON document

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(path)
    logger.debug("Reading GeoJSON from %s", path)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _log_rejected(result: ParseResult, kind: str, path: Path) -> None:
    for error in result.errors:
        logger.warning(
            "Skipping %s record %d in %s: %s (%s)",
            kind,
            error.index,
            path,
            error.message,
            error.field,
        )


def load_regions(path: str | Path) -> list[Region]:
    """Load country regions from a GeoJSON FeatureCollection.

    Args:
        path: countries GeoJSON file

    Returns:
        Regions in file order
    """
    path = Path(path)
    result = parse_regions(read_geojson(path))
    _log_rejected(result, "region", path)

    logger.info(
        "Loaded %d regions from %s (%d composite, %d rejected)",
        len(result.items),
        path,
        sum(1 for r in result.items if r.is_composite),
        len(result.errors),
    )
    return result.items


def load_cities(path: str | Path) -> list[City]:
    """Load cities from a GeoJSON FeatureCollection.

    Args:
        path: city GeoJSON file

    Returns:
        Cities in file order
    """
    path = Path(path)
    result = parse_cities(read_geojson(path))
    _log_rejected(result, "city", path)

    logger.info(
        "Loaded %d cities from %s (%d rejected)",
        len(result.items),
        path,
        len(result.errors),
    )
    return result.items
