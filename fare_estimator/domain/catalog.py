"""
City Catalog
============

Immutable collection of validated European cities plus an index from
normalized name to every record sharing that name.

Row validation
--------------
A raw row (``{city_ascii, iso2, lat, lng}`` as text, optionally ``city``)
is dropped -- never the whole build -- when:

* its country code is outside the allow-list,
* its ASCII name is empty,
* ``lat`` / ``lng`` are not finite numbers in range.

Complexity: O(N) build, O(1) lookup.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from .entities import CityRecord, RowValidationError
from .enums import EUROPEAN_COUNTRIES
from .resolver import normalize_city_name

logger = logging.getLogger(__name__)

# The original dataset always contains these; their absence means a bad file.
SENTINEL_CITIES = ("paris", "lyon")


def _text(value: Any) -> str:
    """Cell as stripped text; missing cells (None, NaN) are empty."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def _parse_coordinate(value: Any, bound: float, field: str) -> float:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise RowValidationError(f"{field} is not a number: {value!r}")
    if not math.isfinite(number):
        raise RowValidationError(f"{field} is not finite: {value!r}")
    if not -bound <= number <= bound:
        raise RowValidationError(f"{field} out of range: {number}")
    return number


def parse_row(
    row: Mapping[str, Any], allowed_countries: frozenset[str] = EUROPEAN_COUNTRIES
) -> CityRecord:
    """Turn one raw dataset row into a ``CityRecord`` or raise."""
    country = _text(row.get("iso2")).upper()
    if country not in allowed_countries:
        raise RowValidationError(f"country not served: {country!r}", dict(row))

    ascii_name = _text(row.get("city_ascii"))
    if not ascii_name:
        raise RowValidationError("empty city name", dict(row))

    try:
        latitude = _parse_coordinate(row.get("lat"), 90.0, "lat")
        longitude = _parse_coordinate(row.get("lng"), 180.0, "lng")
    except RowValidationError as exc:
        raise RowValidationError(exc.reason, dict(row)) from None

    display = _text(row.get("city")) or ascii_name
    return CityRecord(
        name=display,
        ascii_name=ascii_name,
        country_code=country,
        latitude=latitude,
        longitude=longitude,
    )


class CityCatalog:
    """Ordered city records with a normalized-name index."""

    def __init__(self, records: Iterable[CityRecord] = ()):
        self._records: tuple[CityRecord, ...] = tuple(records)
        index: dict[str, list[CityRecord]] = {}
        for city in self._records:
            index.setdefault(normalize_city_name(city.ascii_name), []).append(city)
        self._index: Mapping[str, tuple[CityRecord, ...]] = MappingProxyType(
            {key: tuple(cities) for key, cities in index.items()}
        )

    @classmethod
    def build(
        cls,
        raw_rows: Iterable[Mapping[str, Any]],
        allowed_countries: Optional[frozenset[str]] = None,
    ) -> CityCatalog:
        """Validate *raw_rows* and index the survivors."""
        allowed = EUROPEAN_COUNTRIES if allowed_countries is None else allowed_countries
        records: list[CityRecord] = []
        dropped = 0
        for row in raw_rows:
            try:
                records.append(parse_row(row, allowed))
            except RowValidationError as exc:
                dropped += 1
                logger.debug(
                    "Dropped city %r: %s", exc.row.get("city_ascii") or "unknown", exc
                )

        catalog = cls(records)
        logger.info("City catalog built: %d kept, %d dropped", len(catalog), dropped)
        if records:
            for name in SENTINEL_CITIES:
                if not catalog.lookup(name):
                    logger.warning("%s missing from the filtered city data", name)
        return catalog

    # ── Queries ───────────────────────────────────────────────────

    def lookup(self, normalized_key: str) -> tuple[CityRecord, ...]:
        return self._index.get(normalized_key, ())

    @property
    def records(self) -> tuple[CityRecord, ...]:
        return self._records

    def to_rows(self) -> list[dict[str, Any]]:
        """Raw-row shape of every record, suitable for caching."""
        return [
            {
                "city": city.name,
                "city_ascii": city.ascii_name,
                "iso2": city.country_code,
                "lat": city.latitude,
                "lng": city.longitude,
            }
            for city in self._records
        ]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CityRecord]:
        return iter(self._records)
