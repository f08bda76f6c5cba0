"""
City name resolution
====================

1. **Normalization** -- trim, lower-case, strip diacritics, drop anything
   after the first comma (``"Paris, France"`` -> ``"paris"``).
2. **Lookup**        -- one dict hit in the catalog index.
3. **Ranking**       -- several cities may share a key (same name in
   different countries).  Home-country records come first, the rest keep
   catalog insertion order.  The ranked list is only collapsed to a single
   record by ``NameResolver.resolve``.

Complexity: O(len(name) + k) where k = candidates for the key.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import TYPE_CHECKING, Iterable

from .entities import CityNotFound, CityRecord

if TYPE_CHECKING:
    from .catalog import CityCatalog

logger = logging.getLogger(__name__)

# Latin letters with no canonical decomposition (NFD leaves them intact)
_FOLD = str.maketrans(
    {
        "ł": "l",
        "ø": "o",
        "đ": "d",
        "ð": "d",
        "ħ": "h",
        "ı": "i",
        "ŀ": "l",
        "ß": "ss",
        "æ": "ae",
        "œ": "oe",
        "þ": "th",
    }
)


def normalize_city_name(raw_name: str) -> str:
    """Reduce *raw_name* to the lookup key used by the catalog index."""
    name = raw_name.strip().lower()
    decomposed = unicodedata.normalize("NFD", name)
    name = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    name = name.translate(_FOLD)
    return name.split(",", 1)[0].strip()


def rank_candidates(
    candidates: Iterable[CityRecord], home_country: str
) -> list[CityRecord]:
    """Home-country records first; stable otherwise."""
    home = home_country.upper()
    return sorted(candidates, key=lambda city: city.country_code != home)


class NameResolver:
    """Maps free-text city names to catalog records."""

    def __init__(self, catalog: CityCatalog, home_country: str = "FR"):
        self.catalog = catalog
        self.home_country = home_country

    def candidates(self, raw_name: str) -> list[CityRecord]:
        key = normalize_city_name(raw_name)
        if not key:
            return []
        return rank_candidates(self.catalog.lookup(key), self.home_country)

    def resolve(self, raw_name: str) -> CityRecord:
        """Return the best match for *raw_name* or raise ``CityNotFound``."""
        ranked = self.candidates(raw_name)
        if not ranked:
            key = normalize_city_name(raw_name)
            logger.info("City not found: %r (normalized: %r)", raw_name, key)
            raise CityNotFound(raw_name, key)
        city = ranked[0]
        logger.debug(
            "Resolved %r -> %s (%s) at %.4f, %.4f",
            raw_name,
            city.ascii_name,
            city.country_code,
            city.latitude,
            city.longitude,
        )
        return city


def suggest_cities(
    catalog: CityCatalog, prefix: str, limit: int = 10
) -> list[CityRecord]:
    """Records whose normalized name starts with *prefix*, in catalog order."""
    key = normalize_city_name(prefix)
    if not key or limit <= 0:
        return []
    matches: list[CityRecord] = []
    for city in catalog:
        if normalize_city_name(city.ascii_name).startswith(key):
            matches.append(city)
            if len(matches) >= limit:
                break
    return matches
