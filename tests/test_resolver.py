"""Unit tests for name normalization, ranking and resolution."""

import pytest

from fare_estimator.domain.catalog import CityCatalog
from fare_estimator.domain.entities import CityNotFound, CityRecord
from fare_estimator.domain.resolver import (
    NameResolver,
    normalize_city_name,
    rank_candidates,
    suggest_cities,
)


class TestNormalize:
    def test_comma_case_and_whitespace(self):
        assert (
            normalize_city_name("Paris, France")
            == normalize_city_name("paris")
            == normalize_city_name("PARIS")
            == normalize_city_name("  Paris  ")
            == "paris"
        )

    def test_strips_diacritics(self):
        assert normalize_city_name("Łódź") == normalize_city_name("Lodz") == "lodz"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Zürich", "zurich"),
            ("Besançon", "besancon"),
            ("Malmö", "malmo"),
            ("København", "kobenhavn"),
            ("Gießen", "giessen"),
            ("São Paulo", "sao paulo"),
        ],
    )
    def test_folding(self, raw, expected):
        assert normalize_city_name(raw) == expected

    def test_truncates_at_first_comma_only(self):
        assert normalize_city_name("Valence, Drôme, France") == "valence"

    def test_space_before_comma(self):
        assert normalize_city_name("Lyon , France") == "lyon"

    def test_empty(self):
        assert normalize_city_name("   ") == ""
        assert normalize_city_name(", France") == ""

    def test_deterministic(self):
        assert normalize_city_name("Saint-Étienne") == normalize_city_name("Saint-Étienne")


class TestRankCandidates:
    def test_home_country_first(self):
        be = CityRecord("Valence", "Valence", "BE", 50.4, 4.4)
        fr = CityRecord("Valence", "Valence", "FR", 44.9, 4.9)
        assert rank_candidates([be, fr], "FR") == [fr, be]

    def test_stable_without_home_match(self):
        a = CityRecord("A", "A", "DE", 0, 0)
        b = CityRecord("A", "A", "IT", 1, 1)
        assert rank_candidates([a, b], "FR") == [a, b]


class TestNameResolver:
    def test_resolve_with_country_suffix(self, catalog: CityCatalog):
        city = NameResolver(catalog).resolve("Paris, France")
        assert (city.ascii_name, city.country_code) == ("Paris", "FR")

    def test_resolve_accented_input(self, catalog: CityCatalog):
        assert NameResolver(catalog).resolve("Łódź").country_code == "PL"

    def test_home_country_wins_tie(self, catalog: CityCatalog):
        city = NameResolver(catalog, home_country="FR").resolve("Valence")
        assert city.country_code == "FR"

    def test_first_candidate_without_home_match(self, catalog: CityCatalog):
        city = NameResolver(catalog, home_country="DE").resolve("Valence")
        assert city.country_code == "BE"

    def test_candidates_are_ranked(self, catalog: CityCatalog):
        ranked = NameResolver(catalog, home_country="FR").candidates("valence")
        assert [c.country_code for c in ranked] == ["FR", "BE"]

    def test_not_found(self, catalog: CityCatalog):
        with pytest.raises(CityNotFound) as exc_info:
            NameResolver(catalog).resolve("Atlantis, Ocean")
        assert exc_info.value.normalized == "atlantis"

    def test_blank_name_not_found(self, catalog: CityCatalog):
        with pytest.raises(CityNotFound):
            NameResolver(catalog).resolve("   ")

    def test_empty_catalog_never_resolves(self):
        with pytest.raises(CityNotFound):
            NameResolver(CityCatalog()).resolve("Paris")


class TestSuggestCities:
    def test_prefix_match(self, catalog: CityCatalog):
        names = [c.ascii_name for c in suggest_cities(catalog, "l")]
        assert names == ["Lyon", "Lodz", "London"]

    def test_prefix_is_normalized(self, catalog: CityCatalog):
        assert [c.ascii_name for c in suggest_cities(catalog, "ZÜR")] == ["Zurich"]

    def test_limit(self, catalog: CityCatalog):
        assert len(suggest_cities(catalog, "l", limit=2)) == 2

    def test_label_uses_country_name(self, catalog: CityCatalog):
        city = suggest_cities(catalog, "london")[0]
        assert city.label == "London, United Kingdom"

    def test_blank_prefix(self, catalog: CityCatalog):
        assert suggest_cities(catalog, "  ") == []
