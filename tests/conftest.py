"""
Shared test fixtures.

Catalogs are built from a small in-memory row set so tests run without
the CSV file or Redis.  The Redis cache is exercised with ``fakeredis``.
"""

from pathlib import Path

import fakeredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fare_estimator.domain.catalog import CityCatalog
from fare_estimator.domain.estimator import StaticCatalogProvider, TripEstimator
from fare_estimator.infrastructure.catalog_provider import CatalogProvider


# ── Sample dataset ────────────────────────────────────────────────────

SAMPLE_ROWS = [
    {"city": "Paris", "city_ascii": "Paris", "iso2": "FR", "lat": "48.8566", "lng": "2.3522"},
    {"city": "Lyon", "city_ascii": "Lyon", "iso2": "FR", "lat": "45.7640", "lng": "4.8357"},
    {"city": "Łódź", "city_ascii": "Lodz", "iso2": "PL", "lat": "51.7769", "lng": "19.4547"},
    {"city": "London", "city_ascii": "London", "iso2": "GB", "lat": "51.5072", "lng": "-0.1275"},
    {"city": "Zürich", "city_ascii": "Zurich", "iso2": "CH", "lat": "47.3744", "lng": "8.5411"},
    # same name in two served countries, the foreign one listed first
    {"city": "Valence", "city_ascii": "Valence", "iso2": "BE", "lat": "50.4000", "lng": "4.4000"},
    {"city": "Valence", "city_ascii": "Valence", "iso2": "FR", "lat": "44.9333", "lng": "4.8917"},
    # rejected rows
    {"city": "Paris", "city_ascii": "Paris", "iso2": "US", "lat": "33.6688", "lng": "-95.5437"},
    {"city": "Nowhere", "city_ascii": "Nowhere", "iso2": "FR", "lat": "abc", "lng": "2.0"},
]

SAMPLE_CSV = (
    "city,city_ascii,lat,lng,country,iso2\n"
    "Paris,Paris,48.8566,2.3522,France,FR\n"
    "Lyon,Lyon,45.7640,4.8357,France,FR\n"
    "Łódź,Lodz,51.7769,19.4547,Poland,PL\n"
    "Paris,Paris,33.6688,-95.5437,United States,US\n"
    "Broken,Broken,,2.0,France,FR\n"
)


@pytest.fixture
def catalog() -> CityCatalog:
    return CityCatalog.build(SAMPLE_ROWS)


@pytest.fixture
def estimator(catalog: CityCatalog) -> TripEstimator:
    return TripEstimator(StaticCatalogProvider(catalog))


@pytest.fixture
def dataset_path(tmp_path: Path) -> Path:
    path = tmp_path / "worldcities.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def fake_redis():
    return fakeredis.FakeAsyncRedis(decode_responses=True)


@pytest_asyncio.fixture
async def client(dataset_path: Path):
    """AsyncClient over an app whose catalog is built from the sample CSV."""
    from fare_estimator.api.app import create_app
    from fare_estimator.api.middleware import limiter

    limiter.reset()
    provider = CatalogProvider(dataset_path)
    await provider.load()

    app = create_app(catalog_provider=provider)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
