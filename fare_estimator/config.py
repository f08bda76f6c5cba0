"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Reference dataset
    dataset_path: str = "data/worldcities.csv"

    # Redis catalog cache
    redis_url: str = "redis://localhost:6379/0"
    catalog_cache_enabled: bool = True
    catalog_cache_key: str = "catalog:cities"
    catalog_cache_ttl_seconds: int = 0  # 0 = never expires

    # Resolution
    home_country: str = "FR"  # preferred when several cities share a name

    # Tariff
    base_fare: float = 10.0  # EUR
    detour_factor: float = 1.15  # straight line -> road distance
    add_on_surcharge: float = 5.0  # EUR, child seats
    average_speed_kmh: float = 80.0
    currency_symbol: str = "€"

    # API
    rate_limit: str = "100/minute"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
