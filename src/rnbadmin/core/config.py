"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ApiConfig(BaseSettings):
    """Record API as seen by the catalog fetcher."""

    model_config = {"env_prefix": "RNBADMIN_API_"}

    base_url: str = "http://localhost:8080"
    timeout_seconds: int = 30


class RegistryConfig(BaseSettings):
    """RNB building registry configuration."""

    model_config = {"env_prefix": "RNBADMIN_REGISTRY_"}

    base_url: str = "https://rnb-api.beta.gouv.fr"
    search_radius: int = 5
    click_debounce_ms: int = 600
    timeout_seconds: int = 30


class StoreConfig(BaseSettings):
    """JSON record store configuration."""

    model_config = {"env_prefix": "RNBADMIN_STORE_"}

    data_path: str = "data/items.json"
    max_items: int = 10


class MapConfig(BaseSettings):
    """Map display configuration."""

    model_config = {"env_prefix": "RNBADMIN_MAP_"}

    layers_path: str | None = None
    fit_padding: int = 30


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "RNBADMIN_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    api: ApiConfig = Field(default_factory=ApiConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    map: MapConfig = Field(default_factory=MapConfig)
