"""Configuration management for FoodFresh."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from .freshness import USE_SOON_DAYS
from .kv_store import BackendType
from .models import StorageLocation


@dataclass
class DataConfig:
    """Data storage configuration."""

    storage_dir: Path
    backend: str = BackendType.JSON.value


@dataclass
class FreshnessConfig:
    """Freshness classification configuration."""

    use_soon_days: int = USE_SOON_DAYS


@dataclass
class DefaultsConfig:
    """Default values configuration."""

    storage_location: str = StorageLocation.FRIDGE.value


@dataclass
class Config:
    """Complete application configuration."""

    data: DataConfig
    freshness: FreshnessConfig
    defaults: DefaultsConfig


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def data(self) -> DataConfig:
        """Get data configuration."""
        return self._config.data

    @property
    def freshness(self) -> FreshnessConfig:
        """Get freshness configuration."""
        return self._config.freshness

    @property
    def defaults(self) -> DefaultsConfig:
        """Get defaults configuration."""
        return self._config.defaults

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "foodfresh" / "config.toml",
            Path.home() / ".foodfresh" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        # Return default location if none found
        return Path.home() / ".config" / "foodfresh" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        return Config(
            data=DataConfig(
                storage_dir=Path(
                    data.get("data", {}).get("storage_dir", "~/foodfresh/data")
                ).expanduser(),
                backend=data.get("data", {}).get("backend", BackendType.JSON.value),
            ),
            freshness=FreshnessConfig(
                use_soon_days=data.get("freshness", {}).get("use_soon_days", USE_SOON_DAYS),
            ),
            defaults=DefaultsConfig(
                storage_location=data.get("defaults", {}).get(
                    "storage_location", StorageLocation.FRIDGE.value
                ),
            ),
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(
            data=DataConfig(storage_dir=Path.home() / "foodfresh" / "data"),
            freshness=FreshnessConfig(),
            defaults=DefaultsConfig(),
        )
