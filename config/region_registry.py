# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Region registry holding merged configuration snapshots.

The registry maps a two-letter region code (e.g. 'au') to its validated
RegionConfig. One reader/writer lock guards the whole map: lookups run
concurrently, loads and upserts are exclusive. Callers always receive an
independent deep copy, so nothing they do can alter the stored snapshot.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from config.settings import merge_region_config
from config.validation import RegionConfig
from core.exceptions import RegionNotLoadedError
from core.guards import validate_region_code
from core.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class RegionRegistry:
    """Instance-based registry for per-region configuration."""

    def __init__(self) -> None:
        """Initialize an empty registry; storage is created on first write."""
        self._lock = ReadWriteLock()
        self._configs: dict[str, RegionConfig] | None = None

    @property
    def initialized(self) -> bool:
        """Whether any region has been stored yet."""
        with self._lock.read():
            return self._configs is not None

    def load(
        self,
        region_code: str,
        config_dir: Path | None = None,
        run_mode: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> RegionConfig:
        """
        Merge configuration sources for a region, store and return it.

        Args:
            region_code: ISO 3166-1 alpha-2 code, lowercase (e.g. 'au')
            config_dir: Base configuration directory (default: $GIS_CONFIG_PATH or ./config)
            run_mode: Mode-specific file to require (default: $RUN_MODE or 'development')
            environ: Environment mapping used for overrides (default: os.environ)

        Returns:
            Deep copy of the stored RegionConfig

        Raises:
            InvalidRegionCodeError: If region_code is malformed
            ConfigurationError: If sources are missing or do not validate

        Example:
            >>> registry = RegionRegistry()
            >>> au = registry.load("au")
            >>> au.fetcher_matcher.catalog
            'data.gov.au'
        """
        region = validate_region_code(region_code, "load")
        config = merge_region_config(region, config_dir, run_mode, environ)
        self.upsert(region, config)
        logger.info(f"Loaded configuration for region {region}")
        return self.get(region)

    def upsert(self, region_code: str, config: RegionConfig) -> bool:
        """
        Insert or replace the configuration for a region.

        Args:
            region_code: ISO 3166-1 alpha-2 code
            config: Validated RegionConfig

        Returns:
            True once the entry is stored

        Raises:
            InvalidRegionCodeError: If region_code is malformed
            TypeError: If config is not a RegionConfig
        """
        region = validate_region_code(region_code, "upsert")
        if not isinstance(config, RegionConfig):
            raise TypeError(f"upsert() expects RegionConfig, got {type(config).__name__}")

        with self._lock.write():
            if self._configs is None:
                self._configs = {region: config}
                logger.debug(f"Initialized region registry with {region}")
            else:
                self._configs[region] = config
                logger.debug(f"Stored configuration for {region}")
        return True

    def get(self, region_code: str) -> RegionConfig:
        """
        Get an independent copy of a region's configuration.

        Args:
            region_code: ISO 3166-1 alpha-2 code

        Returns:
            Deep copy of the stored RegionConfig

        Raises:
            InvalidRegionCodeError: If region_code is malformed
            RegionNotLoadedError: If the region was never loaded or upserted
        """
        region = validate_region_code(region_code, "get")
        with self._lock.read():
            configs = self._configs or {}
            stored = configs.get(region)
            if stored is None:
                raise RegionNotLoadedError(region, sorted(configs))
            return stored.model_copy(deep=True)

    def is_loaded(self, region_code: str) -> bool:
        """Check if a region has a stored configuration."""
        region = validate_region_code(region_code, "is_loaded")
        with self._lock.read():
            return self._configs is not None and region in self._configs

    def list_regions(self) -> list[str]:
        """Get sorted list of stored region codes."""
        with self._lock.read():
            return sorted(self._configs or {})

    def remove(self, region_code: str) -> bool:
        """
        Drop a region's configuration (primarily for testing).

        Returns:
            True if an entry was removed
        """
        region = validate_region_code(region_code, "remove")
        with self._lock.write():
            if self._configs is None:
                return False
            return self._configs.pop(region, None) is not None

    def clear(self) -> None:
        """Clear all stored regions (primarily for testing)."""
        with self._lock.write():
            if self._configs is not None:
                self._configs.clear()


# Global registry instance shared by the whole process
_default_registry = RegionRegistry()


def get_default_registry() -> RegionRegistry:
    """Get the default global registry instance."""
    return _default_registry


def create_registry() -> RegionRegistry:
    """Create a new isolated registry instance (for testing)."""
    return RegionRegistry()


def load_config(
    region_code: str,
    registry: RegionRegistry | None = None,
    **kwargs,
) -> RegionConfig:
    """Load a region into the given (or default) registry and return a snapshot."""
    return (registry or _default_registry).load(region_code, **kwargs)


def get_config(region_code: str, registry: RegionRegistry | None = None) -> RegionConfig:
    """Return a snapshot of a region from the given (or default) registry."""
    return (registry or _default_registry).get(region_code)


def upsert_config(
    region_code: str, config: RegionConfig, registry: RegionRegistry | None = None
) -> bool:
    """Store a region's configuration in the given (or default) registry."""
    return (registry or _default_registry).upsert(region_code, config)
