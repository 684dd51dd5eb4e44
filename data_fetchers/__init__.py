# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Catalog fetchers for GIS Puller.

This package contains the region-agnostic catalog search pipeline and the
region-specific fetchers built on it.
"""

import logging

import httpx

from config.region_registry import RegionRegistry, get_default_registry
from data_fetchers.au import AustraliaCatalogFetcher
from data_fetchers.shared.catalog_search import (
    DEFAULT_TIMEOUT,
    CatalogSearchFetcher,
    fetch_and_match,
)

logger = logging.getLogger(__name__)

# Regions with a dedicated fetcher; any other region uses CatalogSearchFetcher
REGION_FETCHERS: dict[str, type[CatalogSearchFetcher]] = {
    AustraliaCatalogFetcher.region_code: AustraliaCatalogFetcher,
}


async def fetch_region_urls(
    region_code: str,
    registry: RegionRegistry | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
) -> list[str]:
    """
    Return the matching download URLs for a region.

    The region's configuration is loaded into the registry on first use and
    reused afterwards. The registry is only touched before the search starts.

    Args:
        region_code: ISO 3166-1 alpha-2 code, lowercase (e.g. 'au')
        registry: Registry to read from (default: process-wide registry)
        client: Shared httpx client (default: one private client per call)
        timeout: Bound on the network call

    Raises:
        InvalidRegionCodeError: If region_code is malformed
        ConfigurationError: If the region's configuration cannot be loaded
        CatalogFetchError: If the search fails
    """
    registry = registry or get_default_registry()
    if registry.is_loaded(region_code):
        config = registry.get(region_code)
    else:
        config = registry.load(region_code)

    fetcher_cls = REGION_FETCHERS.get(region_code, CatalogSearchFetcher)
    fetcher = fetcher_cls(config.fetcher_matcher)
    logger.debug(f"Fetching {region_code} with {fetcher_cls.__name__}")
    return await fetcher.fetch_matching_urls(client, timeout)


__all__ = [
    "AustraliaCatalogFetcher",
    "CatalogSearchFetcher",
    "REGION_FETCHERS",
    "fetch_and_match",
    "fetch_region_urls",
]
