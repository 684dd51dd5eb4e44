# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Australian (AU) catalog fetcher.

Geoscape datasets are published on data.gov.au, whose dataset search API
answers with the distributions shape understood by CatalogSearchFetcher.
"""

import logging

from config.region_registry import RegionRegistry, get_default_registry
from data_fetchers.shared.catalog_search import CatalogSearchFetcher
from data_fetchers.shared.patterns import PatternCache

logger = logging.getLogger(__name__)

REGION_CODE = "au"


class AustraliaCatalogFetcher(CatalogSearchFetcher):
    """data.gov.au search bound to the 'au' region configuration."""

    region_code = REGION_CODE

    @classmethod
    def from_registry(
        cls, registry: RegionRegistry | None = None, pattern_cache: PatternCache | None = None
    ) -> "AustraliaCatalogFetcher":
        """
        Build the fetcher from the registry's 'au' snapshot.

        Raises:
            RegionNotLoadedError: If 'au' has not been loaded into the registry
            MatcherConfigError: If the snapshot cannot drive a search
        """
        config = (registry or get_default_registry()).get(cls.region_code)
        logger.debug(f"Using {config.fetcher_matcher.catalog} configuration for AU")
        return cls(config.fetcher_matcher, pattern_cache)


__all__ = ["AustraliaCatalogFetcher", "REGION_CODE"]
