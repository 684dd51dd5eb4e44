# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Shared catalog fetchers that are reusable across multiple regions.

These fetchers are region-agnostic and configured via region configuration files.
"""

from data_fetchers.shared.catalog_search import CatalogSearchFetcher, fetch_and_match
from data_fetchers.shared.patterns import PatternCache, compile_matcher

__all__ = ["CatalogSearchFetcher", "PatternCache", "compile_matcher", "fetch_and_match"]
