# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Core modules for GIS Puller.

This package contains the error taxonomy, input guards and locking
primitives used throughout the GIS Puller system.
"""

from core.exceptions import (
    CatalogDecodeError,
    CatalogFetchError,
    CatalogTransportError,
    ConfigurationError,
    GisPullerError,
    InvalidRegionCodeError,
    MatcherConfigError,
    RegionNotLoadedError,
)
from core.locks import ReadWriteLock

__all__ = [
    "CatalogDecodeError",
    "CatalogFetchError",
    "CatalogTransportError",
    "ConfigurationError",
    "GisPullerError",
    "InvalidRegionCodeError",
    "MatcherConfigError",
    "ReadWriteLock",
    "RegionNotLoadedError",
]
