# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration management for GIS Puller.

This package handles layered per-region configuration and the registry
that serves validated snapshots of it. Region configuration files live in
per-region subdirectories next to this module (e.g. config/au/).
"""

from config.region_registry import (
    RegionRegistry,
    create_registry,
    get_config,
    get_default_registry,
    load_config,
    upsert_config,
)
from config.validation import MatcherConfig, RegionConfig

__all__ = [
    "MatcherConfig",
    "RegionConfig",
    "RegionRegistry",
    "create_registry",
    "get_config",
    "get_default_registry",
    "load_config",
    "upsert_config",
]
