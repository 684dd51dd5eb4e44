# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""Type definitions for GIS Puller."""

from typing import NewType

# Semantic types
RegionCode = NewType("RegionCode", str)  # ISO 3166-1 alpha-2, lowercase
RunMode = NewType("RunMode", str)  # e.g. development, production
