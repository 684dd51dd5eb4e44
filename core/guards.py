# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Input guards for registry operations.
"""

import logging
from typing import Any

from core.exceptions import InvalidRegionCodeError
from core.types import RegionCode

logger = logging.getLogger(__name__)

REGION_CODE_LENGTH = 2


def is_valid_region_code(region_code: Any) -> bool:
    """Check the two-alphanumeric-character shape without raising."""
    return (
        isinstance(region_code, str)
        and len(region_code) == REGION_CODE_LENGTH
        and all(ch.isalnum() for ch in region_code)
    )


def validate_region_code(region_code: Any, operation: str) -> RegionCode:
    """
    Validate a caller-supplied region code.

    Region codes follow ISO 3166-1 alpha-2 but are written lowercase, e.g. 'au'.
    Any two alphanumeric characters are accepted since there is no way to know
    which regions will have configuration.

    Args:
        region_code: Value supplied by the caller
        operation: Name of the calling operation, used in the error message

    Returns:
        The region code, typed as RegionCode

    Raises:
        InvalidRegionCodeError: If the value is not two alphanumeric characters
    """
    if not is_valid_region_code(region_code):
        logger.debug(f"Guard: rejected region code {region_code!r} in {operation}()")
        raise InvalidRegionCodeError(region_code, operation)
    return RegionCode(region_code)
