# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""Custom exception hierarchy for GIS Puller."""

from typing import Any


class GisPullerError(Exception):
    """Base exception for all GIS Puller errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize GIS Puller error.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidRegionCodeError(GisPullerError):
    """Raised when a region code is not two alphanumeric characters."""

    def __init__(self, region_code: Any, operation: str):
        """
        Initialize invalid region code error.

        Args:
            region_code: The rejected value as supplied by the caller
            operation: Registry operation that rejected it (e.g. 'load')
        """
        message = (
            f"{operation}() region code must be two alphanumeric characters "
            f"(ISO 3166-1 alpha-2), got: {region_code!r}"
        )
        super().__init__(message, details={"region_code": region_code, "operation": operation})
        self.region_code = region_code
        self.operation = operation


class ConfigurationError(GisPullerError):
    """Raised when configuration is invalid or missing."""

    pass


class RegionNotLoadedError(ConfigurationError):
    """Raised when a region is looked up before it was loaded."""

    def __init__(self, region_code: str, available_regions: list[str]):
        """
        Initialize region not loaded error.

        Args:
            region_code: The region that has no entry
            available_regions: Regions currently held by the registry
        """
        message = (
            f"Region '{region_code}' has no loaded configuration.\n"
            f"Loaded regions: {', '.join(available_regions) or 'none'}"
        )
        super().__init__(message, details={"region_code": region_code})
        self.region_code = region_code
        self.available_regions = available_regions


class MatcherConfigError(ConfigurationError):
    """Raised when a matcher configuration cannot drive a catalog search."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        """
        Initialize matcher configuration error.

        Args:
            message: Error description
            missing_fields: Required fields that were not set
        """
        super().__init__(message, details={"missing_fields": missing_fields or []})
        self.missing_fields = missing_fields or []


class CatalogFetchError(GisPullerError):
    """Raised when querying a catalog fails."""

    pass


class CatalogTransportError(CatalogFetchError):
    """Raised when the catalog API cannot be reached or answers with an error."""

    def __init__(
        self, message: str, status_code: int | None = None, response_body: str | None = None
    ):
        """
        Initialize transport error.

        Args:
            message: Error description
            status_code: HTTP status code if available
            response_body: Raw response body for debugging
        """
        super().__init__(
            message, details={"status_code": status_code, "response_body": response_body}
        )
        self.status_code = status_code
        self.response_body = response_body


class CatalogDecodeError(CatalogFetchError):
    """Raised when a catalog response does not have the expected shape."""

    def __init__(self, message: str, response_body: str | None = None):
        super().__init__(message, details={"response_body": response_body})
        self.response_body = response_body
