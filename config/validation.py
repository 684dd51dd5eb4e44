# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration validation using Pydantic.

This module provides Pydantic models for validating merged region
configuration, ensuring all required fields are present and have valid values.
"""

import re
import unicodedata
from typing import Any

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationInfo,
    field_validator,
)

_http_url_adapter = TypeAdapter(AnyHttpUrl)


def _reject_control_characters(field_name: str, value: str) -> str:
    """Raise ValueError if the value contains any Unicode control character."""
    for ch in value:
        if unicodedata.category(ch) == "Cc":
            raise ValueError(f"{field_name} must not contain control characters, got: {value!r}")
    return value


class StrictBaseModel(BaseModel):
    """Base model with strict unknown-key handling, immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class MatcherConfig(StrictBaseModel):
    """Catalog search endpoint and the pattern used to pick download URLs."""

    catalog: str = Field(..., min_length=1, description="Catalog label, e.g. 'data.gov.au'")
    rest_url: str | None = Field(None, description="Search endpoint of the catalog REST API")
    query: str | None = Field(None, description="Value of the 'query' search parameter")
    matcher: str | None = Field(None, description="Regex selecting wanted download URLs")

    @field_validator("catalog", "query", "matcher")
    @classmethod
    def validate_no_control_characters(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Reject control characters in free-text fields."""
        if v is None:
            return v
        return _reject_control_characters(info.field_name, v)

    @field_validator("rest_url")
    @classmethod
    def validate_rest_url(cls, v: str | None) -> str | None:
        """Ensure the REST endpoint is an absolute http(s) URL."""
        if v is None:
            return v
        try:
            _http_url_adapter.validate_python(v)
        except ValueError as exc:
            raise ValueError(f"rest_url must be a valid http(s) URL, got: {v}") from exc
        return v

    @field_validator("matcher")
    @classmethod
    def validate_matcher_compiles(cls, v: str | None) -> str | None:
        """Ensure the matcher is a usable regular expression."""
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"matcher must be a valid regular expression: {exc}") from exc
        return v


class RegionConfig(BaseModel):
    """
    Complete region configuration schema.

    Only the fetcher_matcher section is defined today; other top-level keys
    are ignored because environment overrides share the region prefix with
    unrelated variables.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        json_schema_extra={
            "example": {
                "fetcher_matcher": {
                    "catalog": "data.gov.au",
                    "rest_url": "https://data.gov.au/api/v0/search/datasets",
                    "query": "geoscape",
                    "matcher": r"\.zip$",
                },
            }
        },
    )

    fetcher_matcher: MatcherConfig


def validate_region_config(config_dict: dict[str, Any]) -> RegionConfig:
    """
    Validate a merged region configuration dictionary.

    Args:
        config_dict: Dictionary containing region configuration

    Returns:
        Validated RegionConfig instance

    Raises:
        ValidationError: If configuration is invalid
    """
    return RegionConfig(**config_dict)


def generate_config_template(region_code: str, catalog: str | None = None) -> dict[str, Any]:
    """
    Generate a template configuration dictionary for a new region.

    Args:
        region_code: ISO 3166-1 alpha-2 code
        catalog: Catalog label (defaults to 'data.gov.<code>')

    Returns:
        Dictionary with template configuration
    """
    code = region_code.lower()
    host = catalog or f"data.gov.{code}"
    return {
        "fetcher_matcher": {
            "catalog": host,
            "rest_url": f"https://{host}/api/v0/search/datasets",
            "query": None,
            "matcher": r"\.zip$",
        },
    }
