"""
Tests for configuration validation schemas and helpers.
"""

import pytest
from pydantic import ValidationError

from config.validation import (
    MatcherConfig,
    RegionConfig,
    generate_config_template,
    validate_region_config,
)


def test_generate_config_template_and_validate_roundtrip():
    """Template produced by a helper should validate as a full schema."""
    template = generate_config_template("AU", "data.gov.au")

    schema = validate_region_config(template)

    assert isinstance(schema, RegionConfig)
    assert schema.fetcher_matcher.catalog == "data.gov.au"
    assert schema.fetcher_matcher.rest_url == "https://data.gov.au/api/v0/search/datasets"
    assert schema.fetcher_matcher.matcher == r"\.zip$"
    assert schema.fetcher_matcher.query is None


def test_generate_config_template_defaults_catalog_from_region():
    """Catalog label defaults to data.gov.<code>."""
    template = generate_config_template("NZ")

    assert template["fetcher_matcher"]["catalog"] == "data.gov.nz"


def test_matcher_config_optional_fields_default_to_none():
    """Only the catalog label is required."""
    config = MatcherConfig(catalog="data.gov.au")

    assert config.rest_url is None
    assert config.query is None
    assert config.matcher is None


def test_matcher_config_requires_non_empty_catalog():
    """MatcherConfig rejects an empty catalog label."""
    with pytest.raises(ValidationError):
        MatcherConfig(catalog="")


@pytest.mark.parametrize("field", ["catalog", "query", "matcher"])
def test_matcher_config_rejects_control_characters(field):
    """Free-text fields must not carry control characters."""
    values = {"catalog": "data.gov.au", field: "bad\x07value"}

    with pytest.raises(ValidationError) as exc:
        MatcherConfig(**values)

    assert "control characters" in str(exc.value)


@pytest.mark.parametrize("url", ["not a url", "ftp://example.test/search", "/api/search"])
def test_matcher_config_rejects_invalid_rest_url(url):
    """rest_url must be an absolute http(s) URL."""
    with pytest.raises(ValidationError) as exc:
        MatcherConfig(catalog="data.gov.au", rest_url=url)

    assert "rest_url must be a valid http(s) URL" in str(exc.value)


def test_matcher_config_rejects_uncompilable_matcher():
    """matcher must compile as a regular expression."""
    with pytest.raises(ValidationError) as exc:
        MatcherConfig(catalog="data.gov.au", matcher="([unclosed")

    assert "valid regular expression" in str(exc.value)


def test_matcher_config_rejects_unknown_keys():
    """Typos inside fetcher_matcher are not silently dropped."""
    with pytest.raises(ValidationError):
        MatcherConfig(catalog="data.gov.au", querry="roads")


def test_region_config_ignores_unknown_top_level_keys():
    """Unrelated top-level keys (e.g. from env overrides) are ignored."""
    template = generate_config_template("au")
    template["unrelated"] = "value"

    schema = validate_region_config(template)

    assert not hasattr(schema, "unrelated")


def test_region_config_is_frozen():
    """Snapshots cannot be mutated in place."""
    schema = validate_region_config(generate_config_template("au"))

    with pytest.raises(ValidationError):
        schema.fetcher_matcher.query = "changed"  # type: ignore[misc]


def test_region_config_requires_fetcher_matcher():
    """The fetcher_matcher section is mandatory."""
    with pytest.raises(ValidationError):
        validate_region_config({})
