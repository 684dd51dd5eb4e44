# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""
Generic open-data catalog search fetcher.

This fetcher is reusable across all regions whose catalog exposes a dataset
search endpoint answering with distributions (e.g. data.gov.au). It's
region-agnostic and configured via the fetcher_matcher section of the region
configuration.
"""

import logging
import re
from collections.abc import Iterator

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from config.validation import MatcherConfig
from core.exceptions import (
    CatalogDecodeError,
    CatalogTransportError,
    MatcherConfigError,
)
from data_fetchers.shared.patterns import PatternCache, get_default_cache

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
REQUIRED_FIELDS = ("rest_url", "query", "matcher")


class Distribution(BaseModel):
    """One downloadable resource of a dataset."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    identifier: str
    downloadURL: str
    modified: str | None = None
    mediaType: str | None = None

    def matches(self, pattern: re.Pattern[str]) -> bool:
        """Whether the pattern occurs anywhere in the download URL."""
        return pattern.search(self.downloadURL) is not None


class DataSet(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    distributions: list[Distribution]


class SearchResult(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    dataSets: list[DataSet]

    def iter_distributions(self) -> Iterator[Distribution]:
        """Yield distributions in data-set order, then in-set order."""
        for data_set in self.dataSets:
            yield from data_set.distributions


def decode_search_result(body: bytes | str) -> SearchResult:
    """
    Decode a catalog search response body.

    Raises:
        CatalogDecodeError: If the body is not JSON or lacks the expected shape
    """
    try:
        return SearchResult.model_validate_json(body)
    except ValidationError as e:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        raise CatalogDecodeError(
            f"Invalid catalog search response: {e.error_count()} error(s), "
            f"first: {e.errors()[0]['msg']}",
            response_body=text,
        ) from e


class CatalogSearchFetcher:
    """
    Query a catalog search API and keep download URLs matching a pattern.

    One GET per call: rest_url?query=<query>. The result is every
    distribution's downloadURL that the matcher finds a match in, in the
    order the catalog returned them.
    """

    def __init__(self, config: MatcherConfig, pattern_cache: PatternCache | None = None):
        """
        Initialise catalog search fetcher.

        Args:
            config: MatcherConfig with rest_url, query and matcher set
            pattern_cache: Cache for compiled matchers (default: process-wide cache)

        Raises:
            MatcherConfigError: If a required field is missing or the matcher
                does not compile
        """
        missing = [name for name in REQUIRED_FIELDS if getattr(config, name) is None]
        if missing:
            raise MatcherConfigError(
                f"Matcher configuration for '{config.catalog}' is missing: {', '.join(missing)}",
                missing_fields=missing,
            )

        self.catalog = config.catalog
        self.rest_url: str = config.rest_url  # type: ignore[assignment]
        self.query: str = config.query  # type: ignore[assignment]
        cache = pattern_cache or get_default_cache()

        try:
            self.pattern = cache.get(config.matcher)  # type: ignore[arg-type]
        except re.error as e:
            raise MatcherConfigError(
                f"Matcher for '{config.catalog}' is not a valid regular expression: {e}"
            ) from e

        logger.debug(f"Initialized CatalogSearchFetcher for {self.catalog} at {self.rest_url}")

    async def fetch_matching_urls(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> list[str]:
        """
        Search the catalog and return matching download URLs.

        Args:
            client: Shared client to send the request with; its own redirect
                policy applies. When omitted, a private client that follows
                redirects is opened and closed
            timeout: Bound on the network call, seconds or httpx.Timeout

        Returns:
            Matching download URLs in catalog order (possibly empty)

        Raises:
            CatalogTransportError: If the request fails or returns a non-2xx status
            CatalogDecodeError: If the response body has an unexpected shape
        """
        logger.info(f"Searching {self.catalog} for {self.query!r}")

        if client is None:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                body = await self._search(own_client, timeout)
        else:
            body = await self._search(client, timeout)

        result = decode_search_result(body)
        urls = [
            dist.downloadURL
            for dist in result.iter_distributions()
            if dist.matches(self.pattern)
        ]

        logger.info(f"Matched {len(urls)} download URL(s) from {self.catalog}")
        return urls

    async def _search(self, client: httpx.AsyncClient, timeout: float | httpx.Timeout) -> bytes:
        """
        Send the search request and return the raw body.

        Raises:
            CatalogTransportError: If HTTP request fails
        """
        try:
            response = await client.get(
                self.rest_url, params={"query": self.query}, timeout=timeout
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogTransportError(
                f"{self.catalog} search API error: {e.response.status_code}",
                status_code=e.response.status_code,
                response_body=e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise CatalogTransportError(f"Connection error to {self.catalog}: {str(e)}") from e

        return response.content


async def fetch_and_match(
    config: MatcherConfig,
    client: httpx.AsyncClient | None = None,
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
) -> list[str]:
    """
    Query the catalog described by config and return matching download URLs.

    Example:
        >>> au = get_config("au")
        >>> urls = await fetch_and_match(au.fetcher_matcher)
    """
    return await CatalogSearchFetcher(config).fetch_matching_urls(client, timeout)
