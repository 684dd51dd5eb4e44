# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""Process-wide cache of compiled matcher patterns."""

import logging
import re
import threading

logger = logging.getLogger(__name__)


class PatternCache:
    """
    Compile-once cache keyed by exact pattern text.

    Entries are never replaced or removed. When several threads compile the
    same new pattern at once, the first insertion wins and every caller gets
    that same compiled object back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._patterns: dict[str, re.Pattern[str]] = {}

    def get(self, pattern: str) -> re.Pattern[str]:
        """
        Return the compiled form of pattern, compiling it on first use.

        Raises:
            re.error: If pattern is not a valid regular expression
        """
        compiled = self._patterns.get(pattern)
        if compiled is not None:
            return compiled

        candidate = re.compile(pattern)
        with self._lock:
            compiled = self._patterns.setdefault(pattern, candidate)
        if compiled is candidate:
            logger.debug(f"Compiled matcher pattern {pattern!r}")
        return compiled

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)


_default_cache = PatternCache()


def get_default_cache() -> PatternCache:
    """Get the process-wide pattern cache."""
    return _default_cache


def compile_matcher(pattern: str) -> re.Pattern[str]:
    """Compile pattern through the process-wide cache."""
    return _default_cache.get(pattern)
