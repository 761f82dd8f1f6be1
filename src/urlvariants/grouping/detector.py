"""Locale detection in URLs.

This module finds language markers in URLs and strips them to produce a
locale-independent base URL. Three placements are recognized, checked in
strict priority order:
- Subdomain: https://es.example.com/about
- Path segment: https://example.com/es/about or /content/es/about
- Query parameter: https://example.com/about?lang=es

Only the first placement that matches is reported.
"""

import logging
import re
from dataclasses import dataclass
from typing import AbstractSet, Callable, Optional
from urllib.parse import SplitResult, parse_qsl, unquote, urlencode, urlsplit, urlunsplit

from urlvariants.core.constants import (
    EXTENDED_LOCALE_PATTERN,
    LOCALE_CODES,
    LOCALE_QUERY_PARAMS,
    PATH_FALSE_POSITIVES,
    TECH_PATH_PREFIXES,
    LocaleSignal,
)
from urlvariants.core.exceptions import URLParseError
from urlvariants.core.models import LocaleToken


logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_locale_code(code: str, locale_codes: AbstractSet[str] = LOCALE_CODES) -> bool:
    """Check if a string is a two-letter or language-region locale code."""
    code = code.lower()
    return code in locale_codes or bool(EXTENDED_LOCALE_PATTERN.match(code))


def parse_url(raw_url: str) -> SplitResult:
    """Split a URL, rejecting syntax that cannot be parsed.

    Args:
        raw_url: URL to split

    Returns:
        SplitResult of the URL

    Raises:
        URLParseError: If the URL is not a string, contains control
            characters, malformed percent escapes (host, path or fragment)
            or an invalid host/port
    """
    if not isinstance(raw_url, str):
        raise URLParseError(f"Invalid URL: {raw_url!r}")

    if _CONTROL_CHARS.search(raw_url):
        raise URLParseError(f"Invalid control character in URL: {raw_url!r}")

    try:
        parsed = urlsplit(raw_url)
        parsed.port  # raises on a non-numeric or out of range port
    except ValueError as e:
        raise URLParseError(f"Failed to parse URL '{raw_url}': {e}") from e

    if any(_BAD_ESCAPE.search(part) for part in (parsed.netloc, parsed.path, parsed.fragment)):
        raise URLParseError(f"Invalid percent escape in URL: {raw_url!r}")

    return parsed


def _split_host(netloc: str) -> tuple[str, str]:
    """Separate user info from host[:port]."""
    userinfo, sep, host = netloc.rpartition("@")
    return userinfo + sep, host


# ============================================================================
# Path False-Positive Guards
# ============================================================================

@dataclass(frozen=True)
class PathGuard:
    """Named check that rejects a path segment as locale.

    The predicate receives the lowercased candidate segment, its index and
    all non-empty path segments, and returns True to reject.
    """
    name: str
    rejects: Callable[[str, int, list[str]], bool]


def _is_common_word(segment: str, position: int, segments: list[str]) -> bool:
    return segment in PATH_FALSE_POSITIVES


def _is_tech_it(segment: str, position: int, segments: list[str]) -> bool:
    return segment == "it" and position > 0 and segments[0] in TECH_PATH_PREFIXES


def _is_short_api_path(segment: str, position: int, segments: list[str]) -> bool:
    return position > 0 and segments[0] == "api" and len(segments) < 3


PATH_GUARDS: tuple[PathGuard, ...] = (
    PathGuard("common_word", _is_common_word),
    PathGuard("tech_it", _is_tech_it),
    PathGuard("short_api_path", _is_short_api_path),
)


# ============================================================================
# Detector
# ============================================================================

class LocaleDetector:
    """Detect and strip locale markers from URLs.

    The detector only holds immutable reference data, so one instance can be
    shared by any number of groupers and threads.
    """

    def __init__(
        self,
        *,
        locale_codes: AbstractSet[str] = LOCALE_CODES,
        query_params: tuple[str, ...] = LOCALE_QUERY_PARAMS,
        path_guards: tuple[PathGuard, ...] = PATH_GUARDS,
    ):
        """Initialize LocaleDetector.

        Args:
            locale_codes: Two-letter language codes to recognize
            query_params: Query parameter names carrying a locale, in order
            path_guards: Ordered false-positive checks for path segments
        """
        self.locale_codes = frozenset(locale_codes)
        self.query_params = tuple(query_params)
        self.path_guards = tuple(path_guards)

    def is_locale_code(self, code: str) -> bool:
        """Check if a string is a locale code known to this detector."""
        return is_locale_code(code, self.locale_codes)

    def detect(self, url: str) -> LocaleToken:
        """Detect the locale marker in a URL.

        Args:
            url: URL to analyze

        Returns:
            LocaleToken with the locale, where it was found and the base URL

        Raises:
            URLParseError: If the URL cannot be parsed
        """
        parsed = parse_url(url)

        locale = self._detect_subdomain(parsed.netloc)
        if locale:
            return LocaleToken(
                original_url=url,
                base_url=self._remove_subdomain(parsed),
                locale=locale,
                signal=LocaleSignal.SUBDOMAIN,
            )

        locale, position = self._detect_path(parsed.path)
        if locale:
            return LocaleToken(
                original_url=url,
                base_url=self._remove_path_segment(parsed, position),
                locale=locale,
                signal=LocaleSignal.PATH,
                position=position,
            )

        locale = self._detect_query(parsed.query)
        if locale:
            return LocaleToken(
                original_url=url,
                base_url=self._remove_query_locale(parsed, locale),
                locale=locale,
                signal=LocaleSignal.QUERY,
            )

        return LocaleToken(original_url=url, base_url=url)

    # ------------------------------------------------------------------------
    # Subdomain
    # ------------------------------------------------------------------------

    def _detect_subdomain(self, netloc: str) -> str:
        _, host = _split_host(netloc)
        labels = host.split(".")
        if len(labels) < 2:
            return ""

        first = labels[0].lower()
        return first if self.is_locale_code(first) else ""

    def _remove_subdomain(self, parsed: SplitResult) -> str:
        userinfo, host = _split_host(parsed.netloc)
        new_host = host.split(".", 1)[1]
        return urlunsplit(parsed._replace(netloc=userinfo + new_host))

    # ------------------------------------------------------------------------
    # Path
    # ------------------------------------------------------------------------

    def _detect_path(self, path: str) -> tuple[str, Optional[int]]:
        # Decoded so that /%65n/ reads as /en/; positions match the raw split
        segments = [unquote(segment) for segment in path.split("/") if segment]

        # Second position covers /content/en/page style layouts
        for position in range(min(2, len(segments))):
            locale = self._validate_path_segment(segments[position], position, segments)
            if locale:
                return locale, position

        return "", None

    def _validate_path_segment(
        self,
        segment: str,
        position: int,
        segments: list[str],
    ) -> str:
        segment = segment.lower()
        if not self.is_locale_code(segment):
            return ""

        for guard in self.path_guards:
            if guard.rejects(segment, position, segments):
                logger.debug(
                    f"Rejected path segment '{segment}' at {position}: {guard.name}"
                )
                return ""

        return segment

    def _remove_path_segment(self, parsed: SplitResult, position: int) -> str:
        segments = [segment for segment in parsed.path.split("/") if segment]
        del segments[position]
        new_path = "/" + "/".join(segments)
        return urlunsplit(parsed._replace(path=new_path))

    # ------------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------------

    def _first_values(self, query: str) -> dict[str, str]:
        values: dict[str, str] = {}
        for name, value in parse_qsl(query, keep_blank_values=True):
            values.setdefault(name, value)
        return values

    def _detect_query(self, query: str) -> str:
        if not query:
            return ""

        values = self._first_values(query)
        for param in self.query_params:
            value = values.get(param, "")
            if value and self.is_locale_code(value):
                return value.lower()

        return ""

    def _remove_query_locale(self, parsed: SplitResult, locale: str) -> str:
        values = self._first_values(parsed.query)
        dropped = {
            param for param in self.query_params
            if values.get(param, "").lower() == locale
        }

        kept = [
            (name, value)
            for name, value in parse_qsl(parsed.query, keep_blank_values=True)
            if name not in dropped
        ]
        kept.sort(key=lambda pair: pair[0])

        return urlunsplit(parsed._replace(query=urlencode(kept)))
