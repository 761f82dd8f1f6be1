"""Grouping of locale variants of the same resource.

URLs are clustered by a structural key (host, translation-aware path and
query parameter names) computed from their locale-free base URL. Each group
keeps one URL per locale and tracks the best representative according to a
caller-supplied locale priority.
"""

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional
from urllib.parse import parse_qsl, urlsplit

from urlvariants.core.config import resolve_priority
from urlvariants.core.constants import SIMILARITY_THRESHOLD
from urlvariants.core.models import LocaleGroup, LocaleToken
from urlvariants.grouping.detector import LocaleDetector
from urlvariants.grouping.translations import TranslationMatcher

if TYPE_CHECKING:
    from urlvariants.grouping.scorer import LocaleScorer


logger = logging.getLogger(__name__)


def _normalize_host(netloc: str) -> str:
    host = netloc.rpartition("@")[2].lower()
    return host.removeprefix("www.")


class LocaleGrouper:
    """Group URLs that differ only in their locale marker.

    A grouper accumulates state for a single run and is not thread safe;
    concurrent producers must serialize calls to add().

    Example:
        >>> grouper = LocaleGrouper(["en"])
        >>> _ = grouper.add("https://example.com/es/sobre-nosotros")
        >>> _ = grouper.add("https://example.com/en/about")
        >>> [t.locale for t in grouper.get_best_urls()]
        ['en']
    """

    def __init__(
        self,
        priority: Optional[Iterable[str]] = None,
        *,
        detector: Optional[LocaleDetector] = None,
        matcher: Optional[TranslationMatcher] = None,
    ):
        """Initialize LocaleGrouper.

        Args:
            priority: Locale codes, most preferred first (defaults to ["en"])
            detector: LocaleDetector instance (creates default if None)
            matcher: TranslationMatcher instance (creates default if None)
        """
        self.priority = resolve_priority(priority)
        self.detector = detector or LocaleDetector()
        self.matcher = matcher or TranslationMatcher()
        self._groups: dict[str, LocaleGroup] = {}

    def add(self, url: str) -> LocaleGroup:
        """Add a URL to its group.

        Only the first URL seen for each locale is stored in a group; later
        ones are counted but discarded.

        Args:
            url: URL to add

        Returns:
            The LocaleGroup the URL was routed to

        Raises:
            URLParseError: If the URL cannot be parsed. Grouper state is left
                unchanged.
        """
        group, _ = self.add_token(self.detector.detect(url))
        return group

    def add_token(self, token: LocaleToken) -> tuple[LocaleGroup, bool]:
        """Add an already detected URL to its group.

        Args:
            token: Detection result from this grouper's detector

        Returns:
            Tuple of (group, stored) where stored is False if the group
            already held a URL for the token's locale
        """
        key = self.group_key(token)

        group = self._groups.get(key)
        if group is None:
            group = LocaleGroup(key=key, priority=self.priority)
            self._groups[key] = group

        stored = group.add(token)
        if not stored:
            logger.debug(
                f"Discarded repeat of locale '{token.locale_key}' in {key}: "
                f"{token.original_url}"
            )

        group.update_best()
        return group, stored

    def group_key(self, token: LocaleToken) -> str:
        """Build the grouping key for a detected URL.

        The key is the lowercased host without "www.", the path with every
        segment replaced by its canonical translation, and the sorted unique
        lowercase query parameter names.

        Args:
            token: Detected URL

        Returns:
            Group key string
        """
        try:
            parsed = urlsplit(token.base_url)
        except ValueError:
            return token.base_url

        key = _normalize_host(parsed.netloc) + self._normalize_path(parsed.path)

        if parsed.query:
            names = sorted({
                name.lower()
                for name, _ in parse_qsl(parsed.query, keep_blank_values=True)
            })
            if names:
                key += "?" + "&".join(names)

        return key

    def _normalize_path(self, path: str) -> str:
        if path in ("", "/"):
            return "/"

        segments = path.strip("/").split("/")
        return "/" + "/".join(
            self.matcher.get_canonical(segment.lower()) for segment in segments
        )

    def should_group(self, first_url: str, second_url: str) -> bool:
        """Check whether two URLs are locale variants of one resource.

        Stricter than key equality: the URLs must also share a host and path
        depth, and at least 70% of aligned path segments must be identical
        or translations of each other.

        Args:
            first_url: URL to compare
            second_url: URL to compare

        Returns:
            True if the URLs should be grouped together

        Raises:
            URLParseError: If either URL cannot be parsed
        """
        first = self.detector.detect(first_url)
        second = self.detector.detect(second_url)

        if self.group_key(first) != self.group_key(second):
            return False

        return self._validate_similarity(first, second)

    def _validate_similarity(self, first: LocaleToken, second: LocaleToken) -> bool:
        try:
            first_parsed = urlsplit(first.base_url)
            second_parsed = urlsplit(second.base_url)
        except ValueError:
            return False

        if _normalize_host(first_parsed.netloc) != _normalize_host(second_parsed.netloc):
            return False

        first_segments = first_parsed.path.strip("/").split("/")
        second_segments = second_parsed.path.strip("/").split("/")
        if len(first_segments) != len(second_segments):
            return False

        matches = sum(
            1
            for a, b in zip(first_segments, second_segments)
            if a == b or self.matcher.are_translations(a, b)
        )
        return matches >= len(first_segments) * SIMILARITY_THRESHOLD

    def get_best_urls(self, scorer: Optional["LocaleScorer"] = None) -> list[LocaleToken]:
        """Get the representative URL of every group.

        Args:
            scorer: Optional LocaleScorer; when given, each group's
                representative is chosen by score instead of plain priority

        Returns:
            One LocaleToken per group, in group creation order
        """
        best_urls = []
        for group in self._groups.values():
            best = scorer.get_best_from_group(group) if scorer else group.best
            if best is not None:
                best_urls.append(best)
        return best_urls

    @property
    def groups(self) -> Mapping[str, LocaleGroup]:
        """Read-only view of group key -> LocaleGroup."""
        return MappingProxyType(self._groups)

    def __len__(self) -> int:
        return len(self._groups)
