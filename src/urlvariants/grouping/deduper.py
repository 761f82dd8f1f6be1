"""Locale-aware URL deduplication.

This module collapses locale variants of the same page into one entry per
group, keeping occurrence counts and run statistics. Invalid URLs are
skipped in batch mode rather than aborting the whole run.
"""

import logging
from typing import Iterable, Optional

from urlvariants.core.exceptions import URLParseError
from urlvariants.core.models import DedupEntry, LocaleGroup
from urlvariants.core.stats import RunStatistics
from urlvariants.grouping.grouper import LocaleGrouper
from urlvariants.grouping.scorer import LocaleScorer


logger = logging.getLogger(__name__)


class LocaleDeduper:
    """Deduplicate URLs across locale variants.

    Example:
        >>> deduper = LocaleDeduper(["en"])
        >>> deduper.deduplicate([
        ...     "https://example.com/es/productos",
        ...     "https://example.com/en/products",
        ... ])
        ['https://example.com/en/products']
    """

    def __init__(
        self,
        priority: Optional[Iterable[str]] = None,
        *,
        grouper: Optional[LocaleGrouper] = None,
        stats: Optional[RunStatistics] = None,
    ):
        """Initialize LocaleDeduper.

        Args:
            priority: Locale codes, most preferred first. Ignored when a
                grouper is given
            grouper: LocaleGrouper instance (creates default if None)
            stats: RunStatistics to update (creates new if None)
        """
        self.grouper = grouper if grouper is not None else LocaleGrouper(priority)
        self.stats = stats if stats is not None else RunStatistics()

    @property
    def priority(self) -> list[str]:
        return self.grouper.priority

    def add(self, url: str) -> LocaleGroup:
        """Add a single URL.

        Args:
            url: URL to add

        Returns:
            The LocaleGroup the URL was routed to

        Raises:
            URLParseError: If the URL cannot be parsed
        """
        token = self.grouper.detector.detect(url)
        group, stored = self.grouper.add_token(token)

        self.stats.record(token, stored)
        self.stats.groups = len(self.grouper)
        return group

    def add_all(self, urls: Iterable[str]) -> int:
        """Add URLs, skipping the ones that fail to parse.

        Args:
            urls: URLs to add

        Returns:
            Number of URLs that were skipped
        """
        skipped = 0
        for url in urls:
            try:
                self.add(url)
            except URLParseError as e:
                skipped += 1
                self.stats.record_error()
                logger.warning(f"Skipping invalid URL: {e}")
        return skipped

    def deduplicate(
        self,
        urls: Iterable[str],
        *,
        scorer: Optional[LocaleScorer] = None,
    ) -> list[str]:
        """Deduplicate URLs across locale variants.

        Args:
            urls: URLs to deduplicate
            scorer: Optional LocaleScorer used to pick each representative

        Returns:
            Original form of the best URL of every group, in first-seen order
        """
        self.add_all(urls)
        return [entry.url for entry in self.get_entries(scorer=scorer)]

    def get_entries(self, *, scorer: Optional[LocaleScorer] = None) -> list[DedupEntry]:
        """Get one entry per group.

        Args:
            scorer: Optional LocaleScorer used to pick each representative

        Returns:
            DedupEntry list in group creation order
        """
        entries = []
        for group in self.grouper.groups.values():
            best = scorer.get_best_from_group(group) if scorer else group.best
            if best is None:
                continue
            entries.append(DedupEntry(
                url=best.original_url,
                count=group.occurrences,
                locale=best.locale_key,
                variants=len(group),
                key=group.key,
            ))
        return entries

    def count(self) -> int:
        """Number of unique groups."""
        return len(self.grouper)
