"""Score-based ranking of locale variants.

An alternative to the plain priority lookup done by LocaleGrouper: the
score adds a small completeness component and a first-seen bonus on top of
the locale preference, so that among equally preferred variants the richer
or earlier one wins.
"""

from typing import Iterable, Optional
from urllib.parse import parse_qsl, urlsplit

from urlvariants.core.config import resolve_priority
from urlvariants.core.constants import (
    DEFAULT_LOCALE,
    SCORE_COMPLETENESS_CAP,
    SCORE_DEFAULT_LOCALE,
    SCORE_FIRST_SEEN_BONUS,
    SCORE_PRIORITY_BASE,
    SCORE_PRIORITY_STEP,
    SCORE_UNLISTED_LOCALE,
)
from urlvariants.core.models import LocaleGroup, LocaleToken, Score


class LocaleScorer:
    """Assign numeric scores to detected URLs.

    Scoring:
    - Locale: 100 + (N - i) * 10 for the i-th of N listed locales, 50 for
      "default", 25 for any other locale
    - Completeness: 2 per unique query parameter name plus 1 per path
      segment, capped at 20
    - First seen: 10 bonus
    """

    def __init__(self, priority: Optional[Iterable[str]] = None):
        """Initialize LocaleScorer.

        Args:
            priority: Locale codes, most preferred first (defaults to ["en"])
        """
        self.priority = resolve_priority(priority)
        self._locale_scores = {DEFAULT_LOCALE: SCORE_DEFAULT_LOCALE}

        count = len(self.priority)
        for index, locale in enumerate(self.priority):
            self._locale_scores[locale] = (
                SCORE_PRIORITY_BASE + (count - index) * SCORE_PRIORITY_STEP
            )

    def locale_score(self, locale: str) -> int:
        """Score of a locale code ("" counts as "default")."""
        return self._locale_scores.get(locale or DEFAULT_LOCALE, SCORE_UNLISTED_LOCALE)

    def score(self, token: LocaleToken, is_first_seen: bool = False) -> Score:
        """Calculate the score of a detected URL.

        Args:
            token: Detected URL
            is_first_seen: Whether the URL was the first of its group

        Returns:
            Score breakdown
        """
        return Score(
            url=token.original_url,
            locale_score=self.locale_score(token.locale),
            completeness_score=self._completeness(token.original_url),
            first_seen_bonus=SCORE_FIRST_SEEN_BONUS if is_first_seen else 0,
        )

    def _completeness(self, url: str) -> int:
        try:
            parsed = urlsplit(url)
        except ValueError:
            return 0

        param_names = {name for name, _ in parse_qsl(parsed.query, keep_blank_values=True)}
        segments = [segment for segment in parsed.path.split("/") if segment]

        return min(len(param_names) * 2 + len(segments), SCORE_COMPLETENESS_CAP)

    def compare_priority(self, first: str, second: str) -> int:
        """Compare two locales by preference.

        Returns:
            -1 if first ranks higher, 1 if second ranks higher, 0 if equal
        """
        first_score = self.locale_score(first)
        second_score = self.locale_score(second)

        if first_score > second_score:
            return -1
        if first_score < second_score:
            return 1
        return 0

    def get_best_from_group(self, group: LocaleGroup) -> Optional[LocaleToken]:
        """Select the highest scoring URL of a group.

        The first stored URL receives the first-seen bonus. Ties keep the
        earlier stored URL.

        Args:
            group: Group to rank

        Returns:
            Best LocaleToken, or None for an empty group
        """
        best: Optional[LocaleToken] = None
        best_total = 0

        for index, token in enumerate(group.urls.values()):
            total = self.score(token, is_first_seen=index == 0).total_score
            if best is None or total > best_total:
                best = token
                best_total = total

        return best
