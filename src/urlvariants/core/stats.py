"""Run statistics for locale grouping."""

from dataclasses import dataclass, field

from urlvariants.core.constants import LocaleSignal
from urlvariants.core.models import LocaleToken


@dataclass
class RunStatistics:
    """Counters collected while feeding URLs into a grouper."""
    total_urls: int = 0
    parse_errors: int = 0
    groups: int = 0
    discarded_variants: int = 0
    signals: dict[str, int] = field(
        default_factory=lambda: {signal.value: 0 for signal in LocaleSignal}
    )
    locales: dict[str, int] = field(default_factory=dict)

    def record(self, token: LocaleToken, stored: bool) -> None:
        """Record one successfully detected URL.

        Args:
            token: Detection result
            stored: Whether the grouper stored the token or discarded it as
                a repeat of a locale already present in its group
        """
        self.total_urls += 1
        self.signals[token.signal.value] += 1
        if token.locale:
            self.locales[token.locale] = self.locales.get(token.locale, 0) + 1
        if not stored:
            self.discarded_variants += 1

    def record_error(self) -> None:
        """Record a line that failed to parse."""
        self.total_urls += 1
        self.parse_errors += 1

    @property
    def localized_urls(self) -> int:
        """Number of URLs carrying any locale marker."""
        return self.total_urls - self.parse_errors - self.signals[LocaleSignal.NONE.value]

    def top_locales(self, n: int = 10) -> list[tuple[str, int]]:
        """Most frequent locales, ties broken alphabetically."""
        return sorted(self.locales.items(), key=lambda kv: (-kv[1], kv[0]))[:n]

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        return {
            "total_urls": self.total_urls,
            "parse_errors": self.parse_errors,
            "groups": self.groups,
            "discarded_variants": self.discarded_variants,
            "localized_urls": self.localized_urls,
            "signals": dict(self.signals),
            "locales": dict(self.locales),
        }
