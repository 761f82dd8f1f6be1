"""Core data models for urlvariants.

This module defines the data structures passed between the locale detector,
translation matcher, grouper and scorer, plus the loaded configuration.
"""

from dataclasses import dataclass, field
from typing import Optional

from urlvariants.core.constants import (
    DEFAULT_LOCALE,
    DEFAULT_PRIORITY,
    DEFAULTS,
    LocaleSignal,
)


# ============================================================================
# Detection Models
# ============================================================================

@dataclass(frozen=True)
class LocaleToken:
    """A URL together with the locale marker found in it.

    The base URL is the original URL with the locale component removed, so
    every locale variant of one page shares (roughly) the same base URL.
    """
    original_url: str
    base_url: str                           # URL without locale component
    locale: str = ""                        # Detected code, "" if none
    signal: LocaleSignal = LocaleSignal.NONE
    position: Optional[int] = None          # Path segment index (path signal only)

    @property
    def has_locale(self) -> bool:
        """Check if a locale marker was detected."""
        return self.signal is not LocaleSignal.NONE

    @property
    def locale_key(self) -> str:
        """Locale used for grouping, "default" when none was detected."""
        return self.locale or DEFAULT_LOCALE

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        return {
            "url": self.original_url,
            "base_url": self.base_url,
            "locale": self.locale,
            "signal": self.signal.value,
            "position": self.position,
        }


@dataclass(frozen=True)
class TranslationGroup:
    """One concept and its known spellings across languages."""
    canonical: str
    variants: tuple[str, ...]


# ============================================================================
# Grouping Models
# ============================================================================

@dataclass
class LocaleGroup:
    """URLs sharing one group key, at most one per locale.

    Tokens are stored in insertion order, which is also the fallback order
    used when no listed or default locale is present.
    """
    key: str
    priority: list[str]
    urls: dict[str, LocaleToken] = field(default_factory=dict)
    best: Optional[LocaleToken] = None
    occurrences: int = 0                    # All URLs routed here, stored or not

    def add(self, token: LocaleToken) -> bool:
        """Store a token unless its locale is already present.

        Args:
            token: Detected URL to store

        Returns:
            True if the token was stored, False if it was discarded
        """
        self.occurrences += 1
        if token.locale_key in self.urls:
            return False
        self.urls[token.locale_key] = token
        return True

    def update_best(self) -> None:
        """Select the best URL by locale priority."""
        for locale in self.priority:
            if locale in self.urls:
                self.best = self.urls[locale]
                return

        if DEFAULT_LOCALE in self.urls:
            self.best = self.urls[DEFAULT_LOCALE]
            return

        self.best = next(iter(self.urls.values()), None)

    @property
    def locales(self) -> list[str]:
        """Stored locale keys in insertion order."""
        return list(self.urls)

    def __len__(self) -> int:
        return len(self.urls)


@dataclass(frozen=True)
class Score:
    """Breakdown of a URL's ranking score."""
    url: str
    locale_score: int
    completeness_score: int
    first_seen_bonus: int

    @property
    def total_score(self) -> int:
        return self.locale_score + self.completeness_score + self.first_seen_bonus


@dataclass
class DedupEntry:
    """Representative URL of a group with its occurrence count."""
    url: str
    count: int
    locale: str
    variants: int                           # Distinct locales stored in the group
    key: str

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "count": self.count,
            "locale": self.locale,
            "variants": self.variants,
            "key": self.key,
        }


# ============================================================================
# Configuration Model
# ============================================================================

@dataclass
class LocaleConfig:
    """Settings loaded from the YAML configuration file."""
    priority: list[str] = field(default_factory=lambda: list(DEFAULT_PRIORITY))
    use_scorer: bool = DEFAULTS["use_scorer"]
    output_format: str = DEFAULTS["output_format"]
