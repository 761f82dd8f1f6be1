"""Locale detection, translation matching, grouping and scoring.

This package provides the locale-aware URL grouping engine:
- LocaleDetector: Find and strip locale markers in URLs
- TranslationMatcher: Match translated path segments
- LocaleGrouper: Group locale variants and select the best URL
- LocaleScorer: Score-based ranking of variants
- LocaleDeduper: Deduplicate URL lists with counts and statistics
"""

from urlvariants.grouping.detector import LocaleDetector, PathGuard, is_locale_code
from urlvariants.grouping.translations import TranslationMatcher, normalize_segment
from urlvariants.grouping.grouper import LocaleGrouper
from urlvariants.grouping.scorer import LocaleScorer
from urlvariants.grouping.deduper import LocaleDeduper

__all__ = [
    "LocaleDetector",
    "PathGuard",
    "is_locale_code",
    "TranslationMatcher",
    "normalize_segment",
    "LocaleGrouper",
    "LocaleScorer",
    "LocaleDeduper",
]
