"""Constants used throughout urlvariants.

This module contains enums, reference tables and default values shared by
the locale detector, grouper, scorer and command line.
"""

import re
from enum import Enum


class LocaleSignal(str, Enum):
    """Where a locale marker was found in a URL."""
    SUBDOMAIN = "subdomain"
    PATH = "path"
    QUERY = "query"
    NONE = "none"


class OutputFormat(str, Enum):
    """Output formats supported by the command line."""
    TEXT = "text"
    JSON = "json"


# ISO 639-1 two-letter language codes
LOCALE_CODES = frozenset({
    "aa", "ab", "ae", "af", "ak", "am", "an", "ar", "as", "av", "ay", "az",
    "ba", "be", "bg", "bh", "bi", "bm", "bn", "bo", "br", "bs",
    "ca", "ce", "ch", "co", "cr", "cs", "cu", "cv", "cy",
    "da", "de", "dv", "dz",
    "ee", "el", "en", "eo", "es", "et", "eu",
    "fa", "ff", "fi", "fj", "fo", "fr", "fy",
    "ga", "gd", "gl", "gn", "gu", "gv",
    "ha", "he", "hi", "ho", "hr", "ht", "hu", "hy", "hz",
    "ia", "id", "ie", "ig", "ii", "ik", "io", "is", "it", "iu",
    "ja", "jv",
    "ka", "kg", "ki", "kj", "kk", "kl", "km", "kn", "ko", "kr", "ks", "ku",
    "kv", "kw", "ky",
    "la", "lb", "lg", "li", "ln", "lo", "lt", "lu", "lv",
    "mg", "mh", "mi", "mk", "ml", "mn", "mr", "ms", "mt", "my",
    "na", "nb", "nd", "ne", "ng", "nl", "nn", "no", "nr", "nv", "ny",
    "oc", "oj", "om", "or", "os",
    "pa", "pi", "pl", "ps", "pt",
    "qu",
    "rm", "rn", "ro", "ru", "rw",
    "sa", "sc", "sd", "se", "sg", "si", "sk", "sl", "sm", "sn", "so", "sq",
    "sr", "ss", "st", "su", "sv", "sw",
    "ta", "te", "tg", "th", "ti", "tk", "tl", "tn", "to", "tr", "ts", "tt",
    "tw", "ty",
    "ug", "uk", "ur", "uz",
    "ve", "vi", "vo",
    "wa", "wo",
    "xh",
    "yi", "yo",
    "za", "zh", "zu",
})

# Language-region codes such as en-us or pt-BR
EXTENDED_LOCALE_PATTERN = re.compile(r"^[a-z]{2}-[a-zA-Z]{2}$")

# Two-letter path segments that collide with common English words
PATH_FALSE_POSITIVES = frozenset({
    "id",  # identifier, not Indonesian
    "in",
    "is",
    "or",
    "to",
    "ad",  # advertisement
    "as",
    "at",
    "by",
    "go",
    "no",  # number, not Norwegian
})

# First path segments after which "it" means information technology
TECH_PATH_PREFIXES = frozenset({"api", "tech", "technology"})

# Query parameter names carrying a locale, checked in order
LOCALE_QUERY_PARAMS = ("lang", "locale", "language", "hl", "l")

# Pseudo-locale for URLs without a detected locale
DEFAULT_LOCALE = "default"

DEFAULT_PRIORITY = ("en",)

# Share of aligned path segments that must match in should_group
SIMILARITY_THRESHOLD = 0.7


# Scorer weights
SCORE_PRIORITY_BASE = 100
SCORE_PRIORITY_STEP = 10
SCORE_DEFAULT_LOCALE = 50
SCORE_UNLISTED_LOCALE = 25
SCORE_COMPLETENESS_CAP = 20
SCORE_FIRST_SEEN_BONUS = 10


DEFAULTS = {
    "config_path": "~/.config/urlvariants/config.yaml",
    "output_format": OutputFormat.TEXT.value,
    "use_scorer": False,
}
