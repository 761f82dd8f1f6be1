"""urlvariants - locale-aware grouping of URL variants.

Detects language markers in URLs (subdomain, path or query parameter),
groups the variants of one resource and picks a representative per group
according to a locale priority list.
"""

__version__ = "0.1.0"
