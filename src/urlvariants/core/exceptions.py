class UrlVariantsError(Exception):
    pass

class URLParseError(UrlVariantsError, ValueError):
    """URL could not be parsed."""
    pass

class ConfigError(UrlVariantsError):
    pass

class InvalidConfigError(ConfigError):
    """Configuration file parsed but holds invalid values."""
    pass
