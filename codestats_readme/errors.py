class CodeStatsError(Exception):
    pass


class ConfigError(CodeStatsError):
    """Required configuration is missing or unusable."""


class PayloadError(CodeStatsError):
    """The stats API answered with something that is not a stats payload."""


class ChartError(CodeStatsError):
    """The bar renderer cannot draw the given mapping."""
