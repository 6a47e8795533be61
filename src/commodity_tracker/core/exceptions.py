"""Custom exception hierarchy for commodity-tracker."""

from typing import Any


class CommodityTrackerError(Exception):
    """Base exception for all commodity-tracker errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(CommodityTrackerError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.
    A missing provider credential is NOT a ConfigError: it only marks
    that provider as unconfigured.

    Context keys:
        field: str - the config field that failed validation
        value: Any - the invalid value (redacted for secrets)
    """


class ProviderError(CommodityTrackerError):
    """An upstream quote or news provider failed.

    Policy: caught at the adapter boundary and converted to ``None``.
    Never crosses the public API of the price or news resolvers.

    Context keys:
        provider: str - provider name ("metals_api", "alpha_vantage", ...)
        symbol: str - the provider symbol or query being fetched
        status_code: int | None - HTTP status code if applicable
    """


class RateLimitError(ProviderError):
    """Provider reported a rate-limit notice (HTTP 429 or an in-body note).

    Policy: treated like any other provider failure; the next provider
    in the chain is tried.

    Context keys:
        note: str | None - the provider's notice text
    """


class ReportError(CommodityTrackerError):
    """Report composition failed.

    Policy: raise to the caller. A partially built report is misleading.

    Context keys:
        section: str - the report section being built
    """
