"""Error taxonomy and the error reporter used by the Greenhouse tooling."""
from __future__ import annotations

from typing import Any, Dict, Protocol

from utils.logging import get_logger

logger = get_logger(__name__)


class GreenhouseToolError(RuntimeError):
    """Base error for every failure raised by this package."""


class UserError(GreenhouseToolError):
    """Expected failure the user can fix; never sent to the error reporter."""


class ConfigError(UserError):
    """Raised when configuration overrides are invalid."""


class InvalidRegionError(UserError):
    """Raised when a region name is not a key of the region table."""

    def __init__(self, region: str, available: list[str]) -> None:
        self.region = region
        self.available = available
        super().__init__(
            f"Invalid region {region!r}, available regions are: {', '.join(available)}"
        )


class ScrapeError(GreenhouseToolError):
    """Raised when the Greenhouse DOM or JSON no longer has the expected shape."""


class NotFoundError(ScrapeError):
    """Raised when a listing page has no rows at all."""


class PayloadError(ScrapeError):
    """Raised when a scraped job post form lacks a key the create payload needs."""


class GeocodingError(GreenhouseToolError):
    """Raised when Mapbox gives no usable result for a location."""


class RemoteCallError(UserError):
    """Raised when a Greenhouse XHR endpoint does not report success."""

    def __init__(self, context: str, detail: str | None = None) -> None:
        self.context = context
        self.detail = detail
        super().__init__(f"Operation failed: {context}")


class ErrorReporter(Protocol):
    def report(self, error: BaseException | str, **context: Any) -> None:
        ...


class NullErrorReporter:
    """Reporter for tests and development mode."""

    def report(self, error: BaseException | str, **context: Any) -> None:
        return None


class LoggingErrorReporter:
    """Sends unexpected failures to the log with their context.

    The last ``keep`` reports stay in ``reported``.
    """

    def __init__(self, keep: int = 100) -> None:
        self.keep = keep
        self.reported: list[Dict[str, Any]] = []

    def report(self, error: BaseException | str, **context: Any) -> None:
        if isinstance(error, UserError):
            return
        self.reported.append({"error": str(error), **context})
        del self.reported[:-self.keep]
        if isinstance(error, BaseException):
            logger.error("Reported error: %s", error, exc_info=error, extra={"context": context})
        else:
            logger.error("Reported error: %s %s", error, context or "")


def describe_http_error(response: Dict[str, Any]) -> str:
    return (
        f"The server responded with a status of {response.get('status')} "
        f"({response.get('statusText')}). URL: {response.get('url')}"
    )
