"""Exception hierarchy for LifeStream operations."""

from typing import Any


class LifestreamError(Exception):
    """Base class for all LifeStream errors."""


class ConfigIncompleteError(LifestreamError):
    """A required configuration value is missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing configuration: {', '.join(missing)}")


class ExtractionError(LifestreamError):
    """The LLM could not turn free text into time entries."""


class ReportError(LifestreamError):
    """The analytical report could not be produced."""


class NotionError(LifestreamError):
    """Base class for Notion call failures."""


class NotionAPIError(NotionError):
    """Notion answered with a non-2xx response."""

    def __init__(self, status_code: int, body: dict[str, Any] | None = None) -> None:
        self.status_code = status_code
        self.body = body or {}
        message = self.body.get("message") or ""
        super().__init__(f"Notion request rejected: {status_code} {message}".rstrip())


class NotionTransportError(NotionError):
    """The Notion request never produced a response."""
