"""Async client for the two Notion endpoints LifeStream uses."""

import logging
from typing import Any

import httpx

from ..entries.models import TimeEntry
from ..errors import ConfigIncompleteError, NotionAPIError, NotionTransportError
from .config import NotionConfig

logger = logging.getLogger(__name__)

NOTION_BASE_URL = "https://api.notion.com"
NOTION_VERSION = "2022-06-28"

# Property names in the records database
TASK_PROPERTY = "Task"
DURATION_PROPERTY = "Duration (Minutes)"
START_PROPERTY = "Start Time"
END_PROPERTY = "End Time"
ACTIVITY_PROPERTY = "支出项"
GOAL_PROPERTY = "Goal"


def build_url(api_path: str, proxy_url: str | None = None) -> str:
    """Compose the request URL for a Notion API path.

    A relay whose path contains ``/notion`` (a local relay or a
    ``/notion-proxy`` function) forwards the API path itself. Any other relay
    is treated as a prefix relay and gets the full Notion URL appended.

    Args:
        api_path: Path below the API root, e.g. ``v1/pages``.
        proxy_url: Optional relay address.
    """
    api_path = api_path.lstrip("/")
    if not proxy_url:
        return f"{NOTION_BASE_URL}/{api_path}"

    relay = proxy_url.rstrip("/")
    if "/notion" in relay:
        return f"{relay}/{api_path}"
    return f"{relay}/{NOTION_BASE_URL}/{api_path}"


def page_properties(entry: TimeEntry) -> dict[str, Any]:
    """Map an entry onto the records database properties.

    The category column is a formula in Notion and is never written.
    """
    properties: dict[str, Any] = {
        TASK_PROPERTY: {"title": [{"text": {"content": entry.task}}]},
        DURATION_PROPERTY: {"number": entry.duration_minutes},
        START_PROPERTY: {"date": {"start": entry.start_time}},
        END_PROPERTY: {"date": {"start": entry.end_time}},
        ACTIVITY_PROPERTY: {"select": {"name": entry.activity}},
    }
    if entry.goal_id:
        properties[GOAL_PROPERTY] = {"relation": [{"id": entry.goal_id}]}
    return properties


def active_goals_filter(record_date: str) -> dict[str, Any]:
    """Filter for goals not completed with a deadline on or after a date."""
    return {
        "and": [
            {"property": "Status", "status": {"does_not_equal": "Completed"}},
            {"property": "Deadline", "date": {"on_or_after": record_date}},
        ]
    }


class NotionClient:
    """Thin async wrapper over the Notion REST API.

    Failures are classified explicitly: a request that never produced a
    response raises NotionTransportError, a non-2xx response raises
    NotionAPIError.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        default_proxy_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Per-request timeout in seconds.
            default_proxy_url: Relay used when the config names none.
            http_client: Client to use instead of creating one (tests).
        """
        self._timeout = timeout
        self._default_proxy_url = default_proxy_url
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self, config: NotionConfig) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {config.api_key}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }

    async def _post(
        self, config: NotionConfig, api_path: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        url = build_url(api_path, config.proxy_url or self._default_proxy_url)
        logger.debug("POST %s", url)

        try:
            response = await self._get_client().post(
                url, headers=self._headers(config), json=body
            )
        except httpx.RequestError as e:
            logger.error("Notion request to %s failed: %r", url, e)
            raise NotionTransportError(
                f"Network error talking to Notion ({type(e).__name__}). "
                "Check the connection or the relay URL."
            ) from e

        if not response.is_success:
            try:
                error_body = response.json()
            except ValueError:
                error_body = {"message": response.text[:500]}
            if not isinstance(error_body, dict):
                error_body = {"message": str(error_body)}
            logger.error("Notion rejected %s: %s %s", url, response.status_code, error_body)
            raise NotionAPIError(response.status_code, error_body)

        try:
            data = response.json()
        except ValueError as e:
            raise NotionAPIError(response.status_code, {"message": "Response is not JSON"}) from e
        if not isinstance(data, dict):
            raise NotionAPIError(response.status_code, {"message": "Unexpected response shape"})
        return data

    async def create_page(self, config: NotionConfig, entry: TimeEntry) -> str:
        """Create a records-database page for an entry.

        Returns:
            The id of the created page.

        Raises:
            ConfigIncompleteError: If the key or records database is missing.
        """
        missing = config.missing_for_sync()
        if missing:
            raise ConfigIncompleteError(missing)

        body = {
            "parent": {"database_id": config.records_database_id},
            "properties": page_properties(entry),
        }
        data = await self._post(config, "v1/pages", body)

        page_id = data.get("id")
        if not isinstance(page_id, str) or not page_id:
            raise NotionAPIError(200, {"message": "Created page has no id"})
        logger.info("Notion page created: %s", page_id)
        return page_id

    async def query_active_goals(
        self, config: NotionConfig, record_date: str
    ) -> list[dict[str, Any]]:
        """Query the goals database for goals still open on a date.

        Returns:
            The raw page objects from the response.
        """
        missing = [
            name for name in ("api_key", "goals_database_id") if not getattr(config, name)
        ]
        if missing:
            raise ConfigIncompleteError(missing)

        body = {"filter": active_goals_filter(record_date)}
        data = await self._post(
            config, f"v1/databases/{config.goals_database_id}/query", body
        )
        results = data.get("results")
        return [page for page in results if isinstance(page, dict)] if isinstance(results, list) else []
