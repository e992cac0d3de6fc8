"""Remote schema fetching.

Retrieves the table, field and view descriptors of a base from the meta
API with proper error handling.
"""

from typing import Any

import requests

from .codegen.core.schema import RemoteTable
from .logging_config import get_logger

logger = get_logger(__name__)

API_URL = "https://api.airtable.com/v0"


class FetchError(Exception):
    """Raised when the base schema cannot be retrieved."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class SchemaFetcher:
    """Fetch base schemas with a fixed API key."""

    def __init__(self, api_key: str, api_url: str = API_URL, timeout: int = 30) -> None:
        """Initialize the fetcher.

        Args:
            api_key: Personal access token for the API.
            api_url: API root, without trailing slash.
            timeout: Request timeout in seconds.

        Raises:
            FetchError: If no API key is given.
        """
        if not api_key:
            raise FetchError("Missing api key.")
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def schema_url(self, base_id: str) -> str:
        return f"{self.api_url}/meta/bases/{base_id}/tables"

    def fetch(self, base_id: str) -> list[RemoteTable]:
        """Fetch all tables of a base.

        Args:
            base_id: Id of the base.

        Returns:
            Tables in the order returned by the API.

        Raises:
            FetchError: If the request fails, returns a non-success status, or
                the body has no ``tables`` list.
        """
        url = self.schema_url(base_id)
        logger.debug(f"Fetching base schema from {url}")

        try:
            response = requests.get(
                url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timeout for base {base_id}")
            raise FetchError(f"Request timeout fetching base schema: {base_id}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for base {base_id}: {e}")
            raise FetchError(f"Request error fetching base schema: {e}") from e

        if not response.ok:
            body = response.text
            raise FetchError(
                f"Failed to fetch base schema: {response.status_code} {body}",
                status=response.status_code,
                body=body,
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            raise FetchError(
                f"Invalid JSON response for base {base_id}: {e}",
                status=response.status_code,
                body=response.text,
            ) from e

        tables = data.get("tables") if isinstance(data, dict) else None
        if not isinstance(tables, list):
            raise FetchError(
                "Unexpected API response: missing tables.",
                status=response.status_code,
                body=response.text,
            )

        logger.info(f"Fetched {len(tables)} table(s) for base {base_id}")
        return [RemoteTable.from_dict(table) for table in tables]

