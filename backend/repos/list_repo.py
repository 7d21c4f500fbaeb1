"""Repository over a SharePoint-style REST list API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from formengine.kernel.assembly import ListStorage

logger = logging.getLogger(__name__)

_VERBOSE_JSON = "application/json;odata=verbose"


class ListRepo(ListStorage):
    """
    Reads and creates items in one list.

    GET  {site}/_api/web/lists/getbytitle('{list}')/items({id})
    POST {site}/_api/web/lists/getbytitle('{list}')/items

    Verbose OData responses wrap the item in a "d" envelope; it is unwrapped
    here so callers see the plain item.
    """

    def __init__(
        self,
        site_url: str,
        list_title: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.site_url = site_url.rstrip("/")
        self.list_title = list_title
        self._token = token
        self._timeout = timeout
        self._transport = transport

    @property
    def items_url(self) -> str:
        title = quote(self.list_title.replace("'", "''"), safe="")
        return f"{self.site_url}/_api/web/lists/getbytitle('{title}')/items"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": _VERBOSE_JSON, "Content-Type": _VERBOSE_JSON}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def get(self, item_id: int) -> dict[str, Any] | None:
        """
        Fetch one item by id.

        Returns:
            The item, or None on 404

        Raises:
            httpx.HTTPError: On any other HTTP or transport failure
        """
        async with self._client() as client:
            response = await client.get(f"{self.items_url}({item_id})", headers=self._headers())
            if response.status_code == 404:
                logger.info("list %r: item %s not found", self.list_title, item_id)
                return None
            response.raise_for_status()
            return unwrap(response.json())

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Create an item.

        Returns:
            The created item as the server reports it

        Raises:
            httpx.HTTPError: If the list API is unreachable or returns an error
        """
        async with self._client() as client:
            response = await client.post(self.items_url, json=data, headers=self._headers())
            response.raise_for_status()
            return unwrap(response.json())


def unwrap(body: Any) -> dict[str, Any]:
    """Strip the verbose OData "d" envelope, if present."""
    if isinstance(body, dict) and isinstance(body.get("d"), dict):
        return body["d"]
    if isinstance(body, dict):
        return body
    raise ValueError(f"Expected a JSON object, got {type(body).__name__}")
