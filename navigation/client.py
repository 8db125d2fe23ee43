# navigation/client.py
"""Async HTTP client for the admin navigation API."""

import logging
import os
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

NAVIGATION_API_URL = os.getenv("NAVIGATION_API_URL", "http://localhost:8000")
ADMIN_NAVIGATION_PATH = "/api/admin/navigation/"


class NavigationClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NavigationAdminClient:
    """
    Thin wrapper over the envelope API. Any transport failure, non-2xx
    response or ``isSuccess: false`` body raises NavigationClientError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url or NAVIGATION_API_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NavigationClientError(f"Request to {url} failed") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error or not isinstance(body, dict) or not body.get("isSuccess"):
            message = body.get("message") if isinstance(body, dict) else None
            raise NavigationClientError(
                message or f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        return body.get("data")

    async def list_items(self, layout: str = "flat") -> list[dict]:
        params = {"layout": layout} if layout != "flat" else None
        return await self._request("GET", ADMIN_NAVIGATION_PATH, params=params)

    async def save_item(self, payload: dict) -> dict:
        return await self._request("POST", ADMIN_NAVIGATION_PATH, json=payload)

    async def patch_position(self, item_id: int, position: int) -> dict:
        return await self._request(
            "PATCH", ADMIN_NAVIGATION_PATH, json={"id": item_id, "position": position}
        )

    async def delete_item(self, item_id: int) -> None:
        await self._request("DELETE", f"{ADMIN_NAVIGATION_PATH}{item_id}/")
