"""TrueConf Server users API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from trueconf_console.domain.errors import DirectoryError, NotFoundError

_CONNECTION_FAILED = "Connection to the directory server failed"


class DirectoryClient(Protocol):
    """Interface for TrueConf user directory interactions."""

    async def get_user(self, user_id: str) -> dict[str, object]:
        """Fetch one user by exact id."""

    async def search_users(self, term: str, limit: int = 10) -> list[dict[str, object]]:
        """Search users by partial id or name."""

    async def create_user(self, payload: dict[str, object]) -> dict[str, object]:
        """Create one user and return the raw API response."""

    async def create_users(
        self, payloads: list[dict[str, object]]
    ) -> dict[str, object]:
        """Create several users in a single request."""


@dataclass
class HttpxTrueConfClient(DirectoryClient):
    """HTTPX-backed TrueConf users client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout: float = 15.0
    ) -> "HttpxTrueConfClient":
        """Create a TrueConf client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def get_user(self, user_id: str) -> dict[str, object]:
        """Fetch a user via GET /users/{id}."""
        return await self._request("GET", f"{self.base_url}/{user_id}")

    async def search_users(self, term: str, limit: int = 10) -> list[dict[str, object]]:
        """Search users via GET /users?search=."""
        payload = await self._request(
            "GET", self.base_url, params={"search": term, "limit": limit}
        )
        users = payload.get("users") if isinstance(payload, dict) else None
        if not isinstance(users, list):
            return []
        return [user for user in users if isinstance(user, dict)]

    async def create_user(self, payload: dict[str, object]) -> dict[str, object]:
        """Create a user via POST /users."""
        return await self._request("POST", self.base_url, json=payload)

    async def create_users(
        self, payloads: list[dict[str, object]]
    ) -> dict[str, object]:
        """Create users via POST /users with an array body."""
        return await self._request("POST", self.base_url, json=payloads)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, object] | None = None,
        json: object | None = None,
    ) -> dict[str, object]:
        try:
            response = await self.http_client.request(
                method,
                url,
                params=params,
                json=json,
                headers={
                    "Authorization": self.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise to_directory_error(exc) from exc
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise DirectoryError(
                "Unexpected response from the directory server", response.status_code
            ) from exc


def to_directory_error(exc: Exception) -> DirectoryError:
    """Normalize an httpx failure into a DirectoryError."""
    response = getattr(exc, "response", None)
    if isinstance(exc, httpx.HTTPStatusError) and response is not None:
        status_code = response.status_code
        message = _extract_api_message(response) or str(exc) or _CONNECTION_FAILED
        if status_code == httpx.codes.NOT_FOUND:
            return NotFoundError(message, status_code)
        return DirectoryError(message, status_code)
    return DirectoryError(str(exc) or _CONNECTION_FAILED)


def _extract_api_message(response: httpx.Response) -> str | None:
    """Pull the message out of `{error: {message}}` or `{message}` bodies."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if body.get("message"):
        return str(body["message"])
    return None
