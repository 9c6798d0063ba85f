"""
Pasty API Client - async HTTP client for a pasty instance.

Two capability-scoped handles:
- UnauthenticatedClient: read pastes, create pastes, instance info
- AuthenticatedClient: wraps an UnauthenticatedClient plus a modification
  token and adds update/delete

API reference: https://github.com/lus/pasty/blob/master/API.md
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel

from pasty_client.client import endpoints
from pasty_client.models import (
    ApplicationInformation,
    MetadataLike,
    Paste,
    PasteCreationResult,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class UnauthenticatedClient:
    """
    Client for requests that need no proof of paste ownership.

    Holds configuration only. Every call opens its own short-lived
    ``httpx.AsyncClient``, so one instance can be shared freely between
    tasks.

    Example:
        client = UnauthenticatedClient("https://pasty.lus.pm")
        created = await client.create_paste("hello")
        owner = client.authenticate(created.modification_token)
    """

    def __init__(
        self,
        base_url: Union[str, httpx.URL],
        *,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Root URL of the pasty instance
            timeout: Per-request timeout in seconds, None for no timeout
            headers: Extra headers sent with every request
            transport: Custom httpx transport (proxies, pooling, tests);
                left open, the caller owns its lifecycle

        Raises:
            ConfigError: If base_url is not an absolute http(s) URL
        """
        self._base_url = endpoints.parse_base_url(base_url)
        self._timeout = timeout
        self._headers = dict(headers or {})
        self._transport = transport

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    def __repr__(self) -> str:
        return f"UnauthenticatedClient(base_url={str(self._base_url)!r})"

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers={"Accept": "application/json", **self._headers},
            transport=self._transport,
            follow_redirects=True,
        )

    async def _send(self, kwargs: Dict[str, Any]) -> httpx.Response:
        logger.debug(f"{kwargs['method']} {kwargs['url']} on {self._base_url}")
        http = self._http()
        try:
            response = await http.request(**kwargs)
        except httpx.TransportError as e:
            raise endpoints.wrap_transport_error(e, kwargs) from e
        finally:
            # a caller-supplied transport is shared, only close our own
            if self._transport is None:
                await http.aclose()
        logger.debug(f"{kwargs['method']} {kwargs['url']} -> {response.status_code}")
        return response

    async def _fetch(self, kwargs: Dict[str, Any], model: Type[ModelT]) -> ModelT:
        response = await self._send(kwargs)
        return endpoints.parse_model(response, model)

    async def _execute(self, kwargs: Dict[str, Any]) -> None:
        response = await self._send(kwargs)
        endpoints.raise_for_status(response)

    async def application_information(self) -> ApplicationInformation:
        """Return general information about the pasty instance.

        Binds to ``GET /api/v2/info``.
        """
        return await self._fetch(endpoints.info_request(), ApplicationInformation)

    async def paste(self, paste_id: str) -> Paste:
        """Fetch a paste by its ID.

        Binds to ``GET /api/v2/pastes/{paste_id}``.

        Raises:
            NotFoundError: If no paste has this ID
        """
        return await self._fetch(endpoints.get_paste_request(paste_id), Paste)

    async def create_paste(
        self,
        content: str,
        metadata: Optional[MetadataLike] = None,
    ) -> PasteCreationResult:
        """Create a paste with the given content and metadata.

        Binds to ``POST /api/v2/pastes``.

        Returns:
            The new paste and its modification token. The token is only
            returned here, keep it to update or delete the paste later.
        """
        result = await self._fetch(
            endpoints.create_paste_request(content, metadata),
            PasteCreationResult,
        )
        logger.info(f"Created paste {result.id}")
        return result

    def authenticate(self, token: str) -> AuthenticatedClient:
        """Wrap this client and a modification (or admin) token.

        Purely local, the token is not checked until the first mutation.
        """
        return AuthenticatedClient(self, token)


class AuthenticatedClient:
    """
    Client for requests that require a paste modification token.

    Composes an UnauthenticatedClient rather than extending it; reads go
    through ``inner``:

        owner = client.authenticate(token)
        await owner.update_paste(paste_id, "new content")
        paste = await owner.inner.paste(paste_id)
    """

    def __init__(self, client: UnauthenticatedClient, token: str):
        self._client = client
        self._token = token

    @property
    def inner(self) -> UnauthenticatedClient:
        """The wrapped UnauthenticatedClient."""
        return self._client

    @property
    def modification_token(self) -> str:
        return self._token

    def __repr__(self) -> str:
        return f"AuthenticatedClient(base_url={str(self._client.base_url)!r})"

    async def update_paste(
        self,
        paste_id: str,
        content: str,
        metadata: Optional[MetadataLike] = None,
    ) -> None:
        """Replace a paste's content and merge its metadata.

        Binds to ``PATCH /api/v2/pastes/{paste_id}``.

        Raises:
            UnauthorizedError: If the token does not match the paste
            NotFoundError: If no paste has this ID
        """
        await self._client._execute(
            endpoints.update_paste_request(paste_id, content, metadata, self._token)
        )
        logger.info(f"Updated paste {paste_id}")

    async def delete_paste(self, paste_id: str) -> None:
        """Delete a paste.

        Binds to ``DELETE /api/v2/pastes/{paste_id}``.

        Raises:
            UnauthorizedError: If the token does not match the paste
            NotFoundError: If no paste has this ID
        """
        await self._client._execute(endpoints.delete_paste_request(paste_id, self._token))
        logger.info(f"Deleted paste {paste_id}")
