"""
Blocking counterparts of the async pasty clients.

Same capability split, same endpoints and error mapping; uses
``httpx.Client`` instead of ``httpx.AsyncClient``.
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


class SyncUnauthenticatedClient:
    """Blocking client for reads and paste creation."""

    def __init__(
        self,
        base_url: Union[str, httpx.URL],
        *,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
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
        return f"SyncUnauthenticatedClient(base_url={str(self._base_url)!r})"

    def _send(self, kwargs: Dict[str, Any]) -> httpx.Response:
        logger.debug(f"{kwargs['method']} {kwargs['url']} on {self._base_url}")
        http = httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            headers={"Accept": "application/json", **self._headers},
            transport=self._transport,
            follow_redirects=True,
        )
        try:
            response = http.request(**kwargs)
        except httpx.TransportError as e:
            raise endpoints.wrap_transport_error(e, kwargs) from e
        finally:
            # a caller-supplied transport is shared, only close our own
            if self._transport is None:
                http.close()
        logger.debug(f"{kwargs['method']} {kwargs['url']} -> {response.status_code}")
        return response

    def _fetch(self, kwargs: Dict[str, Any], model: Type[ModelT]) -> ModelT:
        return endpoints.parse_model(self._send(kwargs), model)

    def _execute(self, kwargs: Dict[str, Any]) -> None:
        endpoints.raise_for_status(self._send(kwargs))

    def application_information(self) -> ApplicationInformation:
        """Return general information about the pasty instance.

        Binds to ``GET /api/v2/info``.
        """
        return self._fetch(endpoints.info_request(), ApplicationInformation)

    def paste(self, paste_id: str) -> Paste:
        """Fetch a paste by its ID.

        Binds to ``GET /api/v2/pastes/{paste_id}``.

        Raises:
            NotFoundError: If no paste has this ID
        """
        return self._fetch(endpoints.get_paste_request(paste_id), Paste)

    def create_paste(
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
        result = self._fetch(
            endpoints.create_paste_request(content, metadata),
            PasteCreationResult,
        )
        logger.info(f"Created paste {result.id}")
        return result

    def authenticate(self, token: str) -> SyncAuthenticatedClient:
        """Wrap this client and a modification (or admin) token.

        Purely local, the token is not checked until the first mutation.
        """
        return SyncAuthenticatedClient(self, token)


class SyncAuthenticatedClient:
    """Blocking client for token-gated update and delete."""

    def __init__(self, client: SyncUnauthenticatedClient, token: str):
        self._client = client
        self._token = token

    @property
    def inner(self) -> SyncUnauthenticatedClient:
        """The wrapped SyncUnauthenticatedClient."""
        return self._client

    @property
    def modification_token(self) -> str:
        return self._token

    def __repr__(self) -> str:
        return f"SyncAuthenticatedClient(base_url={str(self._client.base_url)!r})"

    def update_paste(
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
        self._client._execute(
            endpoints.update_paste_request(paste_id, content, metadata, self._token)
        )
        logger.info(f"Updated paste {paste_id}")

    def delete_paste(self, paste_id: str) -> None:
        """Delete a paste.

        Binds to ``DELETE /api/v2/pastes/{paste_id}``.

        Raises:
            UnauthorizedError: If the token does not match the paste
            NotFoundError: If no paste has this ID
        """
        self._client._execute(endpoints.delete_paste_request(paste_id, self._token))
        logger.info(f"Deleted paste {paste_id}")
