"""
Shared request layer for the async and blocking clients.

Builders return keyword arguments for ``httpx.Client.request`` /
``httpx.AsyncClient.request``; the response helpers turn an
``httpx.Response`` into a model or one of the errors in
``pasty_client.errors``. Neither side performs I/O.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from pasty_client.errors import (
    ConfigError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from pasty_client.models import CreatePasteRequest, MetadataLike, coerce_metadata

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v2"
INFO_PATH = f"{API_PREFIX}/info"
PASTES_PATH = f"{API_PREFIX}/pastes"

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_base_url(base_url: Union[str, httpx.URL]) -> httpx.URL:
    """Validate a base URL. Raises ConfigError unless it is absolute http(s)."""
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigError(f"Invalid base URL {base_url!r}: {e}") from e

    if not url.is_absolute_url or url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"Invalid base URL {base_url!r}: expected an absolute http(s) URL")
    return url


def paste_path(paste_id: str) -> str:
    """Path of a single paste, the id encoded as one path segment."""
    return f"{PASTES_PATH}/{quote(paste_id, safe='')}"


def _bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _body(content: str, metadata: Optional[MetadataLike]) -> Dict[str, Any]:
    return CreatePasteRequest(content=content, metadata=coerce_metadata(metadata)).to_wire()


def info_request() -> Dict[str, Any]:
    return {"method": "GET", "url": INFO_PATH}


def get_paste_request(paste_id: str) -> Dict[str, Any]:
    return {"method": "GET", "url": paste_path(paste_id)}


def create_paste_request(content: str, metadata: Optional[MetadataLike] = None) -> Dict[str, Any]:
    return {"method": "POST", "url": PASTES_PATH, "json": _body(content, metadata)}


def update_paste_request(
    paste_id: str,
    content: str,
    metadata: Optional[MetadataLike],
    token: str,
) -> Dict[str, Any]:
    return {
        "method": "PATCH",
        "url": paste_path(paste_id),
        "json": _body(content, metadata),
        "headers": _bearer(token),
    }


def delete_paste_request(paste_id: str, token: str) -> Dict[str, Any]:
    return {"method": "DELETE", "url": paste_path(paste_id), "headers": _bearer(token)}


def wrap_transport_error(error: httpx.TransportError, kwargs: Dict[str, Any]) -> NetworkError:
    """Convert an httpx transport failure into a NetworkError."""
    logger.warning(f"{kwargs['method']} {kwargs['url']} failed: {error!r}")
    return NetworkError(f"Cannot reach pasty server: {error}")


def raise_for_status(response: httpx.Response) -> None:
    """Map a non-success status to the matching ApiError."""
    if response.is_success:
        return

    status = response.status_code
    body = response.text
    logger.warning(f"{response.request.method} {response.request.url} -> {status}")

    if status == 404:
        raise NotFoundError("Paste not found", status, body)
    if status in (401, 403):
        raise UnauthorizedError("Modification token rejected", status, body)
    raise ServerError(status, body)


def parse_model(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    """Check the status, then decode the JSON body into ``model``."""
    raise_for_status(response)
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        raise MalformedResponseError(
            f"Unexpected response body for {model.__name__}: {e}",
            response.status_code,
            response.text,
        ) from e
