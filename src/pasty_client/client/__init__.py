"""Pasty API clients - async and blocking, unauthenticated and authenticated."""

from pasty_client.client.api_client import (
    AuthenticatedClient,
    UnauthenticatedClient,
)
from pasty_client.client.sync_client import (
    SyncAuthenticatedClient,
    SyncUnauthenticatedClient,
)

__all__ = [
    "UnauthenticatedClient",
    "AuthenticatedClient",
    "SyncUnauthenticatedClient",
    "SyncAuthenticatedClient",
]
