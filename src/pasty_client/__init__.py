"""
pasty-client - Python client for the pasty paste server API.

Read and create pastes with an UnauthenticatedClient; upgrade it with the
modification token returned at creation to update or delete:

    client = UnauthenticatedClient("https://pasty.lus.pm")
    created = await client.create_paste("hello")
    owner = client.authenticate(created.modification_token)
    await owner.update_paste(created.id, "hello again")

Usage (CLI):
    pasty create notes.txt            # Create a paste, remember its token
    pasty get <id>                    # Print a paste
    pasty update <id> notes.txt       # Replace content
    pasty delete <id>                 # Delete
"""

__version__ = "0.1.0"

from pasty_client.client import (
    AuthenticatedClient,
    SyncAuthenticatedClient,
    SyncUnauthenticatedClient,
    UnauthenticatedClient,
)
from pasty_client.errors import (
    ApiError,
    ConfigError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    PastyError,
    ServerError,
    UnauthorizedError,
)
from pasty_client.models import (
    ApplicationInformation,
    CreatedPaste,
    Metadata,
    Paste,
    PasteCreationResult,
    PfEncryption,
)

__all__ = [
    "UnauthenticatedClient",
    "AuthenticatedClient",
    "SyncUnauthenticatedClient",
    "SyncAuthenticatedClient",
    "PastyError",
    "ConfigError",
    "ApiError",
    "NetworkError",
    "NotFoundError",
    "UnauthorizedError",
    "MalformedResponseError",
    "ServerError",
    "ApplicationInformation",
    "CreatedPaste",
    "Metadata",
    "Paste",
    "PasteCreationResult",
    "PfEncryption",
]
