"""
Wire models for the pasty API (v2).

Field names follow the service contract exactly, camelCase keys are
mapped through aliases.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PfEncryption(BaseModel):
    """Client-side encryption parameters written by the pasty frontend."""
    model_config = ConfigDict(frozen=True)

    alg: str
    iv: str


class Metadata(BaseModel):
    """Free-form paste metadata.

    Unknown keys are kept. Only explicitly set keys are serialized, so an
    explicit None goes out as null (pasty removes the key on update).
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    pf_encryption: Optional[PfEncryption] = None

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        data.update(self.model_extra or {})
        return data


MetadataLike = Union[Metadata, Dict[str, Any]]


def coerce_metadata(metadata: Optional[MetadataLike]) -> Optional[Metadata]:
    """Accept either a Metadata instance or a plain dict."""
    if metadata is None or isinstance(metadata, Metadata):
        return metadata
    return Metadata.model_validate(metadata)


class Paste(BaseModel):
    """A stored paste as returned by the server."""
    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    created: int
    metadata: Optional[Metadata] = None


class PasteCreationResult(BaseModel):
    """A freshly created paste together with its modification token.

    The server answers with a flat object; it is split into the paste and
    the token here. The token is only ever returned once.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    paste: Paste
    modification_token: str = Field(alias="modificationToken")

    @model_validator(mode="before")
    @classmethod
    def _split_flat_body(cls, data: Any) -> Any:
        if isinstance(data, dict) and "paste" not in data:
            data = dict(data)
            token = data.pop("modificationToken", None)
            if token is None:
                token = data.pop("modification_token", None)
            return {"paste": data, "modificationToken": token}
        return data

    @property
    def id(self) -> str:
        return self.paste.id

    @property
    def content(self) -> str:
        return self.paste.content


# Alias matching the server's naming
CreatedPaste = PasteCreationResult


class ApplicationInformation(BaseModel):
    """General information about a pasty instance."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    paste_lifetime: int = Field(alias="pasteLifetime")
    modification_tokens: bool = Field(alias="modificationTokens")
    reports: bool


class CreatePasteRequest(BaseModel):
    """Body of create and update requests."""
    content: str
    metadata: Optional[Metadata] = None

    def to_wire(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "metadata": self.metadata.to_wire() if self.metadata is not None else None,
        }
