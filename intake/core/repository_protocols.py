"""Boundary Protocols — contracts between services and external collaborators.

Invariants:
    - Services depend on these Protocols, never on concrete clients
    - create_document raises ConflictError on a uniqueness violation and
      DependencyError on any other failure
    - ExpiringCache.delete returns True only when the key existed
    - count_case_folded compares the stored value trimmed and lowercased, so
      rows written before normalization still match a normalized key

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes need no inheritance
    - All methods async because every implementation does IO
"""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class DocumentPage:
    """Result of a field-equality query."""
    total: int
    items: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class EmailAttachment:
    """Attachment passed through to the email provider as base64."""
    name: str
    content_base64: str


class DocumentCollection(Protocol):
    """Contract for a document store collection queried by equality filters."""
    async def list_documents(self, **filters: object) -> DocumentPage: ...
    async def count_case_folded(self, field: str, folded: str) -> int: ...
    async def create_document(self, fields: dict) -> dict: ...


class ExpiringCache(Protocol):
    """Contract for a key-value cache with per-key expiry."""
    async def set_with_expiry(self, key: str, value: str, seconds: int) -> None: ...
    async def get(self, key: str) -> str | None: ...
    async def delete(self, key: str) -> bool: ...
    async def ping(self) -> bool: ...


class EmailSender(Protocol):
    """Contract for a transactional email provider."""
    async def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        *,
        sender_name: str | None = None,
        attachments: list[EmailAttachment] | None = None,
    ) -> str: ...
