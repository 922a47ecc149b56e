"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Record store accessed only through RecordStore; records cross it as plain dicts
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake with the same shape
    - Records as dicts with a string "id": the wire form of RecordId, nothing else leaks
"""

from typing import Protocol

from portfolio.core.domain_types import Collection


class RecordStore(Protocol):
    """Contract for document persistence — implemented by shell."""
    async def list(self, collection: Collection) -> list[dict]: ...
    async def create(self, collection: Collection, payload: dict) -> dict: ...
    async def delete(self, collection: Collection, record_id: str) -> None: ...


class CredentialVerifier(Protocol):
    """Contract for admin credential checks — swap to change the login strategy."""
    def verify(self, email: str, password: str) -> bool: ...
