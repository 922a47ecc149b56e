"""Domain Types — record identity, collections and the small enums shared by every layer.

Invariants:
    - A RecordId is always (collection, key); its wire form is "<collection>:<key>"
    - RecordId.parse never returns an id belonging to a collection other than the one asked for
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Frozen dataclass for RecordId: hashable and comparable, usable as dict key in tests
    - str Enums: serialize to JSON without custom encoders
    - Keys are uuid4 hex: opaque to clients, no ordering information leaked
"""

import uuid
from dataclasses import dataclass
from enum import Enum

from portfolio.core.errors import InvalidRecordIdError


# ─── Enums ───────────────────────────────────────────────────────

class Collection(str, Enum):
    """Document collections owned by the record store."""
    BLOG_POST = "blog_post"
    PROJECT = "project"


class RpcKind(str, Enum):
    """Operation kinds an RPC can bind to a collection."""
    LIST = "list"
    CREATE = "create"
    DELETE = "delete"


class RouteGroup(str, Enum):
    """Route tables — protected routes sit behind the session gate."""
    PUBLIC = "public"
    PROTECTED = "protected"


class AuthState(str, Enum):
    """Two-state session machine."""
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


# ─── Identity ────────────────────────────────────────────────────

ID_SEPARATOR = ":"


@dataclass(frozen=True)
class RecordId:
    """Compound record key: collection name plus opaque suffix."""
    collection: Collection
    key: str

    def __str__(self) -> str:
        return f"{self.collection.value}{ID_SEPARATOR}{self.key}"

    @classmethod
    def new(cls, collection: Collection) -> "RecordId":
        return cls(collection, uuid.uuid4().hex)

    @classmethod
    def parse(cls, raw: str, collection: Collection) -> "RecordId":
        """Re-compose an external id with the collection it is used against.

        Accepts the full "<collection>:<key>" form or a bare key. A prefix
        naming any other collection fails closed.
        """
        value = raw.strip()
        if ID_SEPARATOR in value:
            prefix, key = value.split(ID_SEPARATOR, 1)
            if prefix != collection.value:
                raise InvalidRecordIdError(raw, collection.value)
        else:
            key = value
        if not key or ID_SEPARATOR in key:
            raise InvalidRecordIdError(raw, collection.value)
        return cls(collection, key)
