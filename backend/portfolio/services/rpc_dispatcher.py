"""RPC Dispatcher — explicit routing from RPC name to record store operation.

Invariants:
    - Every name -> (collection, kind, group) mapping is visible in RPC_OPERATIONS
    - A name is only dispatchable through the route group it is declared in
    - list -> 200 + records, create -> 201 + record, delete -> 204 + no body
    - Payloads validated against the operation's schema before the store is touched

Design Decisions:
    - Explicit dict over getattr/auto-discovery: every mapping visible in one place
    - pydantic ValidationError re-raised as RequestValidationError so the global
      handler renders the same field-level envelope as typed FastAPI bodies
    - No retries: a StorageError propagates to the caller unchanged
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from portfolio.core.domain_types import Collection, RouteGroup, RpcKind
from portfolio.core.errors import RecordValidationError, RpcNotFoundError
from portfolio.core.repository_protocols import RecordStore
from portfolio.schemas.records import (
    BlogCreate, BlogRecord, DeleteRecordRequest, ListRequest,
    ProjectCreate, ProjectRecord,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RpcOperation:
    """A named remote operation bound to one collection and one kind."""
    name: str
    collection: Collection
    kind: RpcKind
    group: RouteGroup
    payload_model: type[BaseModel]
    record_model: type[BaseModel]


@dataclass
class RpcResult:
    status_code: int
    body: Any = None


RPC_OPERATIONS: dict[str, RpcOperation] = {
    op.name: op for op in (
        RpcOperation(
            "list-projects", Collection.PROJECT, RpcKind.LIST,
            RouteGroup.PUBLIC, ListRequest, ProjectRecord,
        ),
        RpcOperation(
            "list-blogs", Collection.BLOG_POST, RpcKind.LIST,
            RouteGroup.PUBLIC, ListRequest, BlogRecord,
        ),
        RpcOperation(
            "delete-project", Collection.PROJECT, RpcKind.DELETE,
            RouteGroup.PROTECTED, DeleteRecordRequest, ProjectRecord,
        ),
        RpcOperation(
            "delete-blog", Collection.BLOG_POST, RpcKind.DELETE,
            RouteGroup.PROTECTED, DeleteRecordRequest, BlogRecord,
        ),
        RpcOperation(
            "publish-blog", Collection.BLOG_POST, RpcKind.CREATE,
            RouteGroup.PROTECTED, BlogCreate, BlogRecord,
        ),
        RpcOperation(
            "publish-project", Collection.PROJECT, RpcKind.CREATE,
            RouteGroup.PROTECTED, ProjectCreate, ProjectRecord,
        ),
    )
}


def get_operation(name: str, group: RouteGroup) -> RpcOperation:
    """Look up an RPC exposed by the given route group."""
    op = RPC_OPERATIONS.get(name)
    if op is None or op.group != group:
        raise RpcNotFoundError(name)
    return op


def decode_payload(raw: bytes) -> Any:
    """JSON body -> python value; an empty body decodes to None."""
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecordValidationError(f"Malformed JSON body: {e}", "body") from None


def validate_payload(op: RpcOperation, payload: Any) -> BaseModel:
    """Decoded payload -> the operation's schema; None validates as {}."""
    try:
        return op.payload_model.model_validate(
            {} if payload is None else payload,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from None


class RpcDispatcher:
    """Routes RPC name -> RecordStore call. Explicit registration, no auto-discovery."""

    def __init__(self, store: RecordStore):
        self._store = store

    async def dispatch(
        self, name: str, group: RouteGroup, body: bytes,
    ) -> RpcResult:
        """Look up the operation, then decode and validate the raw body, then execute.

        Lookup comes first: an unknown name is 404 whatever the body holds.
        """
        op = get_operation(name, group)
        payload = validate_payload(op, decode_payload(body))
        return await self.execute(op, payload)

    async def execute(self, op: RpcOperation, payload: BaseModel) -> RpcResult:
        """Run an operation whose payload is already validated."""
        extra = {"rpc": op.name, "collection": op.collection.value}
        match op.kind:
            case RpcKind.LIST:
                records = await self._store.list(op.collection)
                return RpcResult(
                    status.HTTP_200_OK,
                    [op.record_model(**r).model_dump() for r in records],
                )
            case RpcKind.CREATE:
                logger.info(f"Publishing to {op.collection.value}", extra=extra)
                record = await self._store.create(
                    op.collection, payload.model_dump(),
                )
                return RpcResult(
                    status.HTTP_201_CREATED,
                    op.record_model(**record).model_dump(),
                )
            case RpcKind.DELETE:
                await self._store.delete(op.collection, payload.id)
                return RpcResult(status.HTTP_204_NO_CONTENT)
