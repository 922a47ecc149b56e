"""Request Dependencies — record store handle, authenticator and the session gate.

Invariants:
    - require_session raises UnauthorizedError before any handler code or body parsing runs
    - get_authenticator() is cached — one session registry per process
    - get_record_store() reads the db_manager at call time (tests patch the module attribute)
"""

import logging
from functools import lru_cache

from fastapi import Depends, Request

from portfolio.config import get_settings
from portfolio.core.domain_types import AuthState
from portfolio.core.errors import UnauthorizedError
from portfolio.core.repository_protocols import RecordStore
from portfolio.core.session_auth import (
    SessionAuthenticator, SessionRegistry, StaticCredentialVerifier,
)
from portfolio.infrastructure import database
from portfolio.infrastructure.record_store import SqlRecordStore

logger = logging.getLogger(__name__)


def get_record_store() -> RecordStore:
    return SqlRecordStore(database.get_db_manager())


@lru_cache
def get_authenticator() -> SessionAuthenticator:
    settings = get_settings()
    return SessionAuthenticator(
        StaticCredentialVerifier(settings.admin_email, settings.admin_password),
        SessionRegistry(ttl_seconds=settings.session_ttl_seconds),
        cookie_name=settings.session_cookie_name,
    )


async def require_session(
    request: Request,
    authenticator: SessionAuthenticator = Depends(get_authenticator),
) -> None:
    """Gate for the protected route group."""
    if authenticator.authorize(request.cookies) is AuthState.ANONYMOUS:
        logger.warning(
            "Unauthorized access attempt to a protected route.",
            extra={"path": request.url.path},
        )
        raise UnauthorizedError()
