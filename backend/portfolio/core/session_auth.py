"""Session Authenticator — admin login, session token issuance and cookie authorization.

Invariants:
    - Two states only: ANONYMOUS and AUTHENTICATED (core/domain_types.AuthState)
    - login() either returns a registered token or raises UnauthorizedError — never both
    - authorize() is AUTHENTICATED only for a token this process issued (and, with a TTL, not expired)
    - Tokens are random nonces; every token dies with the process

Design Decisions:
    - CredentialVerifier protocol: the authenticator contract stays fixed while the
      verification strategy is swappable (StaticCredentialVerifier is the default)
    - hmac.compare_digest for credential checks: constant-time comparison
    - SessionRegistry is in-process (ADR: single-process deployment, restart = logout)
    - No logout and no rotation: a token stays valid until restart or TTL expiry
"""

import hmac
import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Callable, Mapping

from portfolio.core.domain_types import AuthState
from portfolio.core.errors import UnauthorizedError
from portfolio.core.repository_protocols import CredentialVerifier

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "session_token"


class StaticCredentialVerifier:
    """Checks a single configured email/password pair."""

    def __init__(self, email: str, password: str):
        self._email = email
        self._password = password

    def verify(self, email: str, password: str) -> bool:
        email_ok = hmac.compare_digest(email.encode(), self._email.encode())
        password_ok = hmac.compare_digest(
            password.encode(), self._password.encode(),
        )
        return email_ok and password_ok


@dataclass
class SessionRegistry:
    """Issued session tokens mapped to their issue time (monotonic seconds)."""
    ttl_seconds: int | None = None
    clock: Callable[[], float] = time.monotonic
    _issued: dict[str, float] = field(default_factory=dict)

    def issue(self) -> str:
        now = self.clock()
        self._prune(now)
        token = secrets.token_urlsafe(32)
        self._issued[token] = now
        return token

    def is_valid(self, token: str | None) -> bool:
        if not token:
            return False
        issued_at = self._issued.get(token)
        if issued_at is None:
            return False
        if self._expired(issued_at, self.clock()):
            self._issued.pop(token, None)
            return False
        return True

    def _expired(self, issued_at: float, now: float) -> bool:
        return self.ttl_seconds is not None and now - issued_at > self.ttl_seconds

    def _prune(self, now: float) -> None:
        """Drop every expired token. Without a TTL nothing expires."""
        if self.ttl_seconds is None:
            return
        for token in [t for t, at in self._issued.items() if self._expired(at, now)]:
            del self._issued[token]

    def __len__(self) -> int:
        return len(self._issued)


class SessionAuthenticator:
    """Issues and validates the admin session cookie."""

    def __init__(
        self,
        verifier: CredentialVerifier,
        registry: SessionRegistry | None = None,
        cookie_name: str = DEFAULT_COOKIE_NAME,
    ):
        self.verifier = verifier
        self.registry = registry if registry is not None else SessionRegistry()
        self.cookie_name = cookie_name

    def login(self, email: str, password: str) -> str:
        """Return a fresh session token, or raise UnauthorizedError on mismatch."""
        if not self.verifier.verify(email, password):
            logger.warning("Authentication failed for: %s", email)
            raise UnauthorizedError("Invalid email or password")
        token = self.registry.issue()
        logger.info(
            "User authenticated, session issued for: %s (%d active)",
            email, len(self.registry),
        )
        return token

    def authorize(self, cookies: Mapping[str, str]) -> AuthState:
        """Resolve request cookies to a session state."""
        if self.registry.is_valid(cookies.get(self.cookie_name)):
            return AuthState.AUTHENTICATED
        return AuthState.ANONYMOUS
