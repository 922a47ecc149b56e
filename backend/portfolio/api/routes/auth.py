"""Login — exchanges the admin credential for a session cookie.

Invariants:
    - Success: 200 + HTTP-only, SameSite=Lax cookie scoped to "/"
    - Failure: 401 via UnauthorizedError, no Set-Cookie header
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio.api.dependencies import get_authenticator
from portfolio.config import get_settings
from portfolio.core.session_auth import SessionAuthenticator
from portfolio.schemas.records import LoginRequest

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    authenticator: SessionAuthenticator = Depends(get_authenticator),
):
    """Validate the admin credential and set the session cookie."""
    settings = get_settings()
    token = authenticator.login(body.email, body.password)
    response = JSONResponse(content={"message": "Login successful!"})
    response.set_cookie(
        key=authenticator.cookie_name,
        value=token,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        max_age=settings.session_ttl_seconds,
    )
    return response
