"""
Anonymous identity.
Every /api request carries an anonymous ID cookie; new visitors get one.
"""

import uuid
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from loguru import logger
from sqlalchemy.orm import Session
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import settings
from ..db.models import AnonymousUser, utcnow
from ..db.session import get_db
from ..errors import ForbiddenError, unhandled_error_handler
from ..utils.helpers import get_client_ip


MAX_ANON_ID_LENGTH = 64


@dataclass
class AnonContext:
    """Identity of the caller for the current request."""
    anon_id: str
    client_ip: str
    user_agent: Optional[str]
    is_banned: bool = False


def _read_anon_id(request: Request) -> Optional[str]:
    anon_id = request.cookies.get(settings.anon_cookie_name)
    if not anon_id or len(anon_id) > MAX_ANON_ID_LENGTH:
        return None
    return anon_id


async def _call_app(request: Request, call_next):
    # Unhandled errors become the 500 envelope here, inside the cookie and CORS layers
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_error_handler(request, exc)


class AnonymousIdMiddleware(BaseHTTPMiddleware):
    """
    Resolve the anonymous ID cookie for /api requests.

    Stores anon_id, client_ip and user_agent on request.state and sets the
    cookie (HttpOnly, SameSite=Strict, Secure in production) when it was missing.
    """

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/api"):
            return await _call_app(request, call_next)

        anon_id = _read_anon_id(request)
        is_new = anon_id is None
        if is_new:
            anon_id = str(uuid.uuid4())

        request.state.anon_id = anon_id
        request.state.client_ip = get_client_ip(request)
        request.state.user_agent = request.headers.get("user-agent")

        response = await _call_app(request, call_next)

        if is_new:
            response.set_cookie(
                key=settings.anon_cookie_name,
                value=anon_id,
                max_age=settings.anon_cookie_max_age,
                path="/",
                httponly=True,
                secure=settings.is_production(),
                samesite="strict",
            )
        return response


def get_anon_context(request: Request, db: Session = Depends(get_db)) -> AnonContext:
    """
    FastAPI dependency returning the caller's identity.

    Upserts the anonymous user row (first/last seen, user agent).
    """
    anon_id = getattr(request.state, "anon_id", None) or _read_anon_id(request)
    if anon_id is None:
        anon_id = str(uuid.uuid4())
        request.state.anon_id = anon_id

    client_ip = getattr(request.state, "client_ip", None) or get_client_ip(request)
    user_agent = request.headers.get("user-agent")

    anon_user = db.get(AnonymousUser, anon_id)
    if anon_user is None:
        anon_user = AnonymousUser(anon_id=anon_id, user_agent=user_agent)
        db.add(anon_user)
        logger.debug(f"New anonymous user {anon_id}")
    else:
        anon_user.last_seen_at = utcnow()
        if user_agent:
            anon_user.user_agent = user_agent
    db.commit()

    return AnonContext(
        anon_id=anon_id,
        client_ip=client_ip,
        user_agent=user_agent,
        is_banned=bool(anon_user.is_banned),
    )


def require_active_anon(ctx: AnonContext = Depends(get_anon_context)) -> AnonContext:
    """Identity dependency for write operations; banned users are rejected."""
    if ctx.is_banned:
        logger.warning(f"Blocked write from banned anonymous user {ctx.anon_id}")
        raise ForbiddenError("This account has been suspended")
    return ctx
