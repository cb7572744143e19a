"""Bearer-token authentication: issue JWTs at login, resolve them per request."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import structlog
from fastapi import Header, HTTPException, Request

from blog_api.config import Settings

log = structlog.get_logger()


def issue_token(author: str, settings: Settings, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": author,
        "username": author,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> str:
    """Return the author identity in ``token``.

    Raises ``jwt.InvalidTokenError`` (or a subclass such as
    ``ExpiredSignatureError``) when the token cannot be trusted.
    """
    claims = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
    author = claims.get("username") or claims["sub"]
    if not isinstance(author, str) or not author:
        raise jwt.InvalidTokenError("token has no author")
    return author


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


async def current_author(
    request: Request, authorization: str | None = Header(default=None)
) -> str:
    """FastAPI dependency yielding the caller identity from the bearer token."""
    if not authorization:
        raise _unauthorized("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token or " " in token:
        raise _unauthorized("Invalid Authorization header format")
    settings: Settings = request.app.state.settings
    try:
        return verify_token(token, settings)
    except jwt.InvalidTokenError as exc:
        await log.ainfo("token_rejected", reason=type(exc).__name__)
        raise _unauthorized("Invalid token") from exc
