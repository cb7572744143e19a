"""Decide whether a caller may act on an author's namespace."""

from __future__ import annotations

from blog_api.errors import AccessDeniedError, ErrorKind, InvalidPostError

ADMIN = "admin"


def is_admin(caller: str) -> bool:
    return caller == ADMIN


def authorize(caller: str, target_author: str) -> None:
    """Raise ``AccessDeniedError`` unless caller is admin or the target itself."""
    if is_admin(caller) or caller == target_author:
        return
    raise AccessDeniedError(f"{caller!r} may not act on posts of {target_author!r}")


def resolve_author(caller: str, claimed: str | None) -> str:
    """Return the namespace a request body addresses.

    A missing ``author`` means the caller's own namespace. A supplied one must
    be non-empty and pass ``authorize``.
    """
    if claimed is None:
        return caller
    if not claimed:
        raise InvalidPostError(ErrorKind.AUTHOR_EMPTY)
    authorize(caller, claimed)
    return claimed
