"""Author credentials consumed by the login endpoint."""

from __future__ import annotations

import hmac

import structlog

from blog_api.authz import ADMIN
from blog_api.errors import InvalidPostError
from blog_api.validation import validate_author_name

log = structlog.get_logger()

_DEMO_PREFIX = "Author "


def default_password(author: str) -> str:
    """Demo credential for seeded authors without one: "Author 3" -> "password3"."""
    if author.startswith(_DEMO_PREFIX):
        return "password" + author[len(_DEMO_PREFIX) :]
    return "password" + author


class AuthorService:
    """Identity -> secret map. ``admin`` is always present."""

    def __init__(self, admin_password: str = "admin") -> None:
        self._passwords: dict[str, str] = {ADMIN: admin_password}

    def register(self, author: str, password: str) -> None:
        if author == ADMIN:
            raise ValueError("the admin identity is configured through ADMIN_PASSWORD")
        kind = validate_author_name(author)
        if kind is not None:
            raise InvalidPostError(kind)
        self._passwords[author] = password

    def ensure(self, author: str) -> None:
        """Register ``author`` with the demo password unless already known."""
        if author not in self._passwords:
            self.register(author, default_password(author))

    def valid_author(self, author: str, password: str) -> bool:
        expected = self._passwords.get(author)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode(), password.encode())

    def __contains__(self, author: object) -> bool:
        return author in self._passwords

    def __len__(self) -> int:
        return len(self._passwords)
