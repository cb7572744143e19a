"""Author-scoped post storage: Protocol and in-memory implementation.

Posts live in two-level namespaces: author identity -> post ID -> Post. IDs are
assigned per author from an independent counter that never goes backwards, so
an ID is never reused after deletion.

Every operation runs under a single store-wide ``asyncio.Lock``. Writes hold it
across authorization-dependent lookups, validation and the mutation; reads hold
it while copying out the posts they return.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import NoReturn, Protocol, runtime_checkable

import structlog

from blog_api.authz import is_admin, resolve_author
from blog_api.errors import (
    AccessDeniedError,
    BlogError,
    ErrorKind,
    InvalidPostError,
    NotFoundError,
)
from blog_api.metrics import post_operations_total, post_rejections_total
from blog_api.models import Post, PostDraft, PostUpdate
from blog_api.telemetry import get_tracer
from blog_api.validation import DEFAULT_SPAM_PHRASES, check_post

log = structlog.get_logger()
_tracer = get_tracer(__name__)


@runtime_checkable
class PostStore(Protocol):
    """The five operations the HTTP layer and the seed loader rely on."""

    async def create(self, draft: PostDraft, caller: str) -> Post: ...

    async def get_all(self, caller: str) -> list[Post]: ...

    async def get(self, post_id: int, caller: str, author: str | None = None) -> Post: ...

    async def update(self, update: PostUpdate, caller: str) -> Post: ...

    async def delete(self, post_id: int, caller: str, author: str | None = None) -> None: ...


@contextmanager
def _observed(operation: str, caller: str) -> Iterator[None]:
    """Span, outcome counter and rejection log around one store operation."""
    with _tracer.start_as_current_span(f"posts.{operation}", attributes={"caller": caller}):
        try:
            yield
        except BlogError as exc:
            post_operations_total.add(1, {"operation": operation, "outcome": exc.band.value})
            post_rejections_total.add(1, {"kind": exc.kind.value})
            log.info("post_rejected", operation=operation, caller=caller, kind=exc.kind.value)
            raise
        post_operations_total.add(1, {"operation": operation, "outcome": "ok"})


class MemoryPostStore:
    """In-memory post store. State is lost when the process exits."""

    def __init__(self, spam_phrases: Iterable[str] = DEFAULT_SPAM_PHRASES) -> None:
        self._posts: dict[str, dict[int, Post]] = {}
        self._last_id: dict[str, int] = {}
        self._lock = asyncio.Lock()
        self._spam_phrases = tuple(p.lower() for p in spam_phrases)

    # -- lookups (caller holds the lock) --

    def _admin_lookup(self, post_id: int, author: str | None) -> Post:
        """Find a post for an admin, in one namespace or across all of them.

        Without an author the namespaces are scanned in author-name order and
        the first post with the ID wins.
        """
        if author is not None:
            namespace = self._posts.get(author)
            if namespace is None:
                raise NotFoundError(ErrorKind.AUTHOR_NOT_FOUND)
            post = namespace.get(post_id)
            if post is None:
                raise NotFoundError(ErrorKind.POST_NOT_FOUND)
            return post
        for name in sorted(self._posts):
            post = self._posts[name].get(post_id)
            if post is not None:
                return post
        raise NotFoundError(ErrorKind.POST_NOT_FOUND)

    def _raise_missing(self, post_id: int, caller: str) -> NoReturn:
        """Explain why a non-admin caller cannot reach ``post_id``."""
        for name, namespace in self._posts.items():
            if name != caller and post_id in namespace:
                raise AccessDeniedError(f"post {post_id} belongs to another author")
        if caller not in self._posts:
            raise NotFoundError(ErrorKind.AUTHOR_NOT_FOUND)
        raise NotFoundError(ErrorKind.POST_NOT_FOUND)

    # -- operations --

    async def create(self, draft: PostDraft, caller: str) -> Post:
        with _observed("create", caller):
            # Admin may open any namespace; authors may bootstrap their own.
            resolve_author(caller, draft.author)
            async with self._lock:
                namespace = self._posts.get(draft.author, {})
                if any(p.title == draft.title for p in namespace.values()):
                    raise InvalidPostError(ErrorKind.UNIQUE_TITLE)
                check_post(draft.title, draft.content, draft.author, self._spam_phrases)
                post_id = self._last_id.get(draft.author, 0) + 1
                self._last_id[draft.author] = post_id
                post = Post(
                    id=post_id, title=draft.title, content=draft.content, author=draft.author
                )
                self._posts.setdefault(draft.author, {})[post_id] = post
        await log.ainfo("post_created", caller=caller, author=post.author, post_id=post.id)
        return post

    async def get_all(self, caller: str) -> list[Post]:
        with _observed("get_all", caller):
            async with self._lock:
                if is_admin(caller):
                    posts = [p for ns in self._posts.values() for p in ns.values()]
                    return sorted(posts, key=lambda p: (p.id, p.author))
                namespace = self._posts.get(caller)
                if not namespace:
                    raise NotFoundError(ErrorKind.AUTHOR_NOT_FOUND)
                return sorted(namespace.values(), key=lambda p: p.id)

    async def get(self, post_id: int, caller: str, author: str | None = None) -> Post:
        with _observed("get", caller):
            if is_admin(caller):
                async with self._lock:
                    return self._admin_lookup(post_id, author)
            # Reads never reveal other namespaces, not even that they exist.
            if author is not None and author != caller:
                raise NotFoundError(ErrorKind.AUTHOR_NOT_FOUND)
            async with self._lock:
                namespace = self._posts.get(caller)
                if namespace is None:
                    raise NotFoundError(ErrorKind.AUTHOR_NOT_FOUND)
                post = namespace.get(post_id)
                if post is None:
                    raise NotFoundError(ErrorKind.POST_NOT_FOUND)
                return post

    async def update(self, update: PostUpdate, caller: str) -> Post:
        with _observed("update", caller):
            admin = is_admin(caller)
            if update.author is not None:
                resolve_author(caller, update.author)
            async with self._lock:
                if admin:
                    check_post(update.title, update.content, update.author, self._spam_phrases)
                    current = self._admin_lookup(update.id, update.author)
                else:
                    if caller not in self._posts:
                        self._raise_missing(update.id, caller)
                    check_post(update.title, update.content, caller, self._spam_phrases)
                    current = self._posts[caller].get(update.id)
                    if current is None:
                        self._raise_missing(update.id, caller)
                # Title uniqueness is only enforced on create.
                updated = current.model_copy(
                    update={"title": update.title, "content": update.content}
                )
                self._posts[current.author][current.id] = updated
        await log.ainfo("post_updated", caller=caller, author=updated.author, post_id=updated.id)
        return updated

    async def delete(self, post_id: int, caller: str, author: str | None = None) -> None:
        with _observed("delete", caller):
            admin = is_admin(caller)
            if author is not None:
                resolve_author(caller, author)
            async with self._lock:
                if admin:
                    target = self._admin_lookup(post_id, author)
                else:
                    namespace = self._posts.get(caller)
                    if namespace is None or post_id not in namespace:
                        self._raise_missing(post_id, caller)
                    target = namespace[post_id]
                del self._posts[target.author][target.id]
        await log.ainfo("post_deleted", caller=caller, author=target.author, post_id=post_id)
