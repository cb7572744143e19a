"""Load the initial dataset through the store's ordinary create path."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog
from pydantic import ValidationError

from blog_api.authors import AuthorService
from blog_api.authz import ADMIN
from blog_api.errors import BlogError, ErrorKind
from blog_api.metrics import seed_posts_total
from blog_api.models import PostDraft, SeedFile
from blog_api.store import PostStore

log = structlog.get_logger()


class SeedLoadError(Exception):
    """The seed file could not be read or parsed. Fatal at startup."""


@dataclass
class SeedReport:
    created: int = 0
    rejected: list[tuple[int, ErrorKind]] = field(default_factory=list)


def load_seed_file(path: str | Path) -> SeedFile:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SeedLoadError(f"cannot read seed file {path}: {exc}") from exc
    try:
        return SeedFile.model_validate_json(raw)
    except ValidationError as exc:
        raise SeedLoadError(f"malformed seed file {path}: {exc}") from exc


async def seed_store(store: PostStore, authors: AuthorService, data: SeedFile) -> SeedReport:
    """Create every seed post as admin; rejected posts are logged and skipped."""
    for entry in data.authors:
        try:
            authors.register(entry.author, entry.password)
        except (BlogError, ValueError) as exc:
            raise SeedLoadError(f"invalid seed author {entry.author!r}: {exc}") from exc

    report = SeedReport()
    for index, item in enumerate(data.posts):
        draft = PostDraft(title=item.title, content=item.content, author=item.author)
        try:
            await store.create(draft, ADMIN)
        except BlogError as exc:
            report.rejected.append((index, exc.kind))
            seed_posts_total.add(1, {"outcome": "rejected"})
            await log.awarning("seed_post_rejected", index=index, kind=exc.kind.value)
            continue
        seed_posts_total.add(1, {"outcome": "created"})
        report.created += 1
        if item.author != ADMIN:
            authors.ensure(item.author)

    await log.ainfo("seed_complete", created=report.created, rejected=len(report.rejected))
    return report
