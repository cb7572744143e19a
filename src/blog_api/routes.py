"""HTTP endpoints: login and author-scoped post CRUD."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from blog_api.auth import current_author, issue_token
from blog_api.authors import AuthorService
from blog_api.authz import resolve_author
from blog_api.errors import BlogError, ErrorBand
from blog_api.metrics import login_attempts_total
from blog_api.models import LoginRequest, Post, PostCreate, PostDraft, PostUpdate, TokenResponse
from blog_api.store import PostStore

log = structlog.get_logger()

router = APIRouter()

STATUS_BY_BAND = {
    ErrorBand.INPUT: 400,
    ErrorBand.AUTHORIZATION: 403,
    ErrorBand.NOT_FOUND: 404,
}


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    """Map a core error onto its HTTP status; registered on the app."""
    return JSONResponse(
        status_code=STATUS_BY_BAND[exc.band],
        content={"error": exc.kind.value, "detail": exc.message},
    )


def _store(request: Request) -> PostStore:
    store: PostStore = request.app.state.store
    return store


@router.post("/login", response_model=TokenResponse)
async def login(request: Request, credentials: LoginRequest) -> TokenResponse:
    authors: AuthorService = request.app.state.authors
    if not authors.valid_author(credentials.author, credentials.password):
        login_attempts_total.add(1, {"outcome": "rejected"})
        await log.awarning("login_failed", author=credentials.author)
        raise HTTPException(
            status_code=401, detail="invalid credentials", headers={"WWW-Authenticate": "Bearer"}
        )
    login_attempts_total.add(1, {"outcome": "ok"})
    await log.ainfo("login_succeeded", author=credentials.author)
    return TokenResponse(token=issue_token(credentials.author, request.app.state.settings))


@router.post("/api/posts", status_code=201, response_model=Post)
async def create_post(
    request: Request, body: PostCreate, caller: str = Depends(current_author)
) -> Post:
    author = resolve_author(caller, body.author)
    draft = PostDraft(title=body.title, content=body.content, author=author)
    return await _store(request).create(draft, caller)


@router.get("/api/posts", response_model=list[Post])
async def list_posts(request: Request, caller: str = Depends(current_author)) -> list[Post]:
    return await _store(request).get_all(caller)


@router.get("/api/posts/{post_id}", response_model=Post)
async def read_post(
    request: Request,
    post_id: int,
    author: str | None = None,
    caller: str = Depends(current_author),
) -> Post:
    return await _store(request).get(post_id, caller, author=author)


@router.put("/api/posts/{post_id}", status_code=202, response_model=Post)
async def update_post(
    request: Request,
    post_id: int,
    body: PostUpdate,
    caller: str = Depends(current_author),
) -> Post:
    if body.id != post_id:
        raise HTTPException(status_code=400, detail="mismatching ids in request and url")
    if body.author is not None:
        resolve_author(caller, body.author)
    return await _store(request).update(body, caller)


@router.delete("/api/posts/{post_id}", status_code=202)
async def delete_post(
    request: Request,
    post_id: int,
    author: str | None = None,
    caller: str = Depends(current_author),
) -> dict[str, bool]:
    await _store(request).delete(post_id, caller, author=author)
    return {"deleted": True}
