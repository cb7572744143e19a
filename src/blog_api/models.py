"""Pydantic models for posts, request bodies and the seed file."""

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """A stored blog post. Replaced, never mutated, when edited."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Per-author post ID, assigned by the store")
    title: str
    content: str
    author: str = Field(description="Identity of the owning author")


class PostDraft(BaseModel):
    """A post submitted for creation; the store assigns the ID."""

    model_config = ConfigDict(strict=True)

    title: str
    content: str
    author: str


class PostUpdate(BaseModel):
    """Replacement title/content for an existing post.

    ``author`` selects the namespace; it defaults to the caller and only an
    admin may name somebody else.
    """

    model_config = ConfigDict(strict=True)

    id: int
    title: str
    content: str
    author: str | None = None


class PostCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    title: str
    content: str
    author: str | None = Field(default=None, description="Defaults to the caller")


class LoginRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    author: str
    password: str


class TokenResponse(BaseModel):
    token: str


class SeedAuthor(BaseModel):
    author: str
    password: str


class SeedPost(BaseModel):
    id: int | None = Field(default=None, description="Ignored; the store assigns IDs")
    title: str
    content: str
    author: str


class SeedFile(BaseModel):
    """Initial dataset loaded at startup."""

    posts: list[SeedPost] = Field(default_factory=list)
    authors: list[SeedAuthor] = Field(default_factory=list)
