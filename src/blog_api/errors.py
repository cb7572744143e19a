"""Error kinds raised by the validation engine and the post store."""

from __future__ import annotations

from enum import Enum


class ErrorBand(str, Enum):
    """Coarse grouping used by callers to decide how to surface an error."""

    INPUT = "input"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"


class ErrorKind(str, Enum):
    # Title
    TITLE_EMPTY = "title_empty"
    TITLE_LENGTH_INVALID = "title_length_invalid"
    TITLE_INVALID_CHARS = "title_invalid_chars"
    TITLE_FORMAT_INVALID = "title_format_invalid"
    TITLE_SPAMMY = "title_spammy"
    TITLE_CAPITALIZATION_INVALID = "title_capitalization_invalid"
    # Content
    CONTENT_EMPTY = "content_empty"
    CONTENT_LENGTH_INVALID = "content_length_invalid"
    CONTENT_ENCODING_INVALID = "content_encoding_invalid"
    CONTENT_INVALID_CHARS = "content_invalid_chars"
    CONTENT_CONSECUTIVE_CHAR = "content_consecutive_char"
    # Author
    AUTHOR_EMPTY = "author_empty"
    AUTHOR_NAME_INVALID = "author_name_invalid"
    # Store
    UNIQUE_TITLE = "unique_title"
    AUTHOR_NOT_ALLOWED = "author_not_allowed"
    POST_NOT_FOUND = "post_not_found"
    AUTHOR_NOT_FOUND = "author_not_found"

    @property
    def band(self) -> ErrorBand:
        return _BANDS.get(self, ErrorBand.INPUT)


_BANDS = {
    ErrorKind.AUTHOR_NOT_ALLOWED: ErrorBand.AUTHORIZATION,
    ErrorKind.POST_NOT_FOUND: ErrorBand.NOT_FOUND,
    ErrorKind.AUTHOR_NOT_FOUND: ErrorBand.NOT_FOUND,
}

_MESSAGES = {
    ErrorKind.TITLE_EMPTY: "title is empty",
    ErrorKind.TITLE_LENGTH_INVALID: "title must be between 5 and 60 characters",
    ErrorKind.TITLE_INVALID_CHARS: "title contains too many special characters",
    ErrorKind.TITLE_FORMAT_INVALID: "title contains consecutive whitespace",
    ErrorKind.TITLE_SPAMMY: "title contains a spam phrase",
    ErrorKind.TITLE_CAPITALIZATION_INVALID: "title words must be capitalized",
    ErrorKind.CONTENT_EMPTY: "content is empty",
    ErrorKind.CONTENT_LENGTH_INVALID: "content must be between 100 and 1600 characters",
    ErrorKind.CONTENT_ENCODING_INVALID: "content is not valid unicode text",
    ErrorKind.CONTENT_INVALID_CHARS: "content contains too many special characters",
    ErrorKind.CONTENT_CONSECUTIVE_CHAR: "content repeats a character 4 or more times in a row",
    ErrorKind.AUTHOR_EMPTY: "author is empty",
    ErrorKind.AUTHOR_NAME_INVALID: "author must be between 2 and 70 characters",
    ErrorKind.UNIQUE_TITLE: "title already exists",
    ErrorKind.AUTHOR_NOT_ALLOWED: "author not allowed",
    ErrorKind.POST_NOT_FOUND: "post not found",
    ErrorKind.AUTHOR_NOT_FOUND: "author not found",
}


class BlogError(Exception):
    """Base class for every error the core raises.

    Carries a specific ``ErrorKind``; the band is derived from the kind.
    """

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or _MESSAGES[kind]
        super().__init__(self.message)

    @property
    def band(self) -> ErrorBand:
        return self.kind.band

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value!r})"


class InvalidPostError(BlogError):
    """A title, content or author was rejected, or the title is not unique."""


class AccessDeniedError(BlogError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(ErrorKind.AUTHOR_NOT_ALLOWED, message)


class NotFoundError(BlogError):
    """The referenced post or author namespace does not exist."""
