"""Editorial rules for post titles, content and author names.

Each ``validate_*`` function is pure: it returns the first ``ErrorKind`` the
value violates, or ``None`` when the value is acceptable. ``check_post`` runs
the three checks in their fixed order (title, content, author) and raises on
the first failure.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from blog_api.errors import ErrorKind, InvalidPostError

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 60
CONTENT_MIN_LENGTH = 100
CONTENT_MAX_LENGTH = 1600
AUTHOR_MIN_LENGTH = 2
AUTHOR_MAX_LENGTH = 70

# Share of special characters above which a title or content is rejected.
SPECIAL_CHAR_RATIO = 0.10
SPECIAL_CHARS = frozenset("!@#$%^&*()_+{}[]:;\"'<,>.?/\\|~`")

DEFAULT_SPAM_PHRASES: tuple[str, ...] = (
    "buy now",
    "discount",
    "free money",
    "click here",
    "limited offer",
)

_REPEATED_WHITESPACE = re.compile(r"\s{2,}")
# A letter or digit followed by three more copies of itself.
_REPEATED_CHAR = re.compile(r"([^\W_])\1{3}")
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _special_ratio(text: str) -> float:
    return sum(1 for c in text if c in SPECIAL_CHARS) / len(text)


def _is_capitalized(word: str) -> bool:
    return word[0].isupper() and all(c.isalpha() and c.islower() for c in word[1:])


def validate_title(
    title: str, spam_phrases: Iterable[str] = DEFAULT_SPAM_PHRASES
) -> ErrorKind | None:
    if not title:
        return ErrorKind.TITLE_EMPTY
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        return ErrorKind.TITLE_LENGTH_INVALID
    if _special_ratio(title) > SPECIAL_CHAR_RATIO:
        return ErrorKind.TITLE_INVALID_CHARS
    if _REPEATED_WHITESPACE.search(title):
        return ErrorKind.TITLE_FORMAT_INVALID
    lowered = title.lower()
    if any(phrase in lowered for phrase in spam_phrases):
        return ErrorKind.TITLE_SPAMMY
    for word in title.split():
        if len(word) < 2 or _NUMBER.fullmatch(word):
            continue
        if not _is_capitalized(word):
            return ErrorKind.TITLE_CAPITALIZATION_INVALID
    return None


def validate_content(content: str) -> ErrorKind | None:
    if not content:
        return ErrorKind.CONTENT_EMPTY
    if not CONTENT_MIN_LENGTH <= len(content) <= CONTENT_MAX_LENGTH:
        return ErrorKind.CONTENT_LENGTH_INVALID
    try:
        content.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates survive JSON decoding but are not text.
        return ErrorKind.CONTENT_ENCODING_INVALID
    if _special_ratio(content) > SPECIAL_CHAR_RATIO:
        return ErrorKind.CONTENT_INVALID_CHARS
    if _REPEATED_CHAR.search(content):
        return ErrorKind.CONTENT_CONSECUTIVE_CHAR
    return None


def validate_author_name(name: str) -> ErrorKind | None:
    if not name:
        return ErrorKind.AUTHOR_EMPTY
    if not AUTHOR_MIN_LENGTH <= len(name) <= AUTHOR_MAX_LENGTH:
        return ErrorKind.AUTHOR_NAME_INVALID
    return None


def check_post(
    title: str,
    content: str,
    author: str | None,
    spam_phrases: Iterable[str] = DEFAULT_SPAM_PHRASES,
) -> None:
    """Raise ``InvalidPostError`` for the first rule the post breaks.

    ``author=None`` skips the author check; used when an admin edits a post
    whose stored author was already validated at creation.
    """
    kind = validate_title(title, spam_phrases) or validate_content(content)
    if kind is None and author is not None:
        kind = validate_author_name(author)
    if kind is not None:
        raise InvalidPostError(kind)
