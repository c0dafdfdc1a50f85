"""Names of resources, and turning free text into one."""

from __future__ import annotations

import string

MAX_NAME_LENGTH = 63
_ALLOWED = frozenset(string.ascii_lowercase + string.digits + "-")
_ALPHANUMERIC = frozenset(string.ascii_lowercase + string.digits)
_ASCII_WHITESPACE = frozenset(" \t\n\x0c\r")
_ASCII_PUNCTUATION = frozenset(string.punctuation)


class Name(str):
    """A resource name.

    Names are 1 to 63 characters of lowercase ASCII letters, digits and
    dashes, and start and end with a letter or digit.
    """

    __slots__ = ()

    def __new__(cls, text: str) -> Name:
        text = str(text)
        if not text:
            raise ValueError("name must not be empty")
        if len(text) > MAX_NAME_LENGTH:
            raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters long")
        if not set(text) <= _ALLOWED:
            raise ValueError(
                "name may only contain lowercase alphanumeric ASCII characters and dashes"
            )
        if text[0] not in _ALPHANUMERIC or text[-1] not in _ALPHANUMERIC:
            raise ValueError("name must start and end with an alphanumeric character")
        return super().__new__(cls, text)

    @classmethod
    def parse(cls, text: str) -> Name:
        """Validate the text as a name."""
        return cls(text)


def _slug_chars(text: str):
    for char in text:
        for lower in char.lower():
            if lower in string.ascii_lowercase:
                yield lower
            elif lower in _ASCII_PUNCTUATION or lower in _ASCII_WHITESPACE:
                yield "-"


def sluggify_str(text: str) -> Name | None:
    """Turn text into a name, or None when nothing usable is left (only emoji, say)."""
    candidate = "".join(_slug_chars(text))
    trimmed = candidate[: MAX_NAME_LENGTH + 1].strip("-")
    try:
        return Name(trimmed)
    except ValueError:
        return None