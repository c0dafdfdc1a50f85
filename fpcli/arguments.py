"""Parsing of command-line values shared by several commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

DEFAULT_NOTEBOOK_TITLE = "Untitled"


@dataclass(frozen=True)
class KeyValueArgument:
    """A `key=value` pair given on the command line; the value may be empty."""

    key: str
    value: str = ""

    @classmethod
    def parse(cls, text: str) -> KeyValueArgument:
        """Split at the first `=`; text without one is a key with an empty value."""
        if not text:
            raise ValueError("empty input")
        key, _, value = text.partition("=")
        return cls(key=key, value=value)

    def to_label(self) -> dict[str, str]:
        """The pair as a label, in the shape the API expects."""
        return {"key": self.key, "value": self.value}


def labels_to_map(arguments: Iterable[KeyValueArgument] | None) -> dict[str, str] | None:
    """Collect the pairs into a mapping of key to value, or None when there are none.

    A key given more than once keeps its last value.
    """
    if arguments is None:
        return None
    labels = {argument.key: argument.value for argument in arguments}
    return labels or None


def notebook_title(words: Iterable[str]) -> str:
    """Join the words of a title, falling back to the default title."""
    words = list(words)
    if not words:
        return DEFAULT_NOTEBOOK_TITLE
    return " ".join(words)