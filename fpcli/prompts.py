"""Asking the user for values that were not given on the command line."""

from __future__ import annotations

import sys
from typing import Sequence

from fpcli.naming import Name

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})


def _ask(text: str) -> str:
    sys.stderr.write(text)
    sys.stderr.flush()
    return input()


def _prompt_text(prompt: str, default: object | None) -> str:
    if default is None:
        return f"{prompt}: "
    return f"{prompt} [{default}]: "


def text_opt(prompt: str, argument: str | None, default: str | None = None) -> str | None:
    """Take the argument if given, else ask; an empty answer gives the default.

    When the question cannot be asked (no input available) the default is
    returned as well.
    """
    if argument is not None:
        return argument
    try:
        answer = _ask(_prompt_text(prompt, default))
    except (EOFError, OSError):
        return default
    return answer if answer else default


def text_req(prompt: str, argument: str | None, default: str | None = None) -> str:
    """Like text_opt, but a missing value is an error."""
    value = text_opt(prompt, argument, default)
    if value is None:
        raise ValueError("No value provided")
    return value


def name_opt(prompt: str, argument: str | None, default: str | None = None) -> Name | None:
    """Take the argument if given, else ask until a valid name or nothing is entered."""
    if argument is not None:
        return Name(argument)
    default_name = Name(default) if default is not None else None
    while True:
        try:
            answer = _ask(_prompt_text(prompt, default_name))
        except (EOFError, OSError):
            return default_name
        if not answer:
            return default_name
        try:
            return Name(answer)
        except ValueError as err:
            sys.stderr.write(f"{err}\n")


def name_req(prompt: str, argument: str | None, default: str | None = None) -> Name:
    """Like name_opt, but a missing value is an error."""
    value = name_opt(prompt, argument, default)
    if value is None:
        raise ValueError("No value provided")
    return value


def bool_req(prompt: str, argument: bool | None, default: bool) -> bool:
    """Take the argument if given, else ask a yes/no question."""
    if argument is not None:
        return argument
    choices = "[Y/n]" if default else "[y/N]"
    while True:
        try:
            answer = _ask(f"{prompt} {choices}: ").strip().lower()
        except (EOFError, OSError):
            return default
        if not answer:
            return default
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        sys.stderr.write("Please answer yes or no\n")


def select_item(prompt: str, items: Sequence[object], default: int | None = None) -> int:
    """Let the user pick one of the items; return its index.

    The answer may be the item's number, or text that the item contains
    (the first such item is taken). An empty answer picks the default.
    """
    if not items:
        raise ValueError("No items to select from")
    labels = [str(item) for item in items]
    default_index = default if default is not None else 0
    if not 0 <= default_index < len(labels):
        raise ValueError("default index out of range")

    listing = "".join(f"{number:>3}) {label}\n" for number, label in enumerate(labels, start=1))
    while True:
        try:
            answer = _ask(f"{listing}{prompt} [{default_index + 1}]: ").strip()
        except (EOFError, OSError) as exc:
            raise RuntimeError("No item selected") from exc
        if not answer:
            return default_index
        if answer.isdigit() and 1 <= int(answer) <= len(labels):
            return int(answer) - 1
        needle = answer.lower()
        match = next((index for index, label in enumerate(labels) if needle in label.lower()), None)
        if match is not None:
            return match
        sys.stderr.write("No matching item\n")