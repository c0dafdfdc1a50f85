"""Displaying events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from fpcli.output import GenericKeyValue


def print_labels(labels: Mapping[str, str | None]) -> str:
    """Join labels as key=value, or just key when there is no value."""
    return ", ".join(key if value is None else f"{key}={value}" for key, value in labels.items())


def _format_rfc3339(moment: datetime | str | None) -> str:
    if moment is None:
        return ""
    if isinstance(moment, str):
        return moment
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass
class EventRow:
    """One event as a row of the event table."""

    id: str = field(metadata={"title": "ID"})
    title: str = field(metadata={"title": "Title"})
    labels: dict[str, str | None] = field(metadata={"title": "Labels", "display": print_labels})
    time: str = field(metadata={"title": "Time"})

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> EventRow:
        """Make a row from an event as returned by the API."""
        return cls(
            id=str(event["id"]),
            title=event.get("title", ""),
            labels=dict(event.get("labels") or {}),
            time=_format_rfc3339(event.get("occurrence_time")),
        )


def event_details(event: Mapping[str, Any]) -> list[GenericKeyValue]:
    """The details of one event as labelled rows."""
    return [
        GenericKeyValue("Title:", event.get("title", "")),
        GenericKeyValue("Labels:", print_labels(event.get("labels") or {})),
        GenericKeyValue("Occurrence Time:", _format_rfc3339(event.get("occurrence_time"))),
        GenericKeyValue("ID:", str(event["id"])),
    ]