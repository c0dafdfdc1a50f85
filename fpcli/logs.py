"""Recognising log records in command output."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator

from fpcli.timestamps import parse_any_timestamp

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("@timestamp", "timestamp", "fields.timestamp", "ts")
BODY_FIELDS = ("body", "message", "fields.body", "fields.message", "log", "msg")
# Mapping recommended from the Elastic Common Schema to OpenTelemetry logs.
RESOURCE_FIELD_PREFIXES = ("agent.", "cloud.", "container.", "host.", "service.")
RESOURCE_FIELD_EXCEPTIONS = ("container.labels", "host.uptime", "service.state")

_MISSING = object()


@dataclass
class OtelMetadata:
    """OpenTelemetry details of a log record."""

    attributes: dict[str, Any] = field(default_factory=dict)
    resource: dict[str, Any] = field(default_factory=dict)
    span_id: bytes | None = None
    trace_id: bytes | None = None


@dataclass
class Event:
    """A single log record."""

    time: datetime
    title: str
    otel: OtelMetadata = field(default_factory=OtelMetadata)


# Grok building blocks used by the recognised line formats.
_USER = r"[a-zA-Z0-9._-]+"
_INT = r"(?:[+-]?(?:[0-9]+))"
_NUMBER = r"(?:(?<![0-9.+-])(?>[+-]?(?:(?:[0-9]+(?:\.[0-9]+)?)|(?:\.[0-9]+))))"
_WORD = r"\b\w+\b"
_NOTSPACE = r"\S+"
_SPACE = r"\s*"
_DATA = r".*?"
_GREEDYDATA = r".*"
_QS = (
    r"(?>(?<!\\)(?>\"(?>\\.|[^\\\"]+)+\"|\"\"|(?>'(?>\\.|[^\\']+)+')|''"
    r"|(?>`(?>\\.|[^\\`]+)+`)|``))"
)
_H16 = r"[0-9A-Fa-f]{1,4}"
_IPV6 = (
    rf"(?:(?:{_H16}:){{7}}{_H16}|(?:{_H16}:){{1,7}}:|(?:{_H16}:){{1,6}}:{_H16}"
    rf"|(?:{_H16}:){{1,5}}(?::{_H16}){{1,2}}|(?:{_H16}:){{1,4}}(?::{_H16}){{1,3}}"
    rf"|(?:{_H16}:){{1,3}}(?::{_H16}){{1,4}}|(?:{_H16}:){{1,2}}(?::{_H16}){{1,5}}"
    rf"|{_H16}:(?::{_H16}){{1,6}}|:(?:(?::{_H16}){{1,7}}|:))(?:%.+)?"
)
_OCTET = r"(?:[0-1]?[0-9]{1,2}|2[0-4][0-9]|25[0-5])"
_IPV4 = rf"(?<![0-9])(?:{_OCTET}[.]{_OCTET}[.]{_OCTET}[.]{_OCTET})(?![0-9])"
_HOSTNAME = (
    r"\b(?:[0-9A-Za-z][0-9A-Za-z-]{0,62})(?:\.(?:[0-9A-Za-z][0-9A-Za-z-]{0,62}))*(?:\.?|\b)"
)
_IPORHOST = rf"(?:(?:{_IPV6}|{_IPV4})|{_HOSTNAME})"
_MONTHDAY = r"(?:(?:0[1-9])|(?:[12][0-9])|(?:3[01])|[1-9])"
_MONTHNUM = r"(?:0?[1-9]|1[0-2])"
_MONTH = (
    r"\b(?:[Jj]an(?:uary|uar)?|[Ff]eb(?:ruary|ruar)?|[Mm](?:a|ä)?r(?:ch|z)?|[Aa]pr(?:il)?"
    r"|[Mm]a(?:y|i)?|[Jj]un(?:e|i)?|[Jj]ul(?:y|i)?|[Aa]ug(?:ust)?|[Ss]ep(?:tember)?"
    r"|[Oo](?:c|k)?t(?:ober)?|[Nn]ov(?:ember)?|[Dd]e(?:c|z)(?:ember)?)\b"
)
_YEAR = r"(?>\d\d){1,2}"
_HOUR = r"(?:2[0123]|[01]?[0-9])"
_MINUTE = r"(?:[0-5][0-9])"
_SECOND = r"(?:(?:[0-5]?[0-9]|60)(?:[:.,][0-9]+)?)"
_TIME = rf"(?!<[0-9]){_HOUR}:{_MINUTE}(?::{_SECOND})(?![0-9])"
_HTTPDATE = rf"{_MONTHDAY}/{_MONTH}/{_YEAR}:{_TIME} {_INT}"
_ISO8601_TIMEZONE = rf"(?:Z|[+-]{_HOUR}(?::?{_MINUTE}))"
_TIMESTAMP_ISO8601 = (
    rf"{_YEAR}-{_MONTHNUM}-{_MONTHDAY}[T ]{_HOUR}:?{_MINUTE}(?::?{_SECOND})?{_ISO8601_TIMEZONE}?"
)

_NGINX_PATTERN = re.compile(
    rf"(?P<clientip>{_IPORHOST}) (?P<ident>{_USER}) (?P<auth>{_USER}) "
    rf"\[(?P<timestamp>{_HTTPDATE})\] "
    rf"\"(?:(?P<verb>{_WORD}) (?P<request>{_NOTSPACE})(?: HTTP/(?P<httpversion>{_NUMBER}))?"
    rf"|(?P<rawrequest>{_DATA}))\" "
    rf"(?P<response>{_NUMBER}) (?:(?P<bytes>{_NUMBER})|-) "
    rf"(?P<referrer>{_QS}) (?P<agent>{_QS})"
)
_GITHUB_ACTION_PATTERN = re.compile(
    rf"(?P<job>{_WORD}){_SPACE}(?P<step>{_DATA}){_SPACE}"
    rf"(?P<timestamp>{_TIMESTAMP_ISO8601}){_SPACE}(?P<body>{_GREEDYDATA})"
)


def parse_logs(output: str) -> list[Event]:
    """Parse every non-empty line of the output into an event.

    Lines that are not recognised as log records take the time of the nearest
    record: the preceding one, or, before the first, the following one, or the
    current time when there is none.
    """
    logs: list[Event] = []
    most_recent_time: datetime | None = None
    pending: list[str] = []

    for raw_line in output.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        record = parse_log(line)
        if record is not None:
            logs.extend(Event(time=record.time, title=text) for text in pending)
            pending.clear()
            most_recent_time = record.time
            logs.append(record)
        elif most_recent_time is not None:
            logs.append(Event(time=most_recent_time, title=line))
        else:
            pending.append(line)

    if pending:
        now = datetime.now(timezone.utc)
        logs.extend(Event(time=now, title=text) for text in pending)
    return logs


def contains_logs(output: str) -> bool:
    """Tell whether any line of the output is a recognisable log record."""
    return any(
        parse_log(line) is not None for line in output.split("\n") if line.strip()
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_log(line: str) -> Event | None:
    """Parse one line as a JSON, nginx or GitHub Actions log record."""
    try:
        decoded = json.loads(line, parse_constant=_reject_constant)
    except ValueError:
        decoded = None
    if isinstance(decoded, dict):
        return _parse_json(decoded)

    match = _NGINX_PATTERN.search(line) or _GITHUB_ACTION_PATTERN.search(line)
    if match is None:
        return None
    fields = {
        name: value.strip('"')
        for name, value in match.groupdict().items()
        if value is not None
    }
    return _parse_flattened(fields)


def _flatten(key: str, value: Any) -> Iterator[tuple[str, Any]]:
    if isinstance(value, dict):
        for sub_key, sub_value in sorted(value.items()):
            yield from _flatten(f"{key}.{sub_key}", sub_value)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from _flatten(f"{key}[{index}]", item)
    else:
        yield key, value


def flatten_nested_value(key: str, value: Any) -> dict[str, Any]:
    """Flatten nested objects and arrays into dotted and indexed keys."""
    return dict(_flatten(key, value))


def _parse_json(document: dict[str, Any]) -> Event | None:
    fields: dict[str, Any] = {}
    for key, value in sorted(document.items()):
        fields.update(_flatten(key, value))
    return _parse_flattened(fields)


def _pop_first(fields: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in fields:
            return fields.pop(key)
    return _MISSING


def _fixed_id(value: Any, size: int) -> bytes | None:
    if not isinstance(value, str):
        return None
    encoded = value.encode("utf-8")
    return encoded if len(encoded) == size else None


def _parse_flattened(fields: dict[str, Any]) -> Event | None:
    trace_id = _pop_first(fields, "trace_id", "trace.id")
    span_id = _pop_first(fields, "span_id", "span.id")

    time: datetime | None = None
    for name in TIMESTAMP_FIELDS:
        if name not in fields:
            continue
        raw = fields.pop(name)
        try:
            time = parse_any_timestamp(raw).time
            break
        except ValueError as err:
            logger.warning("Unable to parse timestamp: %s", err)

    body = ""
    for name in BODY_FIELDS:
        if name in fields:
            raw = fields.pop(name)
            body = raw if isinstance(raw, str) else json.dumps(
                raw, separators=(",", ":"), ensure_ascii=False
            )
            break

    resource: dict[str, Any] = {}
    attributes: dict[str, Any] = {}
    for key in sorted(fields):
        is_resource = key.startswith(RESOURCE_FIELD_PREFIXES) and key not in RESOURCE_FIELD_EXCEPTIONS
        (resource if is_resource else attributes)[key] = fields[key]

    if time is None:
        return None
    return Event(
        time=time,
        title=body,
        otel=OtelMetadata(
            attributes=attributes,
            resource=resource,
            span_id=_fixed_id(span_id, 8),
            trace_id=_fixed_id(trace_id, 16),
        ),
    )