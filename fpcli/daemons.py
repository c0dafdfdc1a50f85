"""Summaries and details of daemons (proxies) and their data sources."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from fpcli.output import GenericKeyValue

_PROXY_STATUS_LABELS = {"connected": "Connected", "disconnected": "Disconnected"}
_DATA_SOURCE_STATUS_LABELS = {"connected": "Connected", "error": "Error"}


def _proxy_status(proxy: Mapping[str, Any]) -> str:
    """The proxy's status in lower case, as the API spells it."""
    return str(proxy.get("status", "")).lower()


def _proxy_status_label(proxy: Mapping[str, Any]) -> str:
    status = _proxy_status(proxy)
    return _PROXY_STATUS_LABELS.get(status, str(proxy.get("status", "")))


def _data_source_status(data_source: Mapping[str, Any]) -> tuple[str | None, Any]:
    """Return the normalised status ("connected", "error" or None) and the error, if any.

    The status may be a plain string, with the error beside it, or an object
    holding the error. Unknown statuses come back as they are.
    """
    status = data_source.get("status")
    if status is None:
        return None, None
    if isinstance(status, Mapping):
        if "error" in status:
            return "error", status["error"]
        inner = status.get("status")
        if inner is None:
            return str(status), None
        return str(inner).lower(), status.get("error")
    normalised = str(status).lower()
    if normalised == "error":
        return "error", data_source.get("error")
    return normalised, None


def _is_connected(data_source: Mapping[str, Any]) -> bool:
    return _data_source_status(data_source)[0] == "connected"


@dataclass
class ProxySummaryWithCounts:
    """A daemon summary with the number of its data sources and of those connected."""

    proxy: dict[str, Any]
    connected_data_sources: int = 0
    total_data_sources: int = 0


def count_proxy_data_sources(
    proxies: Iterable[Mapping[str, Any]],
    data_sources: Iterable[Mapping[str, Any]],
) -> list[ProxySummaryWithCounts]:
    """Count each daemon's data sources, and the connected ones among them.

    The summaries come back ordered by daemon name; of daemons sharing a name
    the last one is kept. Data sources of unknown daemons are ignored.
    """
    by_name: dict[str, ProxySummaryWithCounts] = {
        str(proxy["name"]): ProxySummaryWithCounts(proxy=dict(proxy)) for proxy in proxies
    }
    for data_source in data_sources:
        proxy_name = data_source.get("proxy_name")
        if proxy_name is None:
            continue
        summary = by_name.get(str(proxy_name))
        if summary is None:
            continue
        summary.total_data_sources += 1
        if _is_connected(data_source):
            summary.connected_data_sources += 1
    return [by_name[name] for name in sorted(by_name)]


def _sort_key(summary: ProxySummaryWithCounts) -> tuple[int, int]:
    status = _proxy_status(summary.proxy)
    if status == "connected":
        return (0, -summary.connected_data_sources)
    if status == "disconnected":
        return (1, -summary.total_data_sources)
    raise ValueError(f"Unknown daemon status: {summary.proxy.get('status')!r}")


def sort_proxy_summaries(
    summaries: Iterable[ProxySummaryWithCounts],
) -> list[ProxySummaryWithCounts]:
    """Connected daemons first, by connected data sources; then the rest, by data sources.

    Both counts sort from most to fewest; ties keep their order.
    """
    summaries = list(summaries)
    if len(summaries) < 2:
        return summaries
    return sorted(summaries, key=_sort_key)


@dataclass
class ProxySummaryRow:
    """One daemon as a row of the daemon table."""

    name: str = field(metadata={"title": "Name"})
    id: str = field(metadata={"title": "ID"})
    status: str = field(metadata={"title": "Status"})
    data_sources_connected: str = field(metadata={"title": "Connected Data Sources"})

    @classmethod
    def from_summary(cls, summary: ProxySummaryWithCounts) -> ProxySummaryRow:
        """Make a row from a daemon summary with its counts."""
        proxy = summary.proxy
        return cls(
            name=str(proxy["name"]),
            id=str(proxy["id"]),
            status=_proxy_status_label(proxy),
            data_sources_connected=(
                f"{summary.connected_data_sources} / {summary.total_data_sources}"
            ),
        )


@dataclass
class DataSourceAndProxySummaryRow:
    """One data source, with the daemon it belongs to, as a table row."""

    name: str = field(metadata={"title": "Name"})
    daemon_name: str = field(metadata={"title": "Daemon Name"})
    provider_type: str = field(metadata={"title": "Provider Type"})
    status: str = field(metadata={"title": "Status"})

    @classmethod
    def from_data_source(cls, data_source: Mapping[str, Any]) -> DataSourceAndProxySummaryRow:
        """Make a row from a data source as returned by the API."""
        status, _ = _data_source_status(data_source)
        if status is None:
            label = ""
        elif status in _DATA_SOURCE_STATUS_LABELS:
            label = _DATA_SOURCE_STATUS_LABELS[status]
        else:
            raise ValueError(f"Unknown DataSourceStatus: {data_source.get('status')!r}")
        proxy_name = data_source.get("proxy_name")
        return cls(
            name=str(data_source["name"]),
            daemon_name="" if proxy_name is None else str(proxy_name),
            provider_type=str(data_source.get("provider_type", "")),
            status=label,
        )


def _data_source_line(data_source: Mapping[str, Any]) -> str:
    status, error = _data_source_status(data_source)
    if status is None:
        label = ""
    else:
        label = _DATA_SOURCE_STATUS_LABELS.get(status, status)
    suffix = ""
    if status == "error":
        suffix = " - " + json.dumps(error, separators=(",", ":"), ensure_ascii=False)
    return f"{data_source['name']} ({data_source.get('provider_type', '')}): {label}{suffix}"


def proxy_details(proxy: Mapping[str, Any]) -> list[GenericKeyValue]:
    """The details of one daemon, its data sources included, as labelled rows."""
    data_sources = proxy.get("data_sources") or []
    if data_sources:
        listing = "\n".join(_data_source_line(data_source) for data_source in data_sources)
    else:
        listing = "(none)"
    return [
        GenericKeyValue("Name:", str(proxy["name"])),
        GenericKeyValue("ID:", str(proxy["id"])),
        GenericKeyValue("Status:", _proxy_status_label(proxy)),
        GenericKeyValue("Data sources:", listing),
    ]