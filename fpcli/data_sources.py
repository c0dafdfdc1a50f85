"""Displaying data sources and parsing their provider configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from fpcli.events import _format_rfc3339
from fpcli.output import GenericKeyValue

# Direct (non-proxied) data sources always speak this provider protocol.
PROTOCOL_VERSION = 2


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


@dataclass
class ProviderConfig:
    """The configuration of a provider: a JSON object."""

    values: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> ProviderConfig:
        """Parse a JSON object; anything else is an error."""
        try:
            decoded = json.loads(text, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ValueError(f"Error parsing provider config as JSON: {exc}") from exc
        if not isinstance(decoded, dict):
            raise ValueError("Error parsing provider config as JSON: expected an object")
        return cls(decoded)

    def to_json(self) -> str:
        """The configuration as compact JSON."""
        return _compact_json(self.values)


@dataclass
class DataSourceRow:
    """One data source as a row of the data source table."""

    name: str = field(metadata={"title": "Name"})
    description: str = field(metadata={"title": "Description"})
    daemon_name: str = field(metadata={"title": "Daemon Name"})
    provider_type: str = field(metadata={"title": "Provider Type"})
    updated_at: str = field(metadata={"title": "Updated at"})
    created_at: str = field(metadata={"title": "Created at"})

    @classmethod
    def from_data_source(cls, data_source: Mapping[str, Any]) -> DataSourceRow:
        """Make a row from a data source as returned by the API."""
        return cls(
            name=str(data_source["name"]),
            description=data_source.get("description") or "",
            daemon_name=str(data_source.get("proxy_name") or ""),
            provider_type=data_source.get("provider_type", ""),
            updated_at=_format_rfc3339(data_source.get("updated_at")),
            created_at=_format_rfc3339(data_source.get("created_at")),
        )


def data_source_details(data_source: Mapping[str, Any]) -> list[GenericKeyValue]:
    """The details of one data source as labelled rows."""
    config = data_source.get("config")
    return [
        GenericKeyValue("Name", str(data_source["name"])),
        GenericKeyValue("Description", data_source.get("description") or ""),
        GenericKeyValue("Provider Type", data_source.get("provider_type", "")),
        GenericKeyValue("Config", _compact_json(config) if config is not None else ""),
        GenericKeyValue("Created At", _format_rfc3339(data_source.get("created_at"))),
        GenericKeyValue("Updated At", _format_rfc3339(data_source.get("updated_at"))),
    ]