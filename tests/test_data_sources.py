import json
from datetime import datetime, timezone

import pytest

from fpcli.data_sources import (
    DataSourceRow,
    ProviderConfig,
    data_source_details,
)
from fpcli.output import output_list

MOMENT = datetime(2022, 7, 11, 10, 56, 4, tzinfo=timezone.utc)


def _data_source(**overrides):
    source = {
        "name": "prometheus-prod",
        "description": "Metrics",
        "provider_type": "prometheus",
        "proxy_name": "daemon-one",
        "config": {"url": "http://localhost:9090"},
        "created_at": MOMENT,
        "updated_at": MOMENT,
    }
    source.update(overrides)
    return source


def test_provider_config_parse_object():
    config = ProviderConfig.parse('{"url": "http://localhost:9090"}')
    assert config.values == {"url": "http://localhost:9090"}


def test_provider_config_round_trip():
    config = ProviderConfig({"url": "http://localhost:9090", "timeout": 5, "nested": {"a": [1, 2]}})
    assert ProviderConfig.parse(config.to_json()) == config


def test_provider_config_to_json_is_compact():
    text = ProviderConfig({"url": "x"}).to_json()
    assert " " not in text
    assert json.loads(text) == {"url": "x"}


@pytest.mark.parametrize("text", ["[1, 2]", '"url"', "42", "not json", "{", "NaN"])
def test_provider_config_rejects_non_objects(text):
    with pytest.raises(ValueError, match="Error parsing provider config as JSON"):
        ProviderConfig.parse(text)


def test_row_from_data_source():
    row = DataSourceRow.from_data_source(_data_source())
    assert row.name == "prometheus-prod"
    assert row.description == "Metrics"
    assert row.daemon_name == "daemon-one"
    assert row.provider_type == "prometheus"
    assert row.created_at == "2022-07-11T10:56:04Z"
    assert row.updated_at == row.created_at


def test_row_without_daemon_or_description():
    row = DataSourceRow.from_data_source(_data_source(proxy_name=None, description=None))
    assert row.daemon_name == ""
    assert row.description == ""


def test_row_table_titles(capsys):
    output_list([DataSourceRow.from_data_source(_data_source())])
    header = capsys.readouterr().out.splitlines()[0]
    for title in ("Name", "Description", "Daemon Name", "Provider Type", "Updated at", "Created at"):
        assert title in header


def test_details_keys_in_order():
    details = data_source_details(_data_source())
    assert [item.key for item in details] == [
        "Name",
        "Description",
        "Provider Type",
        "Config",
        "Created At",
        "Updated At",
    ]


def test_details_config_is_json():
    details = {item.key: item.value for item in data_source_details(_data_source())}
    assert json.loads(details["Config"]) == {"url": "http://localhost:9090"}
    assert details["Created At"] == "2022-07-11T10:56:04Z"


def test_details_without_config():
    details = {item.key: item.value for item in data_source_details(_data_source(config=None))}
    assert details["Config"] == ""