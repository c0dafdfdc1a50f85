import json

import pytest

from fpcli.daemons import (
    DataSourceAndProxySummaryRow,
    ProxySummaryRow,
    ProxySummaryWithCounts,
    count_proxy_data_sources,
    proxy_details,
    sort_proxy_summaries,
)
from fpcli.output import GenericKeyValue


def _proxy(name, status="connected", proxy_id=None):
    return {"id": proxy_id or f"id-{name}", "name": name, "status": status}


def _ds(name, proxy_name=None, status=None, provider_type="prometheus"):
    return {
        "name": name,
        "proxy_name": proxy_name,
        "status": status,
        "provider_type": provider_type,
    }


def test_count_orders_by_name_and_counts():
    proxies = [_proxy("zeta"), _proxy("alpha")]
    data_sources = [
        _ds("a", "alpha", "connected"),
        _ds("b", "alpha", {"error": {"type": "boom"}}),
        _ds("c", "zeta", None),
        _ds("d", "unknown", "connected"),
        _ds("e", None, "connected"),
    ]
    summaries = count_proxy_data_sources(proxies, data_sources)
    assert [s.proxy["name"] for s in summaries] == ["alpha", "zeta"]
    assert (summaries[0].connected_data_sources, summaries[0].total_data_sources) == (1, 2)
    assert (summaries[1].connected_data_sources, summaries[1].total_data_sources) == (0, 1)


def test_count_without_data_sources_is_zero():
    summaries = count_proxy_data_sources([_proxy("one")], [])
    assert summaries == [ProxySummaryWithCounts(proxy=_proxy("one"))]


def test_sort_puts_connected_first_then_by_counts():
    summaries = [
        ProxySummaryWithCounts(_proxy("d1", "disconnected"), 0, 1),
        ProxySummaryWithCounts(_proxy("c1", "connected"), 1, 5),
        ProxySummaryWithCounts(_proxy("d2", "disconnected"), 0, 4),
        ProxySummaryWithCounts(_proxy("c2", "connected"), 3, 3),
    ]
    ordered = sort_proxy_summaries(summaries)
    assert [s.proxy["name"] for s in ordered] == ["c2", "c1", "d2", "d1"]


def test_sort_keeps_ties_in_order():
    summaries = [
        ProxySummaryWithCounts(_proxy("first"), 2, 2),
        ProxySummaryWithCounts(_proxy("second"), 2, 7),
    ]
    assert [s.proxy["name"] for s in sort_proxy_summaries(summaries)] == ["first", "second"]


def test_sort_rejects_unknown_status():
    summaries = [
        ProxySummaryWithCounts(_proxy("a", "sleeping")),
        ProxySummaryWithCounts(_proxy("b")),
    ]
    with pytest.raises(ValueError):
        sort_proxy_summaries(summaries)


def test_proxy_summary_row():
    summary = ProxySummaryWithCounts(_proxy("daemon", "connected", "abc"), 2, 3)
    row = ProxySummaryRow.from_summary(summary)
    assert row.name == "daemon"
    assert row.id == "abc"
    assert row.status == "Connected"
    assert row.data_sources_connected == "2 / 3"


def test_data_source_row_fields():
    row = DataSourceAndProxySummaryRow.from_data_source(_ds("prom", "daemon", "connected"))
    assert row.name == "prom"
    assert row.daemon_name == "daemon"
    assert row.provider_type == "prometheus"
    assert row.status == "Connected"


def test_data_source_row_without_status_or_daemon():
    row = DataSourceAndProxySummaryRow.from_data_source(_ds("prom"))
    assert row.status == ""
    assert row.daemon_name == ""


def test_data_source_row_error_status():
    row = DataSourceAndProxySummaryRow.from_data_source(_ds("prom", status={"error": "x"}))
    assert row.status == "Error"


def test_data_source_row_unknown_status():
    with pytest.raises(ValueError):
        DataSourceAndProxySummaryRow.from_data_source(_ds("prom", status="pending"))


def test_proxy_details_without_data_sources():
    details = proxy_details({**_proxy("daemon", proxy_id="abc"), "data_sources": []})
    assert [item.key for item in details] == ["Name:", "ID:", "Status:", "Data sources:"]
    assert details[0] == GenericKeyValue("Name:", "daemon")
    assert details[1].value == "abc"
    assert details[3].value == "(none)"


def test_proxy_details_lists_data_sources_with_errors():
    error = {"type": "not_found"}
    proxy = {
        **_proxy("daemon"),
        "data_sources": [
            _ds("prom", status="connected"),
            _ds("elastic", status={"error": error}, provider_type="elasticsearch"),
        ],
    }
    lines = proxy_details(proxy)[3].value.split("\n")
    assert len(lines) == 2
    assert lines[0].startswith("prom (prometheus): ")
    assert lines[1].startswith("elastic (elasticsearch): ")
    assert lines[1].endswith(" - " + json.dumps(error, separators=(",", ":")))
    assert " - " not in lines[0]