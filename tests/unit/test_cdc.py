"""Tests for qbodata.cdc.flatten_cdc."""

import pytest

from qbodata.cdc import flatten_cdc
from qbodata.data import Entity
from qbodata.exceptions import MalformedResponseError


def test_accumulates_across_batches_and_keeps_empty_types():
    raw = {
        "CDCResponse": [
            {
                "QueryResponse": [
                    {"Customer": [{"Id": "1"}]},
                    {"Customer": [{"Id": "2"}]},
                    {"Invoice": []},
                ]
            }
        ]
    }

    result = flatten_cdc(raw)

    assert result == {"Customer": [Entity({"Id": "1"}), Entity({"Id": "2"})], "Invoice": []}
    assert all(isinstance(e, Entity) for e in result["Customer"])


def test_keys_follow_first_seen_order():
    raw = {
        "CDCResponse": [
            {
                "QueryResponse": [
                    {"Vendor": [{"Id": "9"}]},
                    {"Bill": [{"Id": "3"}], "Account": []},
                    {"Vendor": [{"Id": "10"}]},
                ]
            }
        ]
    }

    result = flatten_cdc(raw)

    assert list(result) == ["Vendor", "Bill", "Account"]
    assert [e.id for e in result["Vendor"]] == ["9", "10"]


def test_absent_types_have_no_key():
    raw = {"CDCResponse": [{"QueryResponse": [{"Customer": [{"Id": "1"}]}]}]}
    assert "Invoice" not in flatten_cdc(raw)


def test_empty_query_response_gives_empty_mapping():
    assert flatten_cdc({"CDCResponse": [{"QueryResponse": []}]}) == {}


def test_paging_scalars_are_not_entity_types():
    raw = {
        "CDCResponse": [
            {"QueryResponse": [{"Customer": [{"Id": "1"}], "startPosition": 1, "maxResults": 1}]}
        ]
    }
    assert list(flatten_cdc(raw)) == ["Customer"]


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"CDCResponse": []},
        {"CDCResponse": [{}]},
        {"CDCResponse": [{"QueryResponse": None}]},
        {"Fault": {"Error": []}},
        {"CDCResponse": [{"QueryResponse": {"Customer": [{"Id": "1"}]}}]},
        {"CDCResponse": [{"QueryResponse": ["Customer"]}]},
        {"CDCResponse": [{"QueryResponse": [{"Customer": ["x"]}]}]},
        {"CDCResponse": "oops"},
    ],
)
def test_malformed_bodies_raise(raw):
    with pytest.raises(MalformedResponseError, match="Invalid CDC response"):
        flatten_cdc(raw)
