from __future__ import annotations

from structlog.testing import capture_logs

from ccl_testkit.expected import (
    expected_family,
    is_envelope,
    shape_expected,
    to_expected_result,
    unwrap_expected,
)
from ccl_testkit.models import Entry


def test_families() -> None:
    assert expected_family("parse") == "entries"
    assert expected_family("expand_dotted") == "entries"
    assert expected_family("build_hierarchy") == "object"
    assert expected_family("get_float") == "value"
    assert expected_family("round_trip") == "value"
    assert expected_family("get_list") == "list"
    assert expected_family("mystery") is None
    assert expected_family(None) is None


def test_entries_shaped_and_malformed_items_skipped() -> None:
    with capture_logs() as logs:
        shaped = shape_expected("parse", [{"key": "a", "value": "1"}, {"key": "b"}, "junk"])

    assert shaped == [Entry(key="a", value="1")]
    assert [e["event"] for e in logs] == ["expected_entry_skipped", "expected_entry_skipped"]


def test_object_and_value_payloads_kept_as_authored() -> None:
    hierarchy = {"server": {"host": "localhost", "ports": ["80", "443"]}}

    assert shape_expected("build_hierarchy", hierarchy) == hierarchy
    assert shape_expected("get_int", 30) == 30
    assert shape_expected("get_bool", False) is False
    assert shape_expected("get_list", ["a", "b"]) == ["a", "b"]


def test_absent_payload_stays_absent() -> None:
    assert shape_expected("parse", None) is None
    assert shape_expected("parse", []) == []


def test_document_validations_are_not_degraded() -> None:
    with capture_logs() as logs:
        assert shape_expected("canonical_format", "a = 1\n") == "a = 1\n"

    assert logs == []


def test_unrecognised_validation_degrades_to_value() -> None:
    with capture_logs() as logs:
        assert shape_expected("custom_check", {"anything": 1}) == {"anything": 1}

    assert logs[0]["event"] == "expected_shape_degraded"
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["validation"] == "custom_check"


def test_entries_payload_of_wrong_type_degrades() -> None:
    with capture_logs() as logs:
        assert shape_expected("parse", "a = 1") == "a = 1"

    assert logs[0]["event"] == "expected_shape_degraded"


def test_envelope_counts() -> None:
    entries = [Entry(key="a", value="1"), Entry(key="b", value="2")]

    assert to_expected_result("parse", entries).count == 2
    assert to_expected_result("get_list", ["x"]).count == 1
    assert to_expected_result("build_hierarchy", {}).count == 1
    assert to_expected_result("get_int", 0).count == 1
    assert to_expected_result("get_int", None, expect_error=True).to_wire() == {"count": 0, "error": True}


def test_envelope_detection() -> None:
    assert is_envelope({"count": 1, "value": 30})
    assert is_envelope({"count": 0})
    assert not is_envelope({"count": True})
    assert not is_envelope({"count": 1, "server": "x"})
    assert not is_envelope([{"key": "a", "value": "1"}])


def test_unwrap_selects_family_payload() -> None:
    assert unwrap_expected("get_int", {"count": 1, "value": 30}) == 30
    assert unwrap_expected("build_hierarchy", {"count": 1, "object": {"a": "1"}}) == {"a": "1"}
    assert unwrap_expected("get_list", {"count": 0, "list": []}) == []
    assert unwrap_expected("get_int", {"count": 0}) is None
    # Not an envelope: passed through untouched
    assert unwrap_expected("build_hierarchy", {"a": "1"}) == {"a": "1"}


def test_unwrap_falls_back_to_value_for_degraded_payloads() -> None:
    # A non-list parse payload is written under "value"
    assert unwrap_expected("parse", {"count": 1, "value": "oops"}) == "oops"
    assert unwrap_expected("get_list", {"count": 1, "value": "a,b"}) == "a,b"
