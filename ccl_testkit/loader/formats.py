"""Decoding of the two on-disk shapes.

Flat files come in two legal encodings:

    {"$schema": "...", "tests": [ {...}, ... ]}     container
    [ {...}, ... ]                                  bare array

Source files are always containers.
"""

from typing import Any

from ccl_testkit.expected import shape_expected, unwrap_expected
from ccl_testkit.models import ConformanceCase, ConformanceSuite
from ccl_testkit.reference_data import TYPED_ACCESS_VALIDATIONS

BARE_FLAT_SUITE_NAME = "Generated Flat Format"
BARE_FLAT_SUITE_VERSION = "1.0"


def _prepare_flat_record(raw: Any) -> dict:
    """Normalise one flat record before model validation."""
    if not isinstance(raw, dict):
        raise ValueError(f"flat test record must be an object, got {type(raw).__name__}")

    record = dict(raw)
    validation = record.get("validation")

    expected = record.pop("expected", record.pop("expect", None))
    record["expected"] = shape_expected(validation, unwrap_expected(validation, expected))

    if validation in TYPED_ACCESS_VALIDATIONS and record.get("args") is None:
        record["args"] = []

    # Older flat files carried level at top level
    if "level" in record and "meta" not in record:
        record["meta"] = {"level": record.pop("level")}

    return record


def _decode_container(data: dict) -> ConformanceSuite:
    tests = data.get("tests")
    if tests is not None and not isinstance(tests, list):
        raise ValueError("'tests' must be an array")
    container = dict(data)
    container["tests"] = [_prepare_flat_record(r) for r in tests or []]
    return ConformanceSuite.model_validate(container)


def decode_flat(data: Any) -> ConformanceSuite:
    """Decode a flat file, container first, bare array only if that found no tests."""
    suite = _decode_container(data) if isinstance(data, dict) else None
    if suite is not None and suite.tests:
        return suite

    if isinstance(data, list):
        return ConformanceSuite(
            suite=BARE_FLAT_SUITE_NAME,
            version=BARE_FLAT_SUITE_VERSION,
            tests=[ConformanceCase.model_validate(_prepare_flat_record(r)) for r in data],
        )

    if suite is not None:
        return suite
    raise ValueError("flat file must be an object with 'tests' or an array of tests")


def decode_source(data: Any) -> ConformanceSuite:
    """Decode a source file; always an object, optionally with `$schema`."""
    if not isinstance(data, dict):
        raise ValueError("source file must be an object with a 'tests' array")
    return ConformanceSuite.model_validate(data)
