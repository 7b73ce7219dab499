from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from ccl_testkit.capabilities import CapabilityDeclaration
from ccl_testkit.config import get_settings
from ccl_testkit.logging_setup import configure_logging

configure_logging()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_declaration() -> Callable[..., CapabilityDeclaration]:
    def _make(**overrides: Any) -> CapabilityDeclaration:
        fields: dict[str, Any] = {"name": "test-impl", "variant_choice": "reference_compliant"}
        fields.update(overrides)
        return CapabilityDeclaration(**fields)

    return _make


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def basic_source_test() -> dict:
    """A source test with a parse and a get_int validation."""
    return {
        "name": "basic",
        "input": "name = John\nage = 30",
        "validations": {
            "get_int": {"args": ["age"], "expect": 30},
            "parse": [
                {"key": "name", "value": "John"},
                {"key": "age", "value": "30"},
            ],
        },
    }
