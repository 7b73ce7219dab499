"""Expected-payload shaping, keyed by validation family.

The validation name is the discriminant of the expected payload:

    entries   parse, filter, expand_dotted, ...   list[Entry]
    object    build_hierarchy                     nested mapping
    value     get_string/get_int/get_bool/...     a single scalar
              pretty_print, round_trip, ...       a single value as authored
    list      get_list                            list of values

Anything else is treated as a single value and logged as degraded.
"""

from typing import Any, Optional

import structlog

from ccl_testkit.models import Entry, ExpectedResult
from ccl_testkit.reference_data import (
    DOCUMENT_VALIDATIONS,
    ENTRY_VALIDATIONS,
    LIST_VALIDATIONS,
    OBJECT_VALIDATIONS,
    SCALAR_VALIDATIONS,
)

logger = structlog.get_logger()

ENTRIES = "entries"
OBJECT = "object"
VALUE = "value"
LIST = "list"

_ENVELOPE_KEYS = frozenset({"count", ENTRIES, OBJECT, VALUE, LIST, "error"})


def expected_family(validation: Optional[str]) -> Optional[str]:
    """Payload family for a validation name, or None if unrecognised."""
    if validation in ENTRY_VALIDATIONS:
        return ENTRIES
    if validation in OBJECT_VALIDATIONS:
        return OBJECT
    if validation in SCALAR_VALIDATIONS or validation in DOCUMENT_VALIDATIONS:
        return VALUE
    if validation in LIST_VALIDATIONS:
        return LIST
    return None


def _to_entry(item: Any) -> Optional[Entry]:
    if isinstance(item, Entry):
        return item
    if isinstance(item, dict) and isinstance(item.get("key"), str) and isinstance(item.get("value"), str):
        return Entry(key=item["key"], value=item["value"])
    return None


def shape_expected(validation: Optional[str], data: Any) -> Any:
    """Shape a raw expected value for the given validation.

    Never raises: data that does not fit its family is passed through
    unchanged and logged.
    """
    if data is None:
        return None

    family = expected_family(validation)

    if family == ENTRIES:
        if not isinstance(data, list):
            logger.warning("expected_shape_degraded", validation=validation, reason="entries not a list")
            return data
        entries = []
        for item in data:
            entry = _to_entry(item)
            if entry is None:
                logger.warning("expected_entry_skipped", validation=validation, entry=item)
                continue
            entries.append(entry)
        return entries

    if family == LIST:
        if not isinstance(data, list):
            logger.warning("expected_shape_degraded", validation=validation, reason="list not a list")
            return data
        return list(data)

    if family is None:
        logger.warning("expected_shape_degraded", validation=validation, reason="unrecognized validation")

    # object and value families keep the payload as authored
    return data


def to_expected_result(validation: Optional[str], payload: Any, expect_error: bool = False) -> ExpectedResult:
    """Wrap a shaped payload in the on-disk envelope with its count."""
    family = expected_family(validation)

    if payload is None:
        return ExpectedResult(count=0, error=expect_error)
    if family == ENTRIES and isinstance(payload, list):
        return ExpectedResult(count=len(payload), entries=payload, error=expect_error)
    if family == OBJECT:
        return ExpectedResult(count=1, object_=payload, error=expect_error)
    if family == LIST and isinstance(payload, list):
        return ExpectedResult(count=len(payload), items=payload, error=expect_error)
    return ExpectedResult(count=1, value=payload, error=expect_error)


def is_envelope(data: Any) -> bool:
    """Heuristic: does `data` look like an ExpectedResult envelope?"""
    if not isinstance(data, dict):
        return False
    count = data.get("count")
    if not isinstance(count, int) or isinstance(count, bool):
        return False
    return set(data) <= _ENVELOPE_KEYS


def unwrap_expected(validation: Optional[str], data: Any) -> Any:
    """Return the raw payload of an envelope; non-envelopes pass through."""
    if not is_envelope(data):
        return data
    key = expected_family(validation) or VALUE
    # Payloads that did not fit their family are written under "value"
    if key not in data:
        key = VALUE
    return data.get(key)
