"""Behavior applicability filtering for derived flat tests.

A behavior is kept on a derived test only when the test's validation is one of
the functions the behavior can affect. Behaviors missing from
BEHAVIOR_FUNCTION_MAP are kept everywhere (fail open) and logged.
"""

from typing import Optional

import structlog

from ccl_testkit.capabilities import Behavior
from ccl_testkit.models import ConflictSet
from ccl_testkit.reference_data import BEHAVIOR_FUNCTION_MAP

logger = structlog.get_logger()


def applicable_behaviors(behaviors: Optional[list[str]], validation: str) -> list[str]:
    """Filter `behaviors` down to those relevant to `validation`, keeping order."""
    filtered: list[str] = []
    for behavior in behaviors or []:
        functions = BEHAVIOR_FUNCTION_MAP.get(behavior)
        if functions is None:
            logger.warning("behavior_unmapped", behavior=behavior, validation=validation)
            filtered.append(behavior)
        elif validation in functions:
            filtered.append(behavior)
    return filtered


def filter_conflicts(conflicts: Optional[ConflictSet], validation: str) -> Optional[ConflictSet]:
    """Filter behavior conflicts for `validation`; collapse to None when empty."""
    if conflicts is None:
        return None

    filtered = ConflictSet(
        functions=list(conflicts.functions),
        behaviors=applicable_behaviors(conflicts.behaviors, validation),
        variants=list(conflicts.variants),
        features=list(conflicts.features),
    )
    return None if filtered.is_empty else filtered


def unmapped_behaviors() -> list[str]:
    """Known behaviors that have no entry in the applicability table."""
    return [b.value for b in Behavior if b.value not in BEHAVIOR_FUNCTION_MAP]
