"""Source → flat expansion (one multi-validation test into N single-validation tests)."""

from typing import Iterable

import structlog

from ccl_testkit.expected import shape_expected
from ccl_testkit.models import ConformanceCase
from ccl_testkit.reference_data import (
    TYPED_ACCESS_VALIDATIONS,
    VALIDATION_IMPLIED_FEATURES,
    VALIDATION_ORDER,
)
from ccl_testkit.transform.behaviors import applicable_behaviors, filter_conflicts

logger = structlog.get_logger()


def canonical_validation_order(names: Iterable[str]) -> list[str]:
    """Order validation names canonically; unknown names follow, sorted."""
    names = set(names)
    known = [name for name in VALIDATION_ORDER if name in names]
    unknown = sorted(names - set(VALIDATION_ORDER))
    for name in unknown:
        logger.warning("validation_unrecognized", validation=name)
    return known + unknown


def derive_metadata(validation: str) -> tuple[list[str], list[str]]:
    """Functions and implied features for a validation.

    The validation name doubles as the function identifier.
    """
    return [validation], list(VALIDATION_IMPLIED_FEATURES.get(validation, []))


def expand(case: ConformanceCase) -> list[ConformanceCase]:
    """Expand a source test into one flat test per present validation slot.

    A case without validation slots (including an already-flat case) is
    returned unchanged as a single-element list.
    """
    if not case.is_source:
        return [case]

    derived = []
    for validation in canonical_validation_order(case.validations):
        slot = case.validations[validation]
        functions, implied_features = derive_metadata(validation)

        derived.append(ConformanceCase(
            name=f"{case.name}_{validation}",
            input=case.input,
            input1=case.input1,
            input2=case.input2,
            input3=case.input3,
            validation=validation,
            expected=shape_expected(validation, slot.expected),
            args=list(slot.args) if validation in TYPED_ACCESS_VALIDATIONS else None,
            expect_error=slot.expect_error,
            source_test=case.name,
            functions=functions,
            features=list(dict.fromkeys(case.features + implied_features)),
            behaviors=applicable_behaviors(case.behaviors, validation),
            variants=list(case.variants),
            conflicts=filter_conflicts(case.conflicts, validation),
            meta=case.meta,
        ))

    logger.debug("test_expanded", test=case.name, derived=len(derived))
    return derived


def expand_all(cases: Iterable[ConformanceCase]) -> list[ConformanceCase]:
    """Expand every case, concatenating results in input order."""
    return [flat for case in cases for flat in expand(case)]
