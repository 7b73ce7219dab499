"""Compatibility Engine — runs every check against a test case for one declaration.

This is the main entry point for deciding which tests an implementation can
run. The declaration is validated once, on construction, and never again per
test.

Usage:
    engine = CompatibilityEngine(declaration)
    runnable = engine.filter_compatible(cases)
    if not engine.is_compatible(case):
        reason = engine.explain(case)
"""

from typing import Iterable, Optional

import structlog

from ccl_testkit.capabilities import CapabilityDeclaration
from ccl_testkit.compatibility.base import CompatibilityCheck
from ccl_testkit.compatibility.checks import (
    BehaviorConflictCheck,
    FeatureCheck,
    FunctionCheck,
    RequirementCheck,
    VariantConflictCheck,
)
from ccl_testkit.models import ConformanceCase

logger = structlog.get_logger()


class CompatibilityEngine:
    """Conjunction of independent compatibility checks.

    Design principles:
        - Pure: same declaration and case → same answer, no side effects
        - Short-circuit: the first failing check decides
        - Extensible: add checks without modifying the engine
    """

    def __init__(
        self,
        declaration: CapabilityDeclaration,
        checks: Optional[list[CompatibilityCheck]] = None,
    ):
        """Validate the declaration and set up the check chain.

        Args:
            declaration: Capability declaration of the implementation
            checks: Optional list of checks. If None, uses all defaults.

        Raises:
            ConfigError: if the declaration chooses conflicting behaviors
        """
        declaration.validate_behaviors()
        self.declaration = declaration
        self.checks = checks or self._default_checks()

    @staticmethod
    def _default_checks() -> list[CompatibilityCheck]:
        """Create the default check chain, cheapest first."""
        return [
            FunctionCheck(),
            FeatureCheck(),
            BehaviorConflictCheck(),
            VariantConflictCheck(),
            RequirementCheck(),
        ]

    def explain(self, case: ConformanceCase) -> Optional[str]:
        """Name of the first check the case fails, or None if compatible."""
        for check in self.checks:
            if not check.check(self.declaration, case):
                return check.name
        return None

    def is_compatible(self, case: ConformanceCase) -> bool:
        return self.explain(case) is None

    def filter_compatible(self, cases: Iterable[ConformanceCase]) -> list[ConformanceCase]:
        """Keep compatible cases, preserving input order."""
        cases = list(cases)
        compatible = []
        for case in cases:
            reason = self.explain(case)
            if reason is None:
                compatible.append(case)
            else:
                logger.debug("test_incompatible", test=case.name, check=reason)

        logger.debug(
            "compatibility_filtered",
            implementation=self.declaration.name,
            total=len(cases),
            compatible=len(compatible),
        )
        return compatible


def is_compatible(declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
    """Validate `declaration` and check a single case against it."""
    return CompatibilityEngine(declaration).is_compatible(case)


def filter_compatible(
    declaration: CapabilityDeclaration, cases: Iterable[ConformanceCase]
) -> list[ConformanceCase]:
    """Validate `declaration` and keep the cases it can run, in input order."""
    return CompatibilityEngine(declaration).filter_compatible(cases)
