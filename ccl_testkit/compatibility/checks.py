"""The five compatibility axes.

Requirement checks are affirming (a missing capability fails the case).
Conflict checks are disqualifying (a matching capability fails the case).
The two kinds are deliberately kept as separate checks.
"""

from ccl_testkit.capabilities import CapabilityDeclaration
from ccl_testkit.compatibility.base import CompatibilityCheck
from ccl_testkit.models import ConformanceCase


class FunctionCheck(CompatibilityCheck):
    """The flat validation and every derived function must be supported."""

    @property
    def name(self) -> str:
        return "functions"

    def check(self, declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
        return all(declaration.has_function(fn) for fn in case.required_functions)


class FeatureCheck(CompatibilityCheck):
    """Every required feature must be explicitly supported."""

    @property
    def name(self) -> str:
        return "features"

    def check(self, declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
        return all(declaration.has_feature(feature) for feature in case.features)


class BehaviorConflictCheck(CompatibilityCheck):
    """None of the conflicting behaviors may be chosen by the implementation."""

    @property
    def name(self) -> str:
        return "behavior_conflicts"

    def check(self, declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
        if case.conflicts is None:
            return True
        return not any(declaration.has_behavior(b) for b in case.conflicts.behaviors)


class VariantConflictCheck(CompatibilityCheck):
    """The implementation's variant must not be listed as conflicting."""

    @property
    def name(self) -> str:
        return "variant_conflicts"

    def check(self, declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
        if case.conflicts is None:
            return True
        return not any(declaration.has_variant(v) for v in case.conflicts.variants)


class RequirementCheck(CompatibilityCheck):
    """Required behaviors must all be chosen; required variants must match."""

    @property
    def name(self) -> str:
        return "requirements"

    def check(self, declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
        if not all(declaration.has_behavior(b) for b in case.behaviors):
            return False
        return all(declaration.has_variant(v) for v in case.variants)
