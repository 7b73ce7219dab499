"""Compatibility engine — decides which tests an implementation can run.

Usage:
    from ccl_testkit.compatibility import CompatibilityEngine

    engine = CompatibilityEngine(declaration)
    runnable = engine.filter_compatible(cases)
"""

from ccl_testkit.compatibility.base import CompatibilityCheck
from ccl_testkit.compatibility.checks import (
    BehaviorConflictCheck,
    FeatureCheck,
    FunctionCheck,
    RequirementCheck,
    VariantConflictCheck,
)
from ccl_testkit.compatibility.engine import CompatibilityEngine, filter_compatible, is_compatible

__all__ = [
    "CompatibilityCheck",
    "CompatibilityEngine",
    "FunctionCheck",
    "FeatureCheck",
    "BehaviorConflictCheck",
    "VariantConflictCheck",
    "RequirementCheck",
    "filter_compatible",
    "is_compatible",
]
