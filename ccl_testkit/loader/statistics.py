"""Statistics and capability coverage over a collection of cases."""

from collections import defaultdict

from ccl_testkit.compatibility import CompatibilityEngine
from ccl_testkit.models import (
    CapabilityCoverage,
    ConflictSummary,
    ConformanceCase,
    CoverageInfo,
    SuiteStatistics,
)

_CONFLICT_CATEGORIES = ("functions", "behaviors", "variants", "features")


def case_functions(case: ConformanceCase) -> list[str]:
    """Functions a case exercises; source cases exercise their validations."""
    if case.required_functions:
        return case.required_functions
    return list(case.validations or {})


def build_statistics(engine: CompatibilityEngine, cases: list[ConformanceCase]) -> SuiteStatistics:
    """One pass of per-category counts plus compatibility totals.

    The compatible count is always the length of the engine's filter result.
    """
    compatible = engine.filter_compatible(cases)

    by_level: dict[int, int] = defaultdict(int)
    by_function: dict[str, int] = defaultdict(int)
    by_feature: dict[str, int] = defaultdict(int)
    conflicts: dict[tuple[str, tuple[str, ...]], list[int]] = {}

    for case in cases:
        by_level[case.meta.level] += 1
        for fn in case_functions(case):
            by_function[fn] += 1
        for feature in dict.fromkeys(case.features):
            by_feature[feature] += 1

        if case.conflicts is None:
            continue
        for category in _CONFLICT_CATEGORIES:
            values = getattr(case.conflicts, category)
            if not values:
                continue
            counts = conflicts.setdefault((category, tuple(sorted(values))), [0, 0])
            counts[0] += 1
            counts[1] += case.assertion_count

    return SuiteStatistics(
        total_tests=len(cases),
        total_assertions=sum(c.assertion_count for c in cases),
        compatible_tests=len(compatible),
        compatible_assertions=sum(c.assertion_count for c in compatible),
        by_level=dict(by_level),
        by_function=dict(by_function),
        by_feature=dict(by_feature),
        conflicting_sets=[
            ConflictSummary(
                conflict_type=category,
                conflicts_with=list(values),
                test_count=test_count,
                assert_count=assert_count,
            )
            for (category, values), (test_count, assert_count) in sorted(conflicts.items())
        ],
    )


def build_coverage(engine: CompatibilityEngine, cases: list[ConformanceCase]) -> CapabilityCoverage:
    """Available vs compatible test counts per supported function and feature."""
    declaration = engine.declaration
    coverage = CapabilityCoverage()

    for fn in sorted(declaration.supported_functions):
        fn_cases = [c for c in cases if fn in case_functions(c)]
        coverage.functions[fn] = CoverageInfo(
            available=len(fn_cases),
            compatible=len(engine.filter_compatible(fn_cases)),
        )

    for feature in sorted(declaration.supported_features):
        feature_cases = [c for c in cases if feature in c.features]
        coverage.features[feature] = CoverageInfo(
            available=len(feature_cases),
            compatible=len(engine.filter_compatible(feature_cases)),
        )

    return coverage
