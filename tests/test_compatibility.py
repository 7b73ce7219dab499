from __future__ import annotations

import pytest

from ccl_testkit.compatibility import (
    BehaviorConflictCheck,
    CompatibilityEngine,
    FeatureCheck,
    FunctionCheck,
    RequirementCheck,
    VariantConflictCheck,
    filter_compatible,
    is_compatible,
)
from ccl_testkit.errors import ConfigError
from ccl_testkit.models import ConformanceCase


def _flat(name: str, validation: str, **fields) -> ConformanceCase:
    return ConformanceCase(name=name, input="a = 1", validation=validation, functions=[validation], **fields)


def test_function_check(make_declaration) -> None:
    declaration = make_declaration(supported_functions={"parse"})
    check = FunctionCheck()

    assert check.check(declaration, _flat("p", "parse"))
    assert not check.check(declaration, _flat("g", "get_int", args=["a"]))


def test_function_check_covers_validation_without_metadata(make_declaration) -> None:
    declaration = make_declaration(supported_functions={"parse"})
    case = ConformanceCase(name="g", validation="get_int", args=["a"])

    assert CompatibilityEngine(declaration).explain(case) == "functions"


def test_feature_check(make_declaration) -> None:
    case = _flat("f", "filter", features=["comments"])

    assert FeatureCheck().check(make_declaration(supported_features={"comments"}), case)
    assert not FeatureCheck().check(make_declaration(), case)
    assert not FeatureCheck().check(make_declaration(unsupported_features={"comments"}), case)


def test_behavior_conflict_check(make_declaration) -> None:
    case = _flat("b", "get_bool", args=["a"], conflicts={"behaviors": ["boolean_lenient"]})

    assert not BehaviorConflictCheck().check(make_declaration(behavior_choices={"boolean_lenient"}), case)
    assert BehaviorConflictCheck().check(make_declaration(behavior_choices={"boolean_strict"}), case)
    assert BehaviorConflictCheck().check(make_declaration(), _flat("p", "parse"))


def test_variant_conflict_check(make_declaration) -> None:
    case = _flat("v", "parse", conflicts={"variants": ["proposed_behavior"]})

    assert not VariantConflictCheck().check(make_declaration(variant_choice="proposed_behavior"), case)
    assert VariantConflictCheck().check(make_declaration(variant_choice="reference_compliant"), case)


def test_requirement_check(make_declaration) -> None:
    case = _flat("r", "get_bool", args=["a"], behaviors=["boolean_strict"], variants=["reference_compliant"])

    assert RequirementCheck().check(make_declaration(behavior_choices={"boolean_strict"}), case)
    assert not RequirementCheck().check(make_declaration(), case)
    assert not RequirementCheck().check(
        make_declaration(behavior_choices={"boolean_strict"}, variant_choice="proposed_behavior"), case
    )


def test_conflicts_and_requirements_are_separate_axes(make_declaration) -> None:
    declaration = make_declaration(
        supported_functions={"get_bool"},
        behavior_choices={"boolean_strict"},
    )
    engine = CompatibilityEngine(declaration)

    requires_lenient = _flat("needs", "get_bool", args=["a"], behaviors=["boolean_lenient"])
    conflicts_strict = _flat("excludes", "get_bool", args=["a"], conflicts={"behaviors": ["boolean_strict"]})
    conflicts_lenient = _flat("ok", "get_bool", args=["a"], conflicts={"behaviors": ["boolean_lenient"]})

    assert engine.explain(requires_lenient) == "requirements"
    assert engine.explain(conflicts_strict) == "behavior_conflicts"
    assert engine.explain(conflicts_lenient) is None


def test_filter_preserves_input_order(make_declaration) -> None:
    declaration = make_declaration(supported_functions={"parse", "get_string"})
    cases = [
        _flat("c3", "get_string", args=["a"]),
        _flat("skip", "get_int", args=["a"]),
        _flat("c1", "parse"),
        _flat("c2", "parse"),
    ]

    assert [c.name for c in filter_compatible(declaration, cases)] == ["c3", "c1", "c2"]


def test_widening_supported_functions_never_loses_tests(make_declaration) -> None:
    cases = [
        _flat("p", "parse"),
        _flat("g", "get_int", args=["a"]),
        _flat("h", "build_hierarchy"),
        _flat("f", "filter", features=["comments"]),
    ]
    narrow = make_declaration(supported_functions={"parse"})
    wide = make_declaration(
        supported_functions={"parse", "get_int", "build_hierarchy", "filter"},
        supported_features={"comments"},
    )

    narrow_names = {c.name for c in filter_compatible(narrow, cases)}
    wide_names = {c.name for c in filter_compatible(wide, cases)}

    assert narrow_names == {"p"}
    assert narrow_names <= wide_names
    assert wide_names == {"p", "g", "h", "f"}


def test_module_level_helpers_validate_declaration(make_declaration) -> None:
    declaration = make_declaration(behavior_choices={"strict_spacing", "loose_spacing"})

    with pytest.raises(ConfigError):
        is_compatible(declaration, _flat("p", "parse"))


def test_custom_check_chain(make_declaration) -> None:
    declaration = make_declaration()
    engine = CompatibilityEngine(declaration, checks=[VariantConflictCheck()])

    # Function support is not checked by this chain
    assert engine.is_compatible(_flat("p", "parse"))
