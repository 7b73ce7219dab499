"""Canonical test model — source and flat test cases, suites, statistics.

One `ConformanceCase` type carries both shapes:

    source (multi-validation):  validations={"parse": slot, "get_int": slot}
    flat (single-validation):   validation="get_int", expected=30, args=["age"]

List-valued metadata is normalised to [] at construction so that "no
requirement" has exactly one representation, and an all-empty conflict set is
normalised to None.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


def _none_to_list(value):
    return [] if value is None else value


class Entry(BaseModel):
    """A single key/value pair produced by parsing."""

    key: str
    value: str

    model_config = {"frozen": True}


class ConflictSet(BaseModel):
    """Capability choices a test is incompatible with."""

    functions: list[str] = Field(default_factory=list)
    behaviors: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("functions", "behaviors", "variants", "features", mode="before")
    @classmethod
    def _empty_lists(cls, value):
        return _none_to_list(value)

    @property
    def is_empty(self) -> bool:
        return not (self.functions or self.behaviors or self.variants or self.features)


class ValidationSlot(BaseModel):
    """One expected-result assertion attached to a source test's input."""

    expected: Any = None
    args: list[str] = Field(default_factory=list)
    expect_error: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_raw(cls, value: Any) -> "ValidationSlot":
        """Decode a validation value as written in a source file.

        Two spellings are accepted:
            {"args": ["age"], "expect": 30, "error": false}   structured
            [{"key": "a", "value": "1"}]                      bare expected value

        A mapping without an "expect" key is itself the expected value (this
        is how build_hierarchy objects are written).
        """
        if isinstance(value, ValidationSlot):
            return value
        if not isinstance(value, dict) or "expect" not in value:
            return cls(expected=value)

        args = value.get("args")
        if not isinstance(args, list):
            args = []
        expect_error = value.get("error", value.get("expect_error", False))
        return cls(
            expected=value["expect"],
            args=[a for a in args if isinstance(a, str)],
            expect_error=expect_error is True,
        )


class CaseMeta(BaseModel):
    """Categorisation metadata and legacy tag support."""

    tags: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    level: int = 0
    feature: Optional[str] = None
    difficulty: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("tags", "conflicts", mode="before")
    @classmethod
    def _empty_lists(cls, value):
        return _none_to_list(value)

    @property
    def is_default(self) -> bool:
        return self == CaseMeta()


class ConformanceCase(BaseModel):
    """A conformance test in either source or flat shape."""

    name: str
    input: str = ""
    input1: Optional[str] = None
    input2: Optional[str] = None
    input3: Optional[str] = None

    # Source shape
    validations: Optional[dict[str, ValidationSlot]] = None

    # Flat shape
    validation: Optional[str] = None
    expected: Any = Field(default=None, validation_alias=AliasChoices("expected", "expect"))
    args: Optional[list[str]] = None
    expect_error: bool = False
    source_test: Optional[str] = None

    # Requirements (functions are derived, never authored on source tests)
    functions: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    behaviors: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)
    conflicts: Optional[ConflictSet] = None

    meta: CaseMeta = Field(default_factory=CaseMeta)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("functions", "features", "behaviors", "variants", mode="before")
    @classmethod
    def _empty_lists(cls, value):
        return _none_to_list(value)

    @field_validator("meta", mode="before")
    @classmethod
    def _default_meta(cls, value):
        return CaseMeta() if value is None else value

    @field_validator("validations", mode="before")
    @classmethod
    def _decode_validations(cls, value):
        if value is None:
            return None
        if not isinstance(value, dict):
            raise ValueError("validations must be a mapping of validation name to expected result")
        # A null slot is an absent slot
        return {name: ValidationSlot.from_raw(raw) for name, raw in value.items() if raw is not None}

    @field_validator("conflicts")
    @classmethod
    def _drop_empty_conflicts(cls, value: Optional[ConflictSet]) -> Optional[ConflictSet]:
        if value is not None and value.is_empty:
            return None
        return value

    @property
    def is_source(self) -> bool:
        """True when the case carries at least one validation slot."""
        return bool(self.validations)

    @property
    def inputs(self) -> list[str]:
        """All inputs in order; composition tests use input1..input3."""
        numbered = [i for i in (self.input1, self.input2, self.input3) if i is not None]
        return ([self.input] if self.input or not numbered else []) + numbered

    @property
    def required_functions(self) -> list[str]:
        """The flat validation plus derived function metadata, de-duplicated."""
        names = ([self.validation] if self.validation else []) + self.functions
        return list(dict.fromkeys(names))

    @property
    def assertion_count(self) -> int:
        return len(self.validations) if self.validations else 1


class ConformanceSuite(BaseModel):
    """A test file: suite metadata plus its cases."""

    suite: str = ""
    version: str = ""
    description: str = ""
    schema_ref: Optional[str] = Field(default=None, alias="$schema")
    tests: list[ConformanceCase] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @field_validator("tests", mode="before")
    @classmethod
    def _empty_tests(cls, value):
        return _none_to_list(value)


class ExpectedResult(BaseModel):
    """On-disk envelope for a flat case's expected payload.

    `count` is always present; exactly one of the payload fields is set,
    chosen by the validation family.
    """

    count: int = 0
    entries: Optional[list[Entry]] = None
    object_: Any = Field(default=None, alias="object")
    value: Any = None
    items: Optional[list[Any]] = Field(default=None, alias="list")
    error: bool = False

    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict:
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not self.error:
            data.pop("error", None)
        return data


# ──────────────────────────────────────────────────────────────────────
# STATISTICS
# ──────────────────────────────────────────────────────────────────────


class ConflictSummary(BaseModel):
    """Number of tests excluding a given set of capability choices."""

    conflict_type: str  # "functions", "behaviors", "variants", "features"
    conflicts_with: list[str]
    test_count: int = 0
    assert_count: int = 0


class SuiteStatistics(BaseModel):
    """Coverage report over a collection of cases."""

    total_tests: int = 0
    total_assertions: int = 0
    compatible_tests: int = 0
    compatible_assertions: int = 0
    by_level: dict[int, int] = Field(default_factory=dict)
    by_function: dict[str, int] = Field(default_factory=dict)
    by_feature: dict[str, int] = Field(default_factory=dict)
    conflicting_sets: list[ConflictSummary] = Field(default_factory=list)


class CoverageInfo(BaseModel):
    available: int = 0   # Tests exercising the capability
    compatible: int = 0  # Of those, tests the implementation can run


class CapabilityCoverage(BaseModel):
    functions: dict[str, CoverageInfo] = Field(default_factory=dict)
    features: dict[str, CoverageInfo] = Field(default_factory=dict)
