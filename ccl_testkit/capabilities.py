"""What a CCL implementation declares it supports.

A declaration is validated once (conflicting behavior choices are rejected)
and is then read-only input to the compatibility engine.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ccl_testkit.errors import ConfigError
from ccl_testkit.reference_data import BEHAVIOR_CONFLICT_GROUPS


class Function(str, Enum):
    """CCL functions an implementation can execute."""

    PARSE = "parse"
    PARSE_INDENTED = "parse_indented"
    FILTER = "filter"
    COMPOSE = "compose"
    EXPAND_DOTTED = "expand_dotted"
    BUILD_HIERARCHY = "build_hierarchy"
    GET_STRING = "get_string"
    GET_INT = "get_int"
    GET_BOOL = "get_bool"
    GET_FLOAT = "get_float"
    GET_LIST = "get_list"
    PRETTY_PRINT = "pretty_print"
    ROUND_TRIP = "round_trip"
    CANONICAL_FORMAT = "canonical_format"
    ASSOCIATIVITY = "associativity"
    LOAD = "load"


class Feature(str, Enum):
    """Optional language features."""

    COMMENTS = "comments"
    EXPERIMENTAL_DOTTED_KEYS = "experimental_dotted_keys"
    EMPTY_KEYS = "empty_keys"
    MULTILINE = "multiline"
    UNICODE = "unicode"
    WHITESPACE = "whitespace"


class Behavior(str, Enum):
    """Mutually exclusive interpretations of ambiguous constructs.

    See BEHAVIOR_CONFLICT_GROUPS for which members exclude each other.
    """

    CRLF_NORMALIZE_TO_LF = "crlf_normalize_to_lf"
    CRLF_PRESERVE_LITERAL = "crlf_preserve_literal"
    TABS_PRESERVE = "tabs_preserve"
    TABS_TO_SPACES = "tabs_to_spaces"
    STRICT_SPACING = "strict_spacing"
    LOOSE_SPACING = "loose_spacing"
    BOOLEAN_STRICT = "boolean_strict"
    BOOLEAN_LENIENT = "boolean_lenient"
    LIST_COERCION_ENABLED = "list_coercion_enabled"
    LIST_COERCION_DISABLED = "list_coercion_disabled"
    ARRAY_ORDER_INSERTION = "array_order_insertion"
    ARRAY_ORDER_LEXICOGRAPHIC = "array_order_lexicographic"


class Variant(str, Enum):
    """Language profiles an implementation can follow."""

    PROPOSED_BEHAVIOR = "proposed_behavior"
    REFERENCE_COMPLIANT = "reference_compliant"


def behavior_group(behavior: str) -> Optional[str]:
    """Return the conflict group a behavior belongs to, if any."""
    for group, members in BEHAVIOR_CONFLICT_GROUPS.items():
        if behavior in members:
            return group
    return None


class CapabilityDeclaration(BaseModel):
    """Declared capabilities of one implementation.

    Features are closed-world: a feature in neither `supported_features` nor
    `unsupported_features` counts as unsupported.
    """

    name: str = ""
    version: str = ""

    supported_functions: frozenset[Function] = Field(default_factory=frozenset)
    unsupported_functions: frozenset[Function] = Field(default_factory=frozenset)
    supported_features: frozenset[Feature] = Field(default_factory=frozenset)
    unsupported_features: frozenset[Feature] = Field(default_factory=frozenset)
    behavior_choices: frozenset[Behavior] = Field(default_factory=frozenset)
    variant_choice: Variant

    model_config = {"frozen": True}

    @field_validator(
        "supported_functions",
        "unsupported_functions",
        "supported_features",
        "unsupported_features",
        "behavior_choices",
    )
    @classmethod
    def _as_identifiers(cls, value: frozenset) -> frozenset[str]:
        # Stored as plain identifier strings
        return frozenset(item.value for item in value)

    @field_validator("variant_choice")
    @classmethod
    def _variant_identifier(cls, value: Variant) -> str:
        return value.value

    def validate_behaviors(self) -> None:
        """Reject declarations choosing two behaviors from the same group.

        Raises:
            ConfigError: kind "conflicting_behaviors", naming the group
        """
        for group, members in BEHAVIOR_CONFLICT_GROUPS.items():
            chosen = [b for b in members if b in self.behavior_choices]
            if len(chosen) > 1:
                raise ConfigError(
                    kind="conflicting_behaviors",
                    message=f"multiple conflicting behaviors in group: {group}",
                    group=group,
                )

    def has_function(self, function: str) -> bool:
        return function in self.supported_functions and function not in self.unsupported_functions

    def has_feature(self, feature: str) -> bool:
        if feature in self.unsupported_features:
            return False
        return feature in self.supported_features

    def has_behavior(self, behavior: str) -> bool:
        return behavior in self.behavior_choices

    def has_variant(self, variant: str) -> bool:
        return self.variant_choice == variant
