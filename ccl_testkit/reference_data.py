"""Reference data: validation ordering, implied features, behavior applicability.

This is the encoded knowledge about CCL functions that makes the
source-to-flat transformation deterministic. Keys are plain identifier
strings so the tables can be read without importing the capability enums.
"""

# ──────────────────────────────────────────────────────────────────────
# CANONICAL VALIDATION ORDER
# ──────────────────────────────────────────────────────────────────────

# Derived flat tests are emitted in this order, never in the order the
# validations happen to appear in a source file.
VALIDATION_ORDER: tuple[str, ...] = (
    "parse",
    "parse_indented",
    "filter",
    "compose",
    "expand_dotted",
    "build_hierarchy",
    "get_string",
    "get_int",
    "get_bool",
    "get_float",
    "get_list",
    "pretty_print",
    "round_trip",
    "associativity",
    "canonical_format",
    "load",
)


# ──────────────────────────────────────────────────────────────────────
# EXPECTED PAYLOAD FAMILIES
# ──────────────────────────────────────────────────────────────────────

# Validations whose expected result is an ordered list of key/value entries
ENTRY_VALIDATIONS: frozenset[str] = frozenset({
    "parse",
    "parse_indented",
    "filter",
    "compose",
    "expand_dotted",
})

# Validations whose expected result is a nested object
OBJECT_VALIDATIONS: frozenset[str] = frozenset({
    "build_hierarchy",
})

# Typed accessors returning a single scalar
SCALAR_VALIDATIONS: frozenset[str] = frozenset({
    "get_string",
    "get_int",
    "get_bool",
    "get_float",
})

# Typed accessors returning a list
LIST_VALIDATIONS: frozenset[str] = frozenset({
    "get_list",
})

# Formatting and whole-document validations compare a single value as authored
DOCUMENT_VALIDATIONS: frozenset[str] = frozenset({
    "pretty_print",
    "round_trip",
    "associativity",
    "canonical_format",
    "load",
})

# Only these validations take a key path in `args`
TYPED_ACCESS_VALIDATIONS: frozenset[str] = SCALAR_VALIDATIONS | LIST_VALIDATIONS


# ──────────────────────────────────────────────────────────────────────
# FEATURES IMPLIED BY A VALIDATION
# ──────────────────────────────────────────────────────────────────────

VALIDATION_IMPLIED_FEATURES: dict[str, list[str]] = {
    "filter": ["comments"],
    "expand_dotted": ["experimental_dotted_keys"],
}


# ──────────────────────────────────────────────────────────────────────
# MUTUALLY EXCLUSIVE BEHAVIOR GROUPS
# ──────────────────────────────────────────────────────────────────────

BEHAVIOR_CONFLICT_GROUPS: dict[str, tuple[str, ...]] = {
    "crlf_handling": ("crlf_normalize_to_lf", "crlf_preserve_literal"),
    "tab_handling": ("tabs_preserve", "tabs_to_spaces"),
    "spacing": ("strict_spacing", "loose_spacing"),
    "boolean": ("boolean_strict", "boolean_lenient"),
    "list_coercion": ("list_coercion_enabled", "list_coercion_disabled"),
    "array_order": ("array_order_insertion", "array_order_lexicographic"),
}


# ──────────────────────────────────────────────────────────────────────
# BEHAVIOR → APPLICABLE VALIDATION FUNCTIONS
# ──────────────────────────────────────────────────────────────────────

# A behavior missing from this table is treated as global: it stays on every
# derived test. Keep it exhaustive when adding behaviors.
_PARSING = ("parse", "parse_indented")
_PARSING_AND_FORMATTING = _PARSING + ("canonical_format", "load")

BEHAVIOR_FUNCTION_MAP: dict[str, frozenset[str]] = {
    # Boolean coercion only matters to get_bool
    "boolean_strict": frozenset({"get_bool"}),
    "boolean_lenient": frozenset({"get_bool"}),

    # List coercion only matters to get_list
    "list_coercion_enabled": frozenset({"get_list"}),
    "list_coercion_disabled": frozenset({"get_list"}),

    # Line endings
    "crlf_preserve_literal": frozenset(_PARSING_AND_FORMATTING),
    "crlf_normalize_to_lf": frozenset(_PARSING_AND_FORMATTING),

    # Tabs also change indentation seen by build_hierarchy
    "tabs_preserve": frozenset(_PARSING_AND_FORMATTING + ("build_hierarchy",)),
    "tabs_to_spaces": frozenset(_PARSING_AND_FORMATTING + ("build_hierarchy",)),

    # Spacing around '='
    "strict_spacing": frozenset(_PARSING),
    "loose_spacing": frozenset(_PARSING),

    # Ordering of repeated keys
    "array_order_insertion": frozenset({"build_hierarchy", "get_list"}),
    "array_order_lexicographic": frozenset({"build_hierarchy", "get_list"}),
}
