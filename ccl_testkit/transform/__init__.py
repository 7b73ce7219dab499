"""Source to flat expansion and flat file generation."""

from ccl_testkit.expected import expected_family, shape_expected, to_expected_result, unwrap_expected
from ccl_testkit.transform.behaviors import applicable_behaviors, filter_conflicts, unmapped_behaviors
from ccl_testkit.transform.expand import canonical_validation_order, derive_metadata, expand, expand_all
from ccl_testkit.transform.generator import FlatGenerator, GenerateOptions, to_flat_record
from ccl_testkit.transform.tags import TagMetadata, extract_metadata_from_tags

__all__ = [
    "FlatGenerator",
    "GenerateOptions",
    "TagMetadata",
    "applicable_behaviors",
    "canonical_validation_order",
    "derive_metadata",
    "expand",
    "expand_all",
    "expected_family",
    "extract_metadata_from_tags",
    "filter_conflicts",
    "shape_expected",
    "to_expected_result",
    "to_flat_record",
    "unmapped_behaviors",
    "unwrap_expected",
]
