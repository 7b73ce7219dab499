"""CCL test kit — capability-filtered conformance tests for CCL implementations.

Usage:
    from ccl_testkit import CapabilityDeclaration, LoadOptions, SuiteLoader

    declaration = CapabilityDeclaration(
        name="my-ccl",
        supported_functions={"parse", "build_hierarchy"},
        variant_choice="reference_compliant",
    )
    loader = SuiteLoader("path/to/ccl-test-data", declaration)
    runnable = loader.load_all(LoadOptions())
"""

from ccl_testkit.capabilities import Behavior, CapabilityDeclaration, Feature, Function, Variant
from ccl_testkit.compatibility import CompatibilityEngine, filter_compatible, is_compatible
from ccl_testkit.errors import ConfigError, GenerationError, LoadError
from ccl_testkit.loader import FilterMode, LoadOptions, LoadReport, SuiteFormat, SuiteLoader
from ccl_testkit.models import ConflictSet, ConformanceCase, ConformanceSuite, Entry, SuiteStatistics
from ccl_testkit.transform import FlatGenerator, GenerateOptions, expand, expand_all

__all__ = [
    "Behavior",
    "CapabilityDeclaration",
    "Feature",
    "Function",
    "Variant",
    "CompatibilityEngine",
    "filter_compatible",
    "is_compatible",
    "ConfigError",
    "GenerationError",
    "LoadError",
    "FilterMode",
    "LoadOptions",
    "LoadReport",
    "SuiteFormat",
    "SuiteLoader",
    "ConflictSet",
    "ConformanceCase",
    "ConformanceSuite",
    "Entry",
    "SuiteStatistics",
    "FlatGenerator",
    "GenerateOptions",
    "expand",
    "expand_all",
]
