"""Test file ingestion, capability filtering and statistics."""

from ccl_testkit.loader.formats import decode_flat, decode_source
from ccl_testkit.loader.loader import FilterMode, LoadOptions, LoadReport, SuiteFormat, SuiteLoader
from ccl_testkit.loader.statistics import build_coverage, build_statistics

__all__ = [
    "FilterMode",
    "LoadOptions",
    "LoadReport",
    "SuiteFormat",
    "SuiteLoader",
    "build_coverage",
    "build_statistics",
    "decode_flat",
    "decode_source",
]
