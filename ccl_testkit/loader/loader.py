"""Suite loader — reads source or flat test files and filters them by capability.

Usage:
    loader = SuiteLoader("path/to/ccl-test-data", declaration)
    cases = loader.load_all(LoadOptions(format=SuiteFormat.FLAT))
    stats = loader.statistics(cases)
"""

import json
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

import structlog
from pydantic import BaseModel, Field

from ccl_testkit.capabilities import CapabilityDeclaration
from ccl_testkit.compatibility import CompatibilityEngine
from ccl_testkit.config import get_settings
from ccl_testkit.errors import ConfigError, LoadError
from ccl_testkit.loader.formats import decode_flat, decode_source
from ccl_testkit.loader.statistics import build_coverage, build_statistics, case_functions
from ccl_testkit.models import CapabilityCoverage, ConformanceCase, ConformanceSuite, SuiteStatistics

logger = structlog.get_logger()


class SuiteFormat(str, Enum):
    SOURCE = "source"  # multi-validation, human maintained
    FLAT = "flat"      # single-validation, generated


class FilterMode(str, Enum):
    COMPATIBLE = "compatible"  # only tests the declaration can run
    ALL = "all"
    CUSTOM = "custom"          # LoadOptions.custom_filter decides


class LoadOptions(BaseModel):
    """Controls format detection, filtering and failure handling."""

    format: SuiteFormat = SuiteFormat.FLAT
    filter_mode: FilterMode = FilterMode.COMPATIBLE
    custom_filter: Optional[Callable[[ConformanceCase], bool]] = None
    level_limit: int = Field(default=0, description="Maximum meta.level to include; 0 = no limit")
    strict: bool = Field(default=False, description="Abort a directory load on the first bad file")


class LoadReport(BaseModel):
    """Result of loading a directory: tests from good files, reasons for bad ones."""

    tests: list[ConformanceCase] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)


class SuiteLoader:
    """Loads test suites and applies capability-driven filtering."""

    def __init__(
        self,
        test_data_path: Union[str, Path, None] = None,
        declaration: Optional[CapabilityDeclaration] = None,
    ):
        """
        Args:
            test_data_path: Root holding the source and flat test directories.
                Defaults to CCL_TESTKIT_TEST_DATA_PATH.
            declaration: Implementation capabilities. Required for compatible
                filtering, statistics and coverage.

        Raises:
            ConfigError: if the declaration chooses conflicting behaviors
        """
        settings = get_settings()
        self.test_data_path = Path(test_data_path or settings.TEST_DATA_PATH)
        self.declaration = declaration
        self.engine = CompatibilityEngine(declaration) if declaration is not None else None

    # ── Single file ──

    def load_bytes(
        self,
        data: Union[bytes, str],
        options: Optional[LoadOptions] = None,
        source: str = "<memory>",
    ) -> ConformanceSuite:
        """Decode one file's content.

        Raises:
            LoadError: malformed JSON or records, naming `source`
        """
        options = options or LoadOptions()
        try:
            raw = json.loads(data)
            if options.format == SuiteFormat.FLAT:
                suite = decode_flat(raw)
            else:
                suite = decode_source(raw)
        except ValueError as e:  # JSONDecodeError and pydantic ValidationError included
            raise LoadError(source, str(e)) from e

        if options.level_limit > 0:
            suite = suite.model_copy(update={
                "tests": [t for t in suite.tests if t.meta.level <= options.level_limit],
            })

        logger.debug("suite_loaded", source=source, format=options.format.value, tests=len(suite.tests))
        return suite

    def load_file(self, path: Union[str, Path], options: Optional[LoadOptions] = None) -> ConformanceSuite:
        """Read and decode one test file.

        Raises:
            LoadError: unreadable or malformed file, naming the path
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise LoadError(path, f"failed to read file: {e}") from e
        return self.load_bytes(data, options, source=str(path))

    # ── Directories ──

    def default_directory(self, fmt: SuiteFormat) -> Path:
        settings = get_settings()
        subdir = settings.SOURCE_TESTS_DIR if fmt == SuiteFormat.SOURCE else settings.FLAT_TESTS_DIR
        return self.test_data_path / subdir

    def load_directory(self, directory: Union[str, Path], options: Optional[LoadOptions] = None) -> LoadReport:
        """Load every matching file in `directory`, in sorted path order.

        A directory with no matching files (or no directory at all) yields an
        empty report. Bad files are recorded and skipped unless options.strict.
        """
        options = options or LoadOptions()
        directory = Path(directory)
        files = sorted(directory.glob(get_settings().TEST_FILE_PATTERN)) if directory.is_dir() else []

        report = LoadReport()
        for path in files:
            try:
                suite = self.load_file(path, options)
            except LoadError as e:
                if options.strict:
                    raise
                logger.warning("load_failed", path=e.path, reason=e.reason)
                report.failures[e.path] = e.reason
                continue
            report.tests.extend(suite.tests)

        logger.info(
            "directory_loaded",
            directory=str(directory),
            files=len(files),
            tests=len(report.tests),
            failures=len(report.failures),
        )
        return report

    def load_all(
        self,
        options: Optional[LoadOptions] = None,
        directory: Union[str, Path, None] = None,
    ) -> list[ConformanceCase]:
        """Load a directory (default: the format's directory) and filter it."""
        options = options or LoadOptions()
        directory = directory or self.default_directory(options.format)
        report = self.load_directory(directory, options)
        return self.apply_filtering(report.tests, options)

    def load_by_level(self, level: int, options: Optional[LoadOptions] = None) -> list[ConformanceCase]:
        options = (options or LoadOptions()).model_copy(update={"level_limit": level})
        return self.load_all(options)

    def load_by_function(self, function: str, options: Optional[LoadOptions] = None) -> list[ConformanceCase]:
        """Load tests exercising `function`, by flat validation or derived metadata."""
        return [c for c in self.load_all(options) if function in case_functions(c)]

    # ── Filtering ──

    def _require_engine(self) -> CompatibilityEngine:
        if self.engine is None:
            raise ConfigError(
                kind="missing_declaration",
                message="a capability declaration is required for compatibility filtering",
            )
        return self.engine

    def filter_compatible(self, cases: Iterable[ConformanceCase]) -> list[ConformanceCase]:
        return self._require_engine().filter_compatible(cases)

    def is_compatible(self, case: ConformanceCase) -> bool:
        return self._require_engine().is_compatible(case)

    def apply_filtering(self, cases: list[ConformanceCase], options: LoadOptions) -> list[ConformanceCase]:
        if options.filter_mode == FilterMode.COMPATIBLE:
            return self.filter_compatible(cases)
        if options.filter_mode == FilterMode.CUSTOM and options.custom_filter is not None:
            return [c for c in cases if options.custom_filter(c)]
        return list(cases)

    @staticmethod
    def filter_by_tags(
        cases: Iterable[ConformanceCase],
        include_tags: Iterable[str] = (),
        exclude_tags: Iterable[str] = (),
    ) -> list[ConformanceCase]:
        """Legacy tag filtering: drop any excluded tag, then require an included one."""
        include, exclude = set(include_tags), set(exclude_tags)
        filtered = []
        for case in cases:
            tags = set(case.meta.tags)
            if tags & exclude:
                continue
            if include and not tags & include:
                continue
            filtered.append(case)
        return filtered

    # ── Reporting ──

    def statistics(self, cases: list[ConformanceCase]) -> SuiteStatistics:
        return build_statistics(self._require_engine(), cases)

    def capability_coverage(self, cases: Optional[list[ConformanceCase]] = None) -> CapabilityCoverage:
        """Coverage of the declared capabilities; defaults to all flat tests on disk."""
        if cases is None:
            cases = self.load_all(LoadOptions(format=SuiteFormat.FLAT, filter_mode=FilterMode.ALL))
        return build_coverage(self._require_engine(), cases)
