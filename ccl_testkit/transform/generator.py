"""Flat generator — writes implementation-friendly flat files from source files.

Usage:
    generator = FlatGenerator("tests", "generated_tests")
    generator.generate_all()
    generator.validate_generated()
"""

import json
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import BaseModel, Field

from ccl_testkit.config import get_settings
from ccl_testkit.errors import GenerationError
from ccl_testkit.expected import to_expected_result
from ccl_testkit.loader import FilterMode, LoadOptions, SuiteFormat, SuiteLoader
from ccl_testkit.models import ConformanceCase
from ccl_testkit.reference_data import TYPED_ACCESS_VALIDATIONS
from ccl_testkit.transform.expand import expand

logger = structlog.get_logger()

PROPERTY_TEST_PREFIX = "property-"


class GenerateOptions(BaseModel):
    """Controls which derived tests are written."""

    skip_property_tests: bool = False
    skip_functions: list[str] = Field(default_factory=list)
    only_functions: list[str] = Field(default_factory=list)


def to_flat_record(case: ConformanceCase) -> dict:
    """Serialise a flat case for the generated format.

    `args` is written only for typed accessors and `expect_error` only when
    set; list metadata is always written, empty or not.
    """
    record: dict = {"name": case.name, "input": case.input}
    for key in ("input1", "input2", "input3"):
        value = getattr(case, key)
        if value is not None:
            record[key] = value

    record["validation"] = case.validation
    record["expected"] = to_expected_result(case.validation, case.expected, case.expect_error).to_wire()
    if case.validation in TYPED_ACCESS_VALIDATIONS:
        record["args"] = list(case.args or [])

    record["functions"] = list(case.functions)
    record["features"] = list(case.features)
    record["behaviors"] = list(case.behaviors)
    record["variants"] = list(case.variants)

    if case.conflicts is not None:
        record["conflicts"] = case.conflicts.model_dump()
    if case.expect_error:
        record["expect_error"] = True
    if case.source_test:
        record["source_test"] = case.source_test
    if not case.meta.is_default:
        record["meta"] = case.meta.model_dump(exclude_none=True)
    return record


class FlatGenerator:
    """Transforms source test files into flat test files."""

    def __init__(
        self,
        source_dir: Union[str, Path],
        output_dir: Union[str, Path],
        options: Optional[GenerateOptions] = None,
    ):
        self.source_dir = Path(source_dir)
        self.output_dir = Path(output_dir)
        self.options = options or GenerateOptions()
        self._loader = SuiteLoader(self.source_dir)

    def _selected(self, case: ConformanceCase) -> bool:
        if case.validation in self.options.skip_functions:
            return False
        if self.options.only_functions and case.validation not in self.options.only_functions:
            return False
        return True

    def transform(self, cases: list[ConformanceCase]) -> list[ConformanceCase]:
        """Expand source cases and apply the function selection options."""
        return [flat for case in cases for flat in expand(case) if self._selected(flat)]

    def generate_file(self, source_file: Union[str, Path]) -> list[ConformanceCase]:
        """Generate the flat counterpart of one source file.

        Returns:
            The flat cases written

        Raises:
            LoadError: if the source file is malformed
            GenerationError: if the output cannot be written
        """
        source_file = Path(source_file)
        suite = self._loader.load_file(
            source_file, LoadOptions(format=SuiteFormat.SOURCE, filter_mode=FilterMode.ALL)
        )
        flat_cases = self.transform(suite.tests)

        settings = get_settings()
        document = {
            "$schema": settings.FLAT_SCHEMA_URL,
            "tests": [to_flat_record(case) for case in flat_cases],
        }

        output_file = self.output_dir / source_file.name
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            output_file.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as e:
            raise GenerationError(output_file, f"failed to write flat file: {e}") from e

        logger.info(
            "flat_file_generated",
            source=str(source_file),
            output=str(output_file),
            source_tests=len(suite.tests),
            flat_tests=len(flat_cases),
        )
        return flat_cases

    def generate_all(self) -> list[Path]:
        """Generate flat files for every source file; returns the files written."""
        pattern = get_settings().TEST_FILE_PATTERN
        written = []
        for source_file in sorted(self.source_dir.glob(pattern)):
            if self.options.skip_property_tests and source_file.name.startswith(PROPERTY_TEST_PREFIX):
                logger.info("property_file_skipped", source=str(source_file))
                continue
            self.generate_file(source_file)
            written.append(self.output_dir / source_file.name)
        return written

    def validate_generated(self) -> None:
        """Check every generated test carries a validation and an expected result.

        Raises:
            GenerationError: naming the first offending file
        """
        for path in sorted(self.output_dir.glob(get_settings().TEST_FILE_PATTERN)):
            try:
                document = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                raise GenerationError(path, f"unreadable generated file: {e}") from e

            tests = document.get("tests") if isinstance(document, dict) else document
            if not isinstance(tests, list):
                raise GenerationError(path, "generated file has no tests array")
            for test in tests:
                name = test.get("name", "<unnamed>") if isinstance(test, dict) else "<invalid>"
                if not isinstance(test, dict) or not test.get("validation"):
                    raise GenerationError(path, f"test {name} missing validation field")
                if test.get("expected") is None:
                    raise GenerationError(path, f"test {name} missing expected field")
