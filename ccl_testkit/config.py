"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from CCL_TESTKIT_* environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Test data layout
    TEST_DATA_PATH: str = "."
    SOURCE_TESTS_DIR: str = "tests"
    FLAT_TESTS_DIR: str = "generated_tests"
    TEST_FILE_PATTERN: str = "*.json"

    # Flat output
    FLAT_SCHEMA_URL: str = "http://json-schema.org/draft-07/schema#"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "CCL_TESTKIT_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
