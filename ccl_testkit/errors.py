"""Error taxonomy.

Configuration errors are fatal to the caller. Load and generation errors are
raised per file and always name the offending path. Degraded data is never an
exception; it is logged and passed through.
"""

from pathlib import Path
from typing import Optional, Union


class ConfigError(ValueError):
    """Invalid capability declaration."""

    def __init__(self, kind: str, message: str, group: Optional[str] = None):
        self.kind = kind
        self.group = group
        super().__init__(f"{kind}: {message}")


class LoadError(Exception):
    """A test file could not be read or decoded."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to load {self.path}: {reason}")


class GenerationError(Exception):
    """Flat output could not be written or failed validation."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"generation failed for {self.path}: {reason}")
