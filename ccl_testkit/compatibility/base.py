"""Base compatibility check — abstract class implementing the Strategy Pattern.

Each check is a standalone, independently testable predicate over one
capability declaration and one test case. New checks are added without
modifying the engine.
"""

from abc import ABC, abstractmethod

from ccl_testkit.capabilities import CapabilityDeclaration
from ccl_testkit.models import ConformanceCase


class CompatibilityCheck(ABC):
    """Abstract base for all compatibility checks.

    Contract:
        - check() is pure: same declaration and case → same answer
        - check() never mutates its arguments
        - checks are independent; their conjunction is order-independent
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in logs and in CompatibilityEngine.explain()."""
        ...

    @abstractmethod
    def check(self, declaration: CapabilityDeclaration, case: ConformanceCase) -> bool:
        """Return True when the case passes this axis of compatibility.

        Args:
            declaration: Validated capability declaration
            case: Source or flat test case

        Returns:
            False if this axis disqualifies the case
        """
        ...
