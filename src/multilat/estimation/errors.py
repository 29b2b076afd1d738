from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SolveErrorKind(str, Enum):
    DIMENSION_MISMATCH = "dimension_mismatch"
    ZERO_DIMENSION = "zero_dimension"
    SINGULAR_SYSTEM = "singular_system"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"


@dataclass(frozen=True)
class SolveError:
    kind: SolveErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


class MultilaterationError(Exception):
    """Raised by the unwrapping helpers when a solve did not produce a position."""

    def __init__(self, error: SolveError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> SolveErrorKind:
        return self.error.kind
