"""Error taxonomy shared by the loaders, compiler, runner and harness."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from exprbench.core.expressions import Expression

__all__ = [
    "HarnessError",
    "DocumentReadError",
    "ParseError",
    "CompilationError",
    "EvaluationError",
]


class HarnessError(RuntimeError):
    """Base class for every failure the CLI reports to the operator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DocumentReadError(HarnessError):
    """Raised when an input file cannot be read at all."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        super().__init__(f"Failed to read '{path}': {cause}")
        self.path = Path(path)
        self.cause = cause


class ParseError(HarnessError):
    """Raised when an input cannot be decoded into documents or text."""

    def __init__(self, source: str, cause: Optional[BaseException] = None, detail: str = "") -> None:
        reason = detail or str(cause)
        super().__init__(f"Failed to parse '{source}': {reason}")
        self.source = source
        self.cause = cause


class CompilationError(HarnessError):
    """Raised when one expression fails to compile or bind."""

    def __init__(self, expression: "Expression", cause: BaseException) -> None:
        super().__init__(f"expression {expression.ordinal}: {cause}")
        self.expression = expression
        self.cause = cause

    @property
    def index(self) -> int:
        return self.expression.ordinal


class EvaluationError(HarnessError):
    """Raised when a program fails during the timed benchmark phase."""

    def __init__(
        self,
        position: int,
        expression: "Expression",
        object_index: int,
        iteration: int,
        cause: BaseException,
    ) -> None:
        super().__init__(
            f"expression {position} on object {object_index} (iteration {iteration}): {cause}"
        )
        self.position = position
        self.expression = expression
        self.object_index = object_index
        self.iteration = iteration
        self.cause = cause
