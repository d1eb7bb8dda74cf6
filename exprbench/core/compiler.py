"""Compile expressions against an expression environment."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from exprbench.adapters.base import CompileIssues, ExpressionEnvironment, Program
from exprbench.core.expressions import Expression
from exprbench.errors import CompilationError

__all__ = [
    "CompiledExpression",
    "CompileOutcome",
    "compile_expression",
    "compile_all",
    "compile_each",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledExpression:
    """A program together with the expression it was built from."""

    expression: Expression
    program: Program


@dataclass(frozen=True)
class CompileOutcome:
    """Result of compiling one expression in non-aborting mode."""

    expression: Expression
    compiled: Optional[CompiledExpression] = None
    error: Optional[CompilationError] = None

    @property
    def ok(self) -> bool:
        return self.compiled is not None


def compile_expression(env: ExpressionEnvironment, expression: Expression) -> CompiledExpression:
    """Compile and bind ``expression`` or raise :class:`CompilationError`."""

    try:
        program = env.compile(expression.source)
    except CompileIssues as exc:
        raise CompilationError(expression, exc) from exc
    return CompiledExpression(expression=expression, program=program)


def compile_all(env: ExpressionEnvironment, expressions: Iterable[Expression]) -> List[CompiledExpression]:
    """Compile every non-empty expression, aborting on the first failure."""

    compiled: List[CompiledExpression] = []
    for expression in expressions:
        if not expression.source:
            continue
        compiled.append(compile_expression(env, expression))
    logger.debug("Compiled %d expression(s)", len(compiled))
    return compiled


def compile_each(env: ExpressionEnvironment, expressions: Iterable[Expression]) -> Iterator[CompileOutcome]:
    """Yield one outcome per non-empty expression; failures do not stop the batch."""

    for expression in expressions:
        if not expression.source:
            continue
        try:
            compiled = compile_expression(env, expression)
        except CompilationError as exc:
            logger.debug("Skipping expression %d: %s", expression.ordinal, exc.cause)
            yield CompileOutcome(expression=expression, error=exc)
            continue
        yield CompileOutcome(expression=expression, compiled=compiled)
