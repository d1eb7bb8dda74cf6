"""Evaluation matrix runner: every object against every expression."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from exprbench.adapters.base import EvalFailure, ExpressionEnvironment
from exprbench.core.compiler import compile_each
from exprbench.core.expressions import Expression

__all__ = ["EvaluationResult", "iter_matrix", "run_matrix"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """One cell of the matrix: a value or a failure, never both."""

    object_index: int
    expression: Expression
    value: Any = None
    value_text: str = ""
    type_name: str = ""
    stage: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def expression_index(self) -> int:
        return self.expression.ordinal


def iter_matrix(
    env: ExpressionEnvironment,
    objects: Sequence[Mapping[str, Any]],
    expressions: Sequence[Expression],
    params: Mapping[str, Any],
) -> Iterator[EvaluationResult]:
    """Yield cells ordered by object, then by expression ordinal."""

    for object_index, obj in enumerate(objects, start=1):
        activation = env.activation(obj, params)
        for outcome in compile_each(env, expressions):
            if outcome.error is not None:
                yield EvaluationResult(
                    object_index=object_index,
                    expression=outcome.expression,
                    stage="compile",
                    error=str(outcome.error.cause),
                )
                continue

            try:
                value = outcome.compiled.program.evaluate(activation)
            except EvalFailure as exc:
                logger.debug(
                    "Object %d, expression %d failed: %s",
                    object_index,
                    outcome.expression.ordinal,
                    exc,
                )
                yield EvaluationResult(
                    object_index=object_index,
                    expression=outcome.expression,
                    stage="evaluate",
                    error=str(exc),
                )
                continue

            text, type_name = env.describe(value)
            yield EvaluationResult(
                object_index=object_index,
                expression=outcome.expression,
                value=value,
                value_text=text,
                type_name=type_name,
            )


def run_matrix(
    env: ExpressionEnvironment,
    objects: Sequence[Mapping[str, Any]],
    expressions: Sequence[Expression],
    params: Mapping[str, Any],
) -> List[EvaluationResult]:
    """Evaluate the full matrix and return every cell."""

    return list(iter_matrix(env, objects, expressions, params))
