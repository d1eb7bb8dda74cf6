"""Steady-state throughput harness for compiled expressions.

The run has three strictly sequential phases: a discarded warm-up over
every (object, program) pair, one timed sub-phase per program, and the
report. A runtime failure in the timed phase aborts the whole run since
the partial timings are no longer meaningful.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence

from exprbench.adapters.base import EvalFailure, ExpressionEnvironment
from exprbench.config import ITERATIONS, WARMUP_ROUNDS
from exprbench.core.compiler import CompiledExpression
from exprbench.errors import EvaluationError
from exprbench.utils.mathx import safe_div

__all__ = ["ExpressionStats", "BenchmarkReport", "run_benchmark"]

logger = logging.getLogger(__name__)

PhaseCallback = Callable[[str], None]


@dataclass
class ExpressionStats:
    """Accumulated timing for one compiled program."""

    evaluations: int = 0
    duration: float = 0.0

    @property
    def average(self) -> float:
        """Seconds per evaluation, ``0.0`` when nothing ran."""

        return safe_div(self.duration, self.evaluations)


@dataclass
class BenchmarkReport:
    """Per-program statistics plus the wall clock of the timed phase."""

    stats: List[ExpressionStats] = field(default_factory=list)
    total_duration: float = 0.0

    def rate(self, position: int) -> float:
        """Evaluations per second of one program against the total wall clock."""

        return safe_div(self.stats[position].evaluations, self.total_duration)

    @property
    def total_evaluations(self) -> int:
        return sum(stat.evaluations for stat in self.stats)

    @property
    def overall_rate(self) -> float:
        return safe_div(self.total_evaluations, self.total_duration)


def run_benchmark(
    env: ExpressionEnvironment,
    objects: Sequence[Mapping[str, Any]],
    params: Mapping[str, Any],
    compiled: Sequence[CompiledExpression],
    *,
    warmup_rounds: int = WARMUP_ROUNDS,
    iterations: int = ITERATIONS,
    clock: Callable[[], float] = time.perf_counter,
    on_phase: Optional[PhaseCallback] = None,
) -> BenchmarkReport:
    """Benchmark every program in ``compiled`` against every object."""

    activations = [env.activation(obj, params) for obj in objects]

    _notify(on_phase, "warmup")
    _warm_up(compiled, activations, warmup_rounds)

    _notify(on_phase, "measure")
    stats = [ExpressionStats() for _ in compiled]
    start = clock()
    for position, entry in enumerate(compiled):
        program = entry.program
        expr_start = clock()
        for iteration in range(iterations):
            for object_index, activation in enumerate(activations, start=1):
                try:
                    program.evaluate(activation)
                except EvalFailure as exc:
                    raise EvaluationError(
                        position + 1, entry.expression, object_index, iteration + 1, exc
                    ) from exc
        stats[position].duration += clock() - expr_start
        stats[position].evaluations = iterations * len(activations)
        if stats[position].evaluations == 0:
            stats[position].duration = 0.0
        logger.debug(
            "Expression %d: %d evaluation(s) in %.6fs",
            position + 1,
            stats[position].evaluations,
            stats[position].duration,
        )
    total_duration = clock() - start

    return BenchmarkReport(stats=stats, total_duration=total_duration)


def _warm_up(
    compiled: Sequence[CompiledExpression],
    activations: Sequence[Mapping[str, Any]],
    rounds: int,
) -> None:
    failures = 0
    for _ in range(rounds):
        for activation in activations:
            for entry in compiled:
                try:
                    entry.program.evaluate(activation)
                except EvalFailure:
                    failures += 1
    if failures:
        logger.debug("Ignored %d warm-up failure(s)", failures)


def _notify(callback: Optional[PhaseCallback], phase: str) -> None:
    logger.debug("Benchmark phase: %s", phase)
    if callback is not None:
        callback(phase)
