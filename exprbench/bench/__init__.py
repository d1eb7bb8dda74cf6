"""Matrix runner and benchmark harness."""

from .harness import BenchmarkReport, ExpressionStats, run_benchmark
from .run_matrix import EvaluationResult, iter_matrix, run_matrix

__all__ = [
    "BenchmarkReport",
    "ExpressionStats",
    "run_benchmark",
    "EvaluationResult",
    "iter_matrix",
    "run_matrix",
]
