"""Run configuration for exprbench."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DEFAULT_ENGINE",
    "DELIMITER",
    "ITERATIONS",
    "PREVIEW_WIDTH",
    "WARMUP_ROUNDS",
    "HarnessConfig",
    "Mode",
]

DEFAULT_ENGINE = "cel"
DELIMITER = "---"
WARMUP_ROUNDS = 10
ITERATIONS = 1024 * 1024
PREVIEW_WIDTH = 50


class Mode(str, Enum):
    """Terminal consumer selected once at start-up."""

    EVALUATE = "evaluate"
    BENCHMARK = "benchmark"


@dataclass(frozen=True)
class HarnessConfig:
    """Settings handed explicitly to the loaders, runner and harness."""

    engine: str = DEFAULT_ENGINE
    delimiter: str = DELIMITER
    warmup_rounds: int = WARMUP_ROUNDS
    iterations: int = ITERATIONS
    preview_width: int = PREVIEW_WIDTH
