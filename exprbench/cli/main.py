"""Root CLI entry point for exprbench."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import typer

from exprbench.adapters import ExpressionEnvironment, build_environment
from exprbench.bench.harness import BenchmarkReport, run_benchmark
from exprbench.bench.run_matrix import EvaluationResult, iter_matrix
from exprbench.bench.summarise import format_duration, preview, report_rows, write_summary_csv
from exprbench.config import (
    DEFAULT_ENGINE,
    DELIMITER,
    ITERATIONS,
    WARMUP_ROUNDS,
    HarnessConfig,
    Mode,
)
from exprbench.core.compiler import CompiledExpression, compile_all
from exprbench.core.documents import Document, load_objects, load_params
from exprbench.core.expressions import Expression, load_expressions, number_expressions
from exprbench.errors import CompilationError, EvaluationError, HarnessError

USAGE = "Usage: exprbench [--benchmark] <object-file> <expression-file> <params-file>"

_PHASE_MESSAGES = {
    "warmup": "Warming up...",
    "measure": "Running benchmark...",
}

app = typer.Typer(add_completion=False, help="Evaluate or benchmark expressions against YAML objects.")


def _setup_logging(verbose: bool) -> None:
    """Route exprbench debug logs to stderr when ``verbose`` is set."""

    package_logger = logging.getLogger("exprbench")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not verbose or package_logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    package_logger.addHandler(handler)


def _fail(message: str) -> typer.Exit:
    typer.secho(f"[ERROR] {message}", fg=typer.colors.RED)
    return typer.Exit(code=1)


def _print_matrix(cells: Iterable[EvaluationResult], object_count: int) -> None:
    current = 0

    def advance_to(object_index: int) -> None:
        nonlocal current
        while current < object_index:
            current += 1
            typer.echo(f"\n======= Object {current} =======")

    for cell in cells:
        advance_to(cell.object_index)
        typer.echo(f"\n--- Expression {cell.expression_index} ---\n{cell.expression.source}")
        if cell.ok:
            typer.echo(f"Result: {cell.value_text} (type: {cell.type_name})")
        elif cell.stage == "compile":
            typer.echo(f"Compilation failed: {cell.error}")
        else:
            typer.echo(f"Evaluation failed: {cell.error}")
    advance_to(object_count)


def _print_report(report: BenchmarkReport, compiled: Sequence[CompiledExpression], width: int) -> None:
    for position, (stat, entry) in enumerate(zip(report.stats, compiled)):
        typer.echo(f"\n--- Expression {position + 1} ---")
        typer.echo(f"Content: {preview(entry.expression.source, width)}")
        typer.echo(f"Evaluations: {stat.evaluations}")
        typer.echo(f"Total time: {format_duration(stat.duration)}")
        if stat.evaluations > 0:
            typer.echo(f"Average time per evaluation: {format_duration(stat.average)}")
            typer.echo(f"Evaluations per second: {report.rate(position):.0f}")

    typer.echo("\n======= SUMMARY =======")
    typer.echo(f"Total duration: {format_duration(report.total_duration)}")
    typer.echo(f"Total evaluations: {report.total_evaluations}")
    typer.echo(f"Overall evaluations per second: {report.overall_rate:.0f}")


def _evaluate(
    env: ExpressionEnvironment,
    objects: List[Document],
    expressions: List[Expression],
    params: Document,
) -> None:
    _print_matrix(iter_matrix(env, objects, expressions, params), len(objects))


def _benchmark(
    env: ExpressionEnvironment,
    objects: List[Document],
    expressions: List[Expression],
    params: Document,
    config: HarnessConfig,
    summary_csv: Optional[Path],
) -> None:
    try:
        compiled = compile_all(env, expressions)
    except CompilationError as exc:
        raise _fail(f"Failed to compile expressions for benchmark: {exc.message}") from exc

    typer.echo("\n======= BENCHMARK =======")
    try:
        report = run_benchmark(
            env,
            objects,
            params,
            compiled,
            warmup_rounds=config.warmup_rounds,
            iterations=config.iterations,
            on_phase=lambda phase: typer.echo(_PHASE_MESSAGES[phase]),
        )
    except EvaluationError as exc:
        raise _fail(
            f"Error during benchmark for expression {exc.position} on object {exc.object_index}: {exc.cause}"
        ) from exc

    _print_report(report, compiled, config.preview_width)
    if summary_csv is not None:
        path = write_summary_csv(report_rows(report, compiled), summary_csv)
        typer.echo(f"Summary CSV written to {path}")


@app.command()
def main(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        metavar="OBJECT_FILE EXPRESSION_FILE PARAMS_FILE",
        help="Object YAML stream, expression file and params YAML.",
        show_default=False,
    ),
    benchmark: bool = typer.Option(False, "--benchmark", help="Run the throughput benchmark instead of evaluating."),
    delimiter: str = typer.Option(DELIMITER, "--delimiter", help="Separator between expressions."),
    warmup: int = typer.Option(WARMUP_ROUNDS, "--warmup", min=0, help="Discarded warm-up rounds."),
    iterations: int = typer.Option(ITERATIONS, "--iterations", min=1, help="Timed iterations per expression."),
    engine: str = typer.Option(DEFAULT_ENGINE, "--engine", help="Expression engine to use."),
    summary_csv: Optional[Path] = typer.Option(
        None, "--summary-csv", help="Write benchmark statistics to this CSV file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
) -> None:
    """Evaluate every expression against every object, or benchmark them."""

    if not paths or len(paths) != 3:
        typer.echo(USAGE)
        raise typer.Exit(code=1)

    _setup_logging(verbose)
    mode = Mode.BENCHMARK if benchmark else Mode.EVALUATE
    config = HarnessConfig(
        engine=engine,
        delimiter=delimiter,
        warmup_rounds=warmup,
        iterations=iterations,
    )
    object_file, expression_file, params_file = paths

    try:
        objects = load_objects(object_file)
        expressions = number_expressions(load_expressions(expression_file, config.delimiter))
        params = load_params(params_file)
    except HarnessError as exc:
        raise _fail(exc.message) from exc
    except ValueError as exc:
        raise _fail(str(exc)) from exc

    try:
        env = build_environment(config.engine)
    except KeyError as exc:
        raise _fail(str(exc.args[0])) from exc

    if mode is Mode.BENCHMARK:
        _benchmark(env, objects, expressions, params, config, summary_csv)
    else:
        _evaluate(env, objects, expressions, params)


def run() -> None:
    """Execute the root CLI."""

    app()


if __name__ == "__main__":  # pragma: no cover
    run()


__all__ = ["app", "main", "run"]
