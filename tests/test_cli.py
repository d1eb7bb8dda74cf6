from __future__ import annotations

import csv

import pytest
from typer.testing import CliRunner

from exprbench.cli import main as cli_main

import tests.helpers  # noqa: F401  registers the fake engine

runner = CliRunner()


@pytest.fixture
def inputs(write_file):
    def _inputs(objects: str, expressions: str, params: str = "{}\n"):
        return [
            str(write_file("objects.yaml", objects)),
            str(write_file("expressions.txt", expressions)),
            str(write_file("params.yaml", params)),
        ]

    return _inputs


def test_too_few_arguments_prints_usage(inputs) -> None:
    paths = inputs("a: 1\n", "object.a")
    result = runner.invoke(cli_main.app, paths[:2])
    assert result.exit_code == 1
    assert cli_main.USAGE in result.stdout


def test_interactive_mode_with_fake_engine(inputs) -> None:
    paths = inputs("a: 1\n---\na: 2\nb: x\n", "object.a\n---\n\n---\nobject.b\n---\nbad one")
    result = runner.invoke(cli_main.app, ["--engine", "fake", *paths])

    assert result.exit_code == 0
    out = result.stdout
    assert out.index("======= Object 1 =======") < out.index("======= Object 2 =======")
    assert "--- Expression 3 ---\nobject.b" in out
    assert "--- Expression 2 ---" not in out
    assert "Result: 1 (type: int)" in out
    assert "Evaluation failed: no such key: b" in out
    assert "Result: x (type: str)" in out
    assert out.count("Compilation failed: syntax error in 'bad one'") == 2


def test_object_header_printed_without_expressions(inputs) -> None:
    paths = inputs("a: 1\n---\na: 2\n", "\n")
    result = runner.invoke(cli_main.app, ["--engine", "fake", *paths])
    assert result.exit_code == 0
    assert "======= Object 2 =======" in result.stdout
    assert "Expression" not in result.stdout


def test_malformed_objects_exit_before_compiling(inputs) -> None:
    paths = inputs("a: [1, 2\n", "object.a")
    result = runner.invoke(cli_main.app, ["--engine", "fake", *paths])
    assert result.exit_code == 1
    assert "objects.yaml" in result.stdout
    assert "Expression" not in result.stdout


def test_missing_params_file_is_fatal(inputs, tmp_path) -> None:
    paths = inputs("a: 1\n", "object.a")
    paths[2] = str(tmp_path / "absent.yaml")
    result = runner.invoke(cli_main.app, ["--engine", "fake", *paths])
    assert result.exit_code == 1
    assert "absent.yaml" in result.stdout


def test_unknown_engine_is_fatal(inputs) -> None:
    result = runner.invoke(cli_main.app, ["--engine", "nope", *inputs("a: 1\n", "object.a")])
    assert result.exit_code == 1
    assert "Unknown engine" in result.stdout


def test_benchmark_flag_is_position_independent(inputs, tmp_path) -> None:
    objects, expressions, params = inputs("a: 1\n---\na: 2\n", "object.a\n---\n\n---\nparams.p", "p: 3\n")
    summary = tmp_path / "summary.csv"
    result = runner.invoke(
        cli_main.app,
        [
            objects,
            "--benchmark",
            expressions,
            params,
            "--engine",
            "fake",
            "--iterations",
            "3",
            "--warmup",
            "1",
            "--summary-csv",
            str(summary),
        ],
    )

    assert result.exit_code == 0
    out = result.stdout
    assert "======= BENCHMARK =======" in out
    assert out.index("Warming up...") < out.index("Running benchmark...")
    assert "Content: object.a..." in out
    assert "--- Expression 2 ---\nContent: params.p..." in out
    assert out.count("Evaluations: 6") == 2
    assert "Total evaluations: 12" in out
    assert "Result:" not in out
    with summary.open(encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["ordinal"] for row in rows] == ["1", "3"]


def test_benchmark_compile_failure_is_fatal(inputs) -> None:
    paths = inputs("a: 1\n", "object.a\n---\nbad one")
    result = runner.invoke(cli_main.app, ["--benchmark", "--engine", "fake", *paths])
    assert result.exit_code == 1
    assert "Failed to compile expressions for benchmark" in result.stdout
    assert "Warming up" not in result.stdout


def test_benchmark_runtime_failure_aborts_without_statistics(inputs) -> None:
    paths = inputs("a: 1\nb: 1\n---\na: 2\n---\na: 3\nb: 3\n", "object.a\n---\nobject.b\n---\nobject.a")
    result = runner.invoke(
        cli_main.app,
        ["--benchmark", "--engine", "fake", "--iterations", "2", "--warmup", "1", *paths],
    )

    assert result.exit_code == 1
    out = result.stdout
    assert "Error during benchmark for expression 2 on object 2" in out
    assert "SUMMARY" not in out
    assert "Evaluations:" not in out


def test_interactive_mode_with_cel(inputs) -> None:
    result = runner.invoke(cli_main.app, inputs("a: 1\n---\na: 2\n", "object.a > 1"))

    assert result.exit_code == 0
    out = result.stdout
    first, second = out.split("======= Object 2 =======")
    assert "Result: false (type: BoolType)" in first
    assert "Result: true (type: BoolType)" in second


def test_objects_with_dates_are_evaluated(inputs) -> None:
    paths = inputs("a: 1\nday: 2024-01-01\n", 'object.a == 1\n---\nobject.day.startsWith("2024")')
    result = runner.invoke(cli_main.app, paths)

    assert result.exit_code == 0
    assert result.stdout.count("Result: true (type: BoolType)") == 2


def test_unsupported_mapping_key_is_fatal(inputs) -> None:
    paths = inputs("a: 1\n1.5: x\n", "object.a == 1")
    result = runner.invoke(cli_main.app, paths)

    assert result.exit_code == 1
    assert "objects.yaml" in result.stdout
    assert "Expression" not in result.stdout
