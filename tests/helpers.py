"""Scripted expression environment used across the test suite.

Sources understood by :class:`FakeEnvironment`:

* ``object.KEY`` / ``params.KEY``: look the key up, failing when missing.
* ``fail``: always fails at evaluation.
* ``flaky.N``: fails the first ``N`` evaluations, then returns ``True``.
* anything starting with ``bad``: rejected at compile time.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from exprbench.adapters.base import CompileIssues, EvalFailure, register


class FakeProgram:
    def __init__(self, source: str) -> None:
        self.source = source
        self.calls = 0
        self._remaining_failures = 0
        if source.startswith("flaky."):
            self._remaining_failures = int(source.split(".", 1)[1])

    def evaluate(self, activation: Mapping[str, Any]) -> Any:
        self.calls += 1
        if self.source == "fail":
            raise EvalFailure("boom")
        if self.source.startswith("flaky."):
            if self._remaining_failures > 0:
                self._remaining_failures -= 1
                raise EvalFailure("not warm yet")
            return True
        scope, _, key = self.source.partition(".")
        try:
            return activation[scope][key]
        except KeyError as exc:
            raise EvalFailure(f"no such key: {exc.args[0]}") from exc


@register
class FakeEnvironment:
    name = "fake"

    def __init__(self) -> None:
        self.declared: Dict[str, str] = {}
        self.compiled: List[str] = []

    def declare(self, var_name: str, type_name: str) -> None:
        self.declared[var_name] = type_name

    def compile(self, source: str) -> FakeProgram:
        self.compiled.append(source)
        if source.startswith("bad"):
            raise CompileIssues(f"syntax error in '{source}'")
        return FakeProgram(source)

    def activation(self, obj: Mapping[str, Any], params: Mapping[str, Any]) -> Mapping[str, Any]:
        return {"object": obj, "params": params}

    def describe(self, value: Any) -> Tuple[str, str]:
        return str(value), type(value).__name__


def fake_clock(*ticks: float):
    """Return a clock callable yielding ``ticks`` in order."""

    values = iter(ticks)
    return lambda: next(values)


__all__ = ["FakeEnvironment", "FakeProgram", "fake_clock"]
