"""CEL environment backed by cel-python."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import celpy
from celpy import celtypes
from celpy.adapter import json_to_cel

from exprbench.adapters.base import CompileIssues, EvalFailure, register
from exprbench.adapters.cel_strings import STRING_FUNCTIONS

logger = logging.getLogger(__name__)

_ANNOTATIONS = {
    "map(string, dyn)": celtypes.MapType,
}


def _error_text(exc: BaseException) -> str:
    text = str(exc.args[0]) if exc.args else str(exc)
    # Undeclared references carry a repr of the whole activation.
    text, _, _ = text.partition(" (in activation")
    return text or exc.__class__.__name__


def _to_cel(value: Any) -> Any:
    if isinstance(value, dict):
        return celtypes.MapType({_to_cel(key): _to_cel(item) for key, item in value.items()})
    if isinstance(value, list):
        return celtypes.ListType([_to_cel(item) for item in value])
    if isinstance(value, bytes):
        return celtypes.BytesType(value)
    return json_to_cel(value)


class CelProgram:
    """A compiled CEL runner."""

    def __init__(self, source: str, runner: Any) -> None:
        self.source = source
        self._runner = runner

    def evaluate(self, activation: Mapping[str, Any]) -> Any:
        try:
            result = self._runner.evaluate(activation)
        except celpy.CELEvalError as exc:
            raise EvalFailure(_error_text(exc)) from exc
        # celpy may hand errors back as values instead of raising them.
        if isinstance(result, celpy.CELEvalError):
            raise EvalFailure(_error_text(result))
        return result


@register
class CelEnvironment:
    """Common Expression Language environment."""

    name = "cel"

    def __init__(self) -> None:
        self._annotations: Dict[str, Any] = {}
        self._env: Optional[celpy.Environment] = None

    def declare(self, var_name: str, type_name: str) -> None:
        if type_name not in _ANNOTATIONS:
            raise ValueError(f"Unsupported CEL input type '{type_name}'")
        self._annotations[var_name] = _ANNOTATIONS[type_name]
        # Annotations are fixed once celpy builds the environment.
        self._env = None
        logger.debug("Declared CEL input %s: %s", var_name, type_name)

    def compile(self, source: str) -> CelProgram:
        env = self._environment()
        try:
            ast = env.compile(source)
            runner = env.program(ast, functions=STRING_FUNCTIONS)
        except celpy.CELParseError as exc:
            raise CompileIssues(_error_text(exc)) from exc
        return CelProgram(source, runner)

    def activation(self, obj: Mapping[str, Any], params: Mapping[str, Any]) -> Mapping[str, Any]:
        return {
            "object": _to_cel(dict(obj)),
            "params": _to_cel(dict(params)),
        }

    def describe(self, value: Any) -> Tuple[str, str]:
        if isinstance(value, celtypes.BoolType):
            text = "true" if value else "false"
        else:
            text = str(value)
        return text, type(value).__name__

    def _environment(self) -> celpy.Environment:
        if self._env is None:
            self._env = celpy.Environment(annotations=dict(self._annotations))
        return self._env
