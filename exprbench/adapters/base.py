"""Expression environment protocol and registry."""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Protocol, Tuple

EnvironmentFactory = Callable[[], "ExpressionEnvironment"]

INPUT_TYPE = "map(string, dyn)"
INPUT_NAMES = ("object", "params")


class CompileIssues(Exception):
    """Raised by ``ExpressionEnvironment.compile`` when a source is rejected."""


class EvalFailure(Exception):
    """Raised by ``Program.evaluate`` when the runtime reports an error."""


class Program(Protocol):
    """Compiled expression bound to the ``object`` and ``params`` inputs."""

    def evaluate(self, activation: Mapping[str, Any]) -> Any:
        """Evaluate against ``activation`` or raise :class:`EvalFailure`."""


class ExpressionEnvironment(Protocol):
    """Compiler+evaluator capability consumed by the runner and harness."""

    name: str

    def declare(self, var_name: str, type_name: str) -> None:
        """Register an input variable visible to compiled expressions."""

    def compile(self, source: str) -> Program:
        """Compile and bind ``source`` or raise :class:`CompileIssues`."""

    def activation(self, obj: Mapping[str, Any], params: Mapping[str, Any]) -> Mapping[str, Any]:
        """Convert host documents into the runtime's input mapping."""

    def describe(self, value: Any) -> Tuple[str, str]:
        """Return ``(display_text, type_name)`` for an evaluation result."""


REGISTRY: Dict[str, EnvironmentFactory] = {}


def register(env_cls: Callable[[], ExpressionEnvironment]) -> Callable[[], ExpressionEnvironment]:
    """Class decorator registering an environment implementation."""

    name = getattr(env_cls, "name", None)
    if not name:
        raise ValueError("Environments must define a 'name' attribute for registration")
    REGISTRY[name] = env_cls  # type: ignore[assignment]
    return env_cls


def get_environment(name: str) -> ExpressionEnvironment:
    """Return a fresh, undeclared environment by ``name``."""

    if name not in REGISTRY:
        raise KeyError(f"Unknown engine '{name}'. Registered: {', '.join(sorted(REGISTRY))}")
    return REGISTRY[name]()


def build_environment(name: str) -> ExpressionEnvironment:
    """Return an environment with ``object`` and ``params`` declared."""

    env = get_environment(name)
    for var_name in INPUT_NAMES:
        env.declare(var_name, INPUT_TYPE)
    return env
