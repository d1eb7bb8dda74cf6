"""Expression environments and registry exports."""
from .base import (
    REGISTRY,
    CompileIssues,
    EvalFailure,
    ExpressionEnvironment,
    Program,
    build_environment,
    get_environment,
    register,
)
from .cel_adapter import CelEnvironment, CelProgram

__all__ = [
    "REGISTRY",
    "CompileIssues",
    "EvalFailure",
    "ExpressionEnvironment",
    "Program",
    "build_environment",
    "get_environment",
    "register",
    "CelEnvironment",
    "CelProgram",
]
