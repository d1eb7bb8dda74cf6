"""Loading and compilation of harness inputs."""

from .compiler import CompiledExpression, CompileOutcome, compile_all, compile_each, compile_expression
from .documents import Document, load_multi_document, load_objects, load_params, load_single_document
from .expressions import Expression, load_expressions, number_expressions, split_expressions

__all__ = [
    "CompiledExpression",
    "CompileOutcome",
    "compile_all",
    "compile_each",
    "compile_expression",
    "Document",
    "load_multi_document",
    "load_objects",
    "load_params",
    "load_single_document",
    "Expression",
    "load_expressions",
    "number_expressions",
    "split_expressions",
]
