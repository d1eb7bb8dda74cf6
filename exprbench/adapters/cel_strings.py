"""CEL string extension functions for celpy.

Receiver-style calls such as ``name.lowerAscii()`` reach these with the
receiver as the first argument. Bad arguments come back as
``CELEvalError`` values, which celpy propagates as the expression result.
"""
from __future__ import annotations

from typing import Any, Callable, Dict

import celpy
from celpy import celtypes

__all__ = ["STRING_FUNCTIONS"]

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")
_ASCII_UPPER = str.maketrans("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")


def _overload_error(name: str, *args: Any) -> celpy.CELEvalError:
    kinds = ", ".join(type(arg).__name__ for arg in args)
    return celpy.CELEvalError(f"no such overload: {name}({kinds})")


def _strings(*args: Any) -> bool:
    return all(isinstance(arg, str) for arg in args)


def char_at(text: Any, index: Any) -> Any:
    if not _strings(text) or not isinstance(index, int):
        return _overload_error("charAt", text, index)
    if index < 0 or index > len(text):
        return celpy.CELEvalError(f"index out of range: {index}")
    return celtypes.StringType(text[index:index + 1])


def index_of(text: Any, sub: Any, offset: Any = 0) -> Any:
    if not _strings(text, sub) or not isinstance(offset, int):
        return _overload_error("indexOf", text, sub, offset)
    if offset < 0 or offset > len(text):
        return celpy.CELEvalError(f"index out of range: {offset}")
    return celtypes.IntType(text.find(sub, offset))


def last_index_of(text: Any, sub: Any, offset: Any = None) -> Any:
    if offset is None:
        offset = len(text) if isinstance(text, str) else 0
    if not _strings(text, sub) or not isinstance(offset, int):
        return _overload_error("lastIndexOf", text, sub, offset)
    if offset < 0 or offset > len(text):
        return celpy.CELEvalError(f"index out of range: {offset}")
    return celtypes.IntType(text.rfind(sub, 0, offset + len(sub)))


def lower_ascii(text: Any) -> Any:
    if not _strings(text):
        return _overload_error("lowerAscii", text)
    return celtypes.StringType(text.translate(_ASCII_LOWER))


def upper_ascii(text: Any) -> Any:
    if not _strings(text):
        return _overload_error("upperAscii", text)
    return celtypes.StringType(text.translate(_ASCII_UPPER))


def replace(text: Any, old: Any, new: Any, limit: Any = -1) -> Any:
    if not _strings(text, old, new) or not isinstance(limit, int):
        return _overload_error("replace", text, old, new, limit)
    return celtypes.StringType(text.replace(old, new, int(limit)))


def split(text: Any, separator: Any, limit: Any = -1) -> Any:
    if not _strings(text, separator) or not isinstance(limit, int):
        return _overload_error("split", text, separator, limit)
    if limit == 0:
        return celtypes.ListType([])
    if separator:
        parts = text.split(separator, limit - 1 if limit > 0 else -1)
    elif limit > 0 and len(text) > limit:
        parts = list(text[:limit - 1]) + [text[limit - 1:]]
    else:
        parts = list(text)
    return celtypes.ListType([celtypes.StringType(part) for part in parts])


def substring(text: Any, start: Any, end: Any = None) -> Any:
    if end is None:
        end = len(text) if isinstance(text, str) else 0
    if not _strings(text) or not isinstance(start, int) or not isinstance(end, int):
        return _overload_error("substring", text, start, end)
    if start < 0 or end > len(text) or start > end:
        return celpy.CELEvalError(f"substring out of range: [{start}:{end}]")
    return celtypes.StringType(text[start:end])


def trim(text: Any) -> Any:
    if not _strings(text):
        return _overload_error("trim", text)
    return celtypes.StringType(text.strip())


def join(items: Any, separator: Any = "") -> Any:
    if not isinstance(items, list) or not _strings(separator, *items):
        return _overload_error("join", items, separator)
    return celtypes.StringType(separator.join(items))


def reverse(text: Any) -> Any:
    if not _strings(text):
        return _overload_error("reverse", text)
    return celtypes.StringType(text[::-1])


STRING_FUNCTIONS: Dict[str, Callable[..., Any]] = {
    "charAt": char_at,
    "indexOf": index_of,
    "lastIndexOf": last_index_of,
    "lowerAscii": lower_ascii,
    "upperAscii": upper_ascii,
    "replace": replace,
    "split": split,
    "substring": substring,
    "trim": trim,
    "join": join,
    "reverse": reverse,
}
