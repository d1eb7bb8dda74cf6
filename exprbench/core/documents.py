"""YAML document loading for object and params inputs."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from exprbench.errors import ParseError
from exprbench.utils.io import read_bytes

__all__ = [
    "Document",
    "load_multi_document",
    "load_single_document",
    "load_objects",
    "load_params",
]

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

_MISSING = object()

_PLAIN_SCALARS = (str, bytes, bool, int, float, type(None))
_KEY_TYPES = (str, bool, int)


class _DocumentLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as text and sets as mappings."""


_DocumentLoader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str)
_DocumentLoader.add_constructor("tag:yaml.org,2002:set", yaml.SafeLoader.construct_yaml_map)


def load_multi_document(data: bytes, source: str = "<bytes>") -> List[Document]:
    """Decode every document in a ``---`` separated YAML stream.

    The batch is all-or-nothing: the first malformed document raises
    :class:`ParseError` and nothing decoded before it is returned.
    """

    try:
        raw_docs = list(yaml.load_all(data, Loader=_DocumentLoader))
    except yaml.YAMLError as exc:
        raise ParseError(source, exc) from exc
    return [_as_document(doc, source, idx) for idx, doc in enumerate(raw_docs, start=1)]


def load_single_document(data: bytes, source: str = "<bytes>") -> Document:
    """Decode the first document of a YAML stream and ignore the rest."""

    docs = yaml.load_all(data, Loader=_DocumentLoader)
    try:
        first = next(docs, _MISSING)
    except yaml.YAMLError as exc:
        raise ParseError(source, exc) from exc
    finally:
        docs.close()
    if first is _MISSING:
        raise ParseError(source, detail="stream contains no document")
    return _as_document(first, source, 1)


def load_objects(path: str | Path) -> List[Document]:
    """Read ``path`` and decode all object documents."""

    objects = load_multi_document(read_bytes(path), source=str(path))
    logger.debug("Loaded %d object document(s) from %s", len(objects), path)
    return objects


def load_params(path: str | Path) -> Document:
    """Read ``path`` and decode its first document as the params."""

    params = load_single_document(read_bytes(path), source=str(path))
    logger.debug("Loaded params from %s with %d key(s)", path, len(params))
    return params


def _as_document(value: Any, source: str, index: int) -> Document:
    # An explicit empty document (a bare ``---``) still counts as one.
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ParseError(
            source,
            detail=f"document {index} is a {type(value).__name__}, expected a mapping",
        )
    _check_values(value, source, index)
    return value


def _check_values(value: Any, source: str, index: int) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, _KEY_TYPES):
                raise ParseError(
                    source,
                    detail=f"document {index} has an unsupported {type(key).__name__} mapping key",
                )
            _check_values(item, source, index)
    elif isinstance(value, list):
        for item in value:
            _check_values(item, source, index)
    elif not isinstance(value, _PLAIN_SCALARS):
        raise ParseError(
            source,
            detail=f"document {index} holds an unsupported {type(value).__name__} value",
        )
