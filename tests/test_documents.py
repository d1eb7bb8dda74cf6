from __future__ import annotations

from pathlib import Path

import pytest

from exprbench.core.documents import (
    load_multi_document,
    load_objects,
    load_params,
    load_single_document,
)
from exprbench.errors import DocumentReadError, ParseError

THREE_DOCS = b"a: 1\nnested:\n  b: [1, 2]\n---\na: 2\n---\na: 3\n"


def test_multi_document_preserves_order() -> None:
    docs = load_multi_document(THREE_DOCS)
    assert [doc["a"] for doc in docs] == [1, 2, 3]
    assert docs[0]["nested"] == {"b": [1, 2]}


def test_single_document_matches_first_of_multi() -> None:
    assert load_single_document(THREE_DOCS) == load_multi_document(THREE_DOCS)[0]


def test_single_document_ignores_trailing_content() -> None:
    data = b"x: 1\n---\n- not\n- a mapping\n"
    assert load_single_document(data) == {"x": 1}


def test_empty_stream_has_no_objects() -> None:
    assert load_multi_document(b"") == []


def test_empty_stream_is_not_a_params_document() -> None:
    with pytest.raises(ParseError):
        load_single_document(b"", source="params.yaml")


def test_null_document_counts_as_empty_mapping() -> None:
    docs = load_multi_document(b"a: 1\n---\n---\na: 3\n")
    assert docs == [{"a": 1}, {}, {"a": 3}]


def test_malformed_document_discards_whole_batch() -> None:
    with pytest.raises(ParseError) as excinfo:
        load_multi_document(b"a: 1\n---\na: [1, 2\n", source="objects.yaml")
    assert "objects.yaml" in excinfo.value.message
    assert excinfo.value.cause is not None


def test_non_mapping_document_is_rejected() -> None:
    with pytest.raises(ParseError) as excinfo:
        load_multi_document(b"a: 1\n---\n- 1\n- 2\n")
    assert "document 2" in excinfo.value.message


def test_missing_file_is_a_read_error(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError) as excinfo:
        load_objects(tmp_path / "missing.yaml")
    assert excinfo.value.path.name == "missing.yaml"
    assert not isinstance(excinfo.value, ParseError)


def test_load_params_reads_first_document(write_file) -> None:
    path = write_file("params.yaml", "limit: 5\n---\nlimit: 9\n")
    assert load_params(path) == {"limit": 5}


def test_timestamps_keep_their_source_text() -> None:
    doc = load_single_document(b"day: 2024-01-01\nat: 2024-01-01T10:00:00Z\n")
    assert doc == {"day": "2024-01-01", "at": "2024-01-01T10:00:00Z"}


def test_set_becomes_mapping_and_binary_stays_bytes() -> None:
    doc = load_single_document(b"tags: !!set {a, b}\nblob: !!binary aGVsbG8=\n")
    assert doc["tags"] == {"a": None, "b": None}
    assert doc["blob"] == b"hello"


def test_float_mapping_key_is_rejected() -> None:
    with pytest.raises(ParseError) as excinfo:
        load_multi_document(b"a: 1\n---\nnested:\n  1.5: x\n", source="objects.yaml")
    assert "document 2" in excinfo.value.message
    assert "float" in excinfo.value.message
