"""Tests for JsonCollectionFile atomic persistence."""

import json
import os

import pytest

from zbank.models.exceptions import PersistenceError, ValidationError
from zbank.repositories.json_file import JsonCollectionFile


def decode_positive(document):
    """Decoder used in tests: every value must be a positive int."""
    for key, value in document.items():
        if not isinstance(value, int):
            raise TypeError(f"{key} is not an int")
        if value <= 0:
            raise ValidationError(f"{key} is not positive")
    return dict(document)


@pytest.fixture
def collection_path(tmp_path):
    return tmp_path / "data" / "things.json"


@pytest.fixture
def collection(collection_path):
    """A dict-shaped collection in a directory that does not exist yet."""
    return JsonCollectionFile(collection_path, empty_factory=dict, decode=decode_positive, encode=dict)


def test_load_missing_file_initializes_empty_collection(collection, collection_path):
    """Absent file: directory and empty collection are created and persisted."""
    assert not collection_path.exists()

    assert collection.load() == {}

    # Verify the empty collection was written before the read returned
    assert collection_path.exists()
    assert json.loads(collection_path.read_text(encoding="utf-8")) == {}


def test_save_then_load_round_trip(collection, collection_path):
    """Saved collection is what a fresh instance loads."""
    collection.load()
    collection.save({"a": 1, "b": 2})

    reopened = JsonCollectionFile(collection_path, empty_factory=dict, decode=decode_positive, encode=dict)
    assert reopened.load() == {"a": 1, "b": 2}


def test_save_leaves_no_temp_files(collection, collection_path):
    """The temp file is renamed over the canonical file."""
    collection.load()
    collection.save({"a": 1})

    assert sorted(os.listdir(collection_path.parent)) == ["things.json"]


def test_save_invalidates_cache(collection, collection_path):
    """After a save the next load re-reads the file."""
    first = collection.load()
    collection.save({"a": 1})

    second = collection.load()
    assert second is not first
    assert second == {"a": 1}


def test_failed_save_keeps_old_snapshot(collection, collection_path):
    """An unserializable collection leaves the canonical file untouched."""
    collection.load()
    collection.save({"a": 1})

    with pytest.raises(PersistenceError):
        collection.save({"a": object()})

    # Old snapshot intact, no temp file left behind
    assert json.loads(collection_path.read_text(encoding="utf-8")) == {"a": 1}
    assert sorted(os.listdir(collection_path.parent)) == ["things.json"]
    assert collection.load() == {"a": 1}


def test_encoder_crash_leaves_no_temp_file(collection_path):
    """An unexpected error from the encoder propagates and removes the temp file."""
    def encode_timestamps(items):
        return [item.isoformat() for item in items]

    collection = JsonCollectionFile(
        collection_path, empty_factory=list, decode=list, encode=encode_timestamps
    )
    collection.ensure_exists()

    with pytest.raises(AttributeError):
        collection.save([None])

    # Verify only the canonical file remains, still empty
    assert sorted(os.listdir(collection_path.parent)) == ["things.json"]
    assert json.loads(collection_path.read_text(encoding="utf-8")) == []


def test_failed_save_discards_in_place_edits(collection):
    """Edits to the cached collection are dropped when the save fails."""
    collection.load()
    collection.save({"a": 1})

    cached = collection.load()
    cached["b"] = object()
    with pytest.raises(PersistenceError):
        collection.save(cached)

    assert collection.load() == {"a": 1}


def test_load_malformed_json_raises(collection, collection_path):
    """Corrupt JSON propagates as PersistenceError, not an empty collection."""
    collection_path.parent.mkdir(parents=True)
    collection_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceError) as exc_info:
        collection.load()

    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
    # The corrupt file is not overwritten
    assert collection_path.read_text(encoding="utf-8") == "{not json"


def test_load_wrong_document_type_raises(collection, collection_path):
    """A JSON array where an object is expected is a schema violation."""
    collection_path.parent.mkdir(parents=True)
    collection_path.write_text("[]", encoding="utf-8")

    with pytest.raises(PersistenceError, match="expected a JSON object"):
        collection.load()


@pytest.mark.parametrize("document", ['{"a": "one"}', '{"a": -1}'])
def test_load_invalid_record_raises(collection, collection_path, document):
    """Decoder errors and validation errors surface as PersistenceError."""
    collection_path.parent.mkdir(parents=True)
    collection_path.write_text(document, encoding="utf-8")

    with pytest.raises(PersistenceError, match="invalid record"):
        collection.load()
