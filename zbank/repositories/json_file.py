"""Whole-collection JSON file with atomic replace."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

from zbank.models.exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class JsonCollectionFile:
    """
    One persisted collection, read and written as a whole.

    The decoded collection is cached after the first load. Every save writes
    the complete collection to a temporary sibling file, fsyncs it and
    renames it over the canonical file, so readers see either the old or the
    new snapshot and never a partial one. A save invalidates the cache; the
    next load re-reads the file.

    Each write costs O(collection size). There is no cross-process
    coordination: two processes sharing a file cannot corrupt it, but can
    lose each other's updates.
    """

    def __init__(
        self,
        path: str | Path,
        empty_factory: Callable[[], Any],
        decode: Callable[[Any], Any],
        encode: Callable[[Any], Any],
    ):
        """
        Initialize the collection file.

        Args:
            path: Location of the canonical JSON file
            empty_factory: Builds the empty collection ({} or []) used when
                the file does not exist yet
            decode: Turns the parsed JSON document into the in-memory
                collection; may raise KeyError, TypeError, ValueError or
                ValidationError on a malformed document
            encode: Turns the in-memory collection back into plain JSON data
        """
        self._path = Path(path)
        self._empty_factory = empty_factory
        self._decode = decode
        self._encode = encode
        self._cache: Any = None

    @property
    def path(self) -> Path:
        """Location of the canonical JSON file."""
        return self._path

    def ensure_exists(self) -> None:
        """Create the directory and an empty collection if the file is missing."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise PersistenceError(
                f"Failed to create data directory {self._path.parent}: {err}"
            ) from err
        if not self._path.exists():
            logger.info("Initializing empty collection at %s", self._path)
            self.save(self._empty_factory())

    def load(self) -> Any:
        """
        Return the decoded collection.

        Raises:
            PersistenceError: If the file cannot be read, is not valid JSON,
                or holds records that fail validation
        """
        if self._cache is not None:
            return self._cache

        self.ensure_exists()
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as err:
            logger.error("Failed to load %s: %s", self._path, err)
            raise PersistenceError(f"Failed to load {self._path.name}: {err}") from err

        expected = type(self._empty_factory())
        if not isinstance(document, expected):
            logger.error("Unexpected document type in %s", self._path)
            raise PersistenceError(
                f"Failed to load {self._path.name}: expected a JSON "
                f"{'object' if expected is dict else 'array'}, "
                f"got {type(document).__name__}"
            )

        try:
            collection = self._decode(document)
        except (KeyError, TypeError, ValueError, ValidationError) as err:
            logger.error("Invalid record in %s: %s", self._path, err)
            raise PersistenceError(
                f"Failed to load {self._path.name}: invalid record ({err!r})"
            ) from err

        logger.debug("Loaded %d records from %s", len(collection), self._path)
        self._cache = collection
        return collection

    def save(self, collection: Any) -> None:
        """
        Atomically replace the file with ``collection``.

        Raises:
            PersistenceError: If the collection cannot be written
        """
        # In-place edits to the cached collection are dropped, saved or not
        self._cache = None
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
        except OSError as err:
            logger.error("Failed to create temp file for %s: %s", self._path, err)
            raise PersistenceError(f"Failed to save {self._path.name}: {err}") from err

        replaced = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._encode(collection), f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self._path)
            replaced = True
        except (OSError, TypeError, ValueError) as err:
            logger.error("Failed to save %s: %s", self._path, err)
            raise PersistenceError(f"Failed to save {self._path.name}: {err}") from err
        finally:
            # Any failure, translated or not, leaves no temp file behind
            if not replaced:
                try:
                    os.unlink(temp_path)
                except OSError:
                    logger.warning("Could not remove temp file %s", temp_path)

        logger.debug("Saved %d records to %s", len(collection), self._path)
