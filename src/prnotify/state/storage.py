"""File-backed storage for the notification history.

A :class:`Storage` never caches: ``current()`` re-reads the file on every
call and ``put()`` rewrites the whole file. Writes go to a temporary file
next to the target which then replaces it, so readers observe either the old
or the new history, never a partial one.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import tempfile
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Generic, TypeVar

from prnotify.exceptions import NotifyConfigError, StorageError

_logger = logging.getLogger(__name__)

T = TypeVar("T")

Serializer = Callable[[Sequence[T], set[T]], str]
Deserializer = Callable[[str], set[T]]


class Storage(Generic[T]):
    """A materialized set of items persisted as a single text file."""

    def __init__(self, path: Path, *, serializer: Serializer[T], deserializer: Deserializer[T]) -> None:
        self._path = path
        self._serializer = serializer
        self._deserializer = deserializer

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> str:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except OSError as exc:
            raise StorageError(f"cannot read {self._path}: {exc}", path=str(self._path)) from exc

    def _write(self, text: str) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {self._path}: {exc}", path=str(self._path)) from exc

    def current(self) -> set[T]:
        """Decode and return the full persisted set."""
        return self._deserializer(self._read())

    def put_all(self, items: Iterable[T]) -> None:
        """Replace the entries for *items* and persist the full set."""
        added = list(items)
        if not added:
            return
        old_text = self._read()
        new_text = self._serializer(added, self._deserializer(old_text))
        if new_text == old_text:
            _logger.debug("%s unchanged, skipping write", self._path)
            return
        self._write(new_text)
        _logger.debug("Wrote %d item(s) to %s", len(added), self._path)

    def put(self, item: T) -> None:
        """Replace the entry for *item* and persist the full set."""
        self.put_all([item])


@dataclasses.dataclass(frozen=True)
class StorageBuilder(Generic[T]):
    """Recipe for a :class:`Storage`: a file name plus its codec.

    Builders are immutable; ``serializer``/``deserializer`` return updated
    copies so one base builder can be shared between work items.
    """

    name: str
    _serializer: Serializer[T] | None = None
    _deserializer: Deserializer[T] | None = None

    def serializer(self, serializer: Serializer[T]) -> StorageBuilder[T]:
        return dataclasses.replace(self, _serializer=serializer)

    def deserializer(self, deserializer: Deserializer[T]) -> StorageBuilder[T]:
        return dataclasses.replace(self, _deserializer=deserializer)

    def materialize(self, directory: Path) -> Storage[T]:
        """Create the storage file's directory and return the storage."""
        if self._serializer is None or self._deserializer is None:
            raise NotifyConfigError(f"storage {self.name!r} needs both a serializer and a deserializer")
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"cannot create {directory}: {exc}", path=str(directory)) from exc
        return Storage(directory / self.name, serializer=self._serializer, deserializer=self._deserializer)
