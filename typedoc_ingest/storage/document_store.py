"""
Document store abstraction for published docs.

Stores JSON documents in named collections (packages, versions, pages),
keyed by document id. Provides an in-memory store and a store backed by a
local directory with one JSON file per document.
"""

from __future__ import annotations

import copy
import json
import os
import re
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

_DOC_ID_RE = re.compile(r'^[\w\-.@]+$')


class DocumentStoreError(Exception):
    """Error reading from or writing to a document store."""
    pass


class InvalidDocumentIdError(DocumentStoreError):
    """A collection name or document id that cannot name a stored document."""
    pass


class DocumentStore(ABC):
    """Abstract key/value document store with collections."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> dict | None:
        """Return a document or None when it does not exist."""

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict) -> None:
        """Create or replace a document."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""

    @abstractmethod
    def list_documents(self, collection: str) -> list[tuple[str, dict]]:
        """Return all ``(id, data)`` pairs of a collection."""

    def new_id(self) -> str:
        return uuid.uuid4().hex

    def add(self, collection: str, data: dict) -> str:
        """Store a document under a generated id and return the id."""
        doc_id = self.new_id()
        self.set(collection, doc_id, data)
        return doc_id

    def query(self, collection: str, **equals: Any) -> list[tuple[str, dict]]:
        """Return documents whose fields equal all of ``equals``."""
        return [
            (doc_id, data) for doc_id, data in self.list_documents(collection)
            if all(data.get(key) == value for key, value in equals.items())
        ]

    def batch(self) -> WriteBatch:
        return WriteBatch(self)


class WriteBatch:
    """Collects independent writes and applies them on ``commit``."""

    def __init__(self, store: DocumentStore):
        self._store = store
        self._writes: list[tuple[str, str, dict]] = []

    def set(self, collection: str, doc_id: str, data: dict) -> WriteBatch:
        self._writes.append((collection, doc_id, data))
        return self

    def __len__(self) -> int:
        return len(self._writes)

    def commit(self) -> int:
        """Apply all pending writes and return how many were applied."""
        count = 0
        for collection, doc_id, data in self._writes:
            self._store.set(collection, doc_id, data)
            count += 1
        self._writes = []
        return count


class InMemoryDocumentStore(DocumentStore):
    """Keeps documents in process memory."""

    def __init__(self):
        self._collections: dict[str, dict[str, dict]] = {}

    def get(self, collection: str, doc_id: str) -> dict | None:
        data = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)

    def list_documents(self, collection: str) -> list[tuple[str, dict]]:
        return [
            (doc_id, copy.deepcopy(data))
            for doc_id, data in self._collections.get(collection, {}).items()
        ]


class LocalDocumentStore(DocumentStore):
    """Stores documents as ``<root>/<collection>/<id>.json`` files."""

    def __init__(self, root_dir: str, pretty: bool = False):
        self._root = Path(root_dir)
        self._indent = 2 if pretty else None

    def get(self, collection: str, doc_id: str) -> dict | None:
        path = self._path(collection, doc_id)
        if not path.exists():
            return None
        return self._read(path)

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        path = self._path(collection, doc_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix('.json.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent, ensure_ascii=False)
        os.replace(tmp_path, path)

    def delete(self, collection: str, doc_id: str) -> None:
        path = self._path(collection, doc_id)
        if path.exists():
            path.unlink()

    def list_documents(self, collection: str) -> list[tuple[str, dict]]:
        directory = self._root / collection
        if not directory.is_dir():
            return []
        return [(path.stem, self._read(path)) for path in sorted(directory.glob('*.json'))]

    def _path(self, collection: str, doc_id: str) -> Path:
        for part in (collection, doc_id):
            if not _DOC_ID_RE.match(part) or part in ('.', '..'):
                raise InvalidDocumentIdError(f"Invalid document path segment: {part!r}")
        return self._root / collection / f"{doc_id}.json"

    @staticmethod
    def _read(path: Path) -> dict:
        try:
            with open(path, encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise DocumentStoreError(f"Corrupt document {path}: {e}") from e
