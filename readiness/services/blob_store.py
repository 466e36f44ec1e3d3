"""
Key → bytes blob stores consumed by CheckInStore.

Both implementations are synchronous. Failures surface as StorageError;
callers decide whether to propagate or log.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from readiness.core.errors import StorageError
from readiness.models.kv_blob import KeyValueBlob

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...


class InMemoryBlobStore:
    """Process-local blob store. Each instance is its own namespace."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._blobs: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._blobs.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._blobs[key] = bytes(value)

    def __contains__(self, key: str) -> bool:
        return key in self._blobs


class SqlBlobStore:
    """Blob store backed by the `kv_blobs` table, scoped to one namespace."""

    def __init__(self, db: Session, namespace: str = "default"):
        self.db = db
        self.namespace = namespace

    def _row(self, key: str) -> Optional[KeyValueBlob]:
        return (
            self.db.query(KeyValueBlob)
            .filter(KeyValueBlob.namespace == self.namespace, KeyValueBlob.key == key)
            .first()
        )

    def get(self, key: str) -> Optional[bytes]:
        try:
            row = self._row(key)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("get", key, str(exc)) from exc
        return row.value if row is not None else None

    def _write(self, key: str, value: bytes) -> None:
        row = self._row(key)
        if row is None:
            self.db.add(KeyValueBlob(namespace=self.namespace, key=key, value=value))
        else:
            row.value = value
        self.db.commit()

    def set(self, key: str, value: bytes) -> None:
        """Insert or overwrite `key`.

        A concurrent insert of the same key surfaces as IntegrityError on
        the unique (namespace, key) constraint; the write is then retried
        once, which finds the row and updates it.
        """
        try:
            try:
                self._write(key, value)
            except IntegrityError:
                self.db.rollback()
                logger.info("Concurrent insert of %s/%s, retrying as update", self.namespace, key)
                self._write(key, value)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("set", key, str(exc)) from exc
        logger.debug("Wrote %d bytes to %s/%s", len(value), self.namespace, key)
