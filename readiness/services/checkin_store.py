"""
CheckInStore - sole owner of the persisted check-in collection.

Invariants
----------
  * At most one record per calendar day (calendar timezone, not UTC).
  * The collection is sorted newest-first by `date`.
  * Every mutation writes the whole collection back under one key
    (full overwrite, never incremental).

Failure policy
--------------
  * Missing blob            → empty collection, not an error.
  * Unreadable / corrupt    → empty collection, error logged.
  * Write rejected          → error logged, not retried; the in-memory
                              collection stays authoritative.
None of these raise to the caller.

Threading: single-threaded access only. Callers on a multi-threaded host
must serialize access themselves, from construction (which loads the
blob) through the last mutation; otherwise concurrent writers overwrite
each other's collections. The HTTP router holds one process-wide lock
for this.
"""
from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Callable, Optional

from pydantic import ValidationError

from readiness.core.clock import Clock, SystemClock, calendar_timezone, local_day
from readiness.core.config import settings
from readiness.core.errors import CheckInDecodeError, StorageError
from readiness.schemas.checkin import CheckInRecord, decode_check_ins, encode_check_ins
from readiness.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = settings.CHECKIN_STORAGE_KEY
DEFAULT_RECENT_COUNT = settings.RECENT_DEFAULT_COUNT

Subscriber = Callable[[tuple[CheckInRecord, ...]], None]


class CheckInStore:

    def __init__(
        self,
        blob_store: BlobStore,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Optional[Clock] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.blob_store = blob_store
        self.key = key
        self.tz = tz if tz is not None else calendar_timezone()
        self.clock = clock or SystemClock(self.tz)
        self._check_ins: list[CheckInRecord] = []
        self._subscribers: list[Subscriber] = []
        self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        try:
            data = self.blob_store.get(self.key)
            if data is None:
                return
            try:
                records = decode_check_ins(data)
            except ValidationError as exc:
                raise CheckInDecodeError(f"{exc.error_count()} validation error(s)") from exc
        except (StorageError, CheckInDecodeError) as exc:
            logger.error("Failed to load check-ins from %r: %s", self.key, exc.message)
            self._check_ins = []
            return

        records.sort(key=lambda r: r.date, reverse=True)
        self._check_ins = records
        logger.debug("Loaded %d check-ins from %r", len(records), self.key)

    def _save(self) -> None:
        try:
            self.blob_store.set(self.key, encode_check_ins(self._check_ins))
        except StorageError as exc:
            logger.error("Failed to save check-ins to %r: %s", self.key, exc.message)

    def _notify(self) -> None:
        snapshot = self.check_ins
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Check-in subscriber %r failed", callback)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_check_in(self, record: CheckInRecord) -> None:
        """Add `record`, replacing any record on the same calendar day."""
        day = record.calendar_day(self.tz)
        self._check_ins = [
            existing for existing in self._check_ins
            if existing.calendar_day(self.tz) != day
        ]
        self._check_ins.append(record)
        self._check_ins.sort(key=lambda r: r.date, reverse=True)
        self._save()
        self._notify()

    def clear(self) -> None:
        self._check_ins = []
        self._save()
        self._notify()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def check_ins(self) -> tuple[CheckInRecord, ...]:
        """Newest-first snapshot of the collection."""
        return tuple(self._check_ins)

    def __len__(self) -> int:
        return len(self._check_ins)

    def recent_check_ins(self, count: int = DEFAULT_RECENT_COUNT) -> list[CheckInRecord]:
        """The `count` newest records. Negative counts are treated as 0."""
        return self._check_ins[:max(count, 0)]

    def today_check_in(self) -> Optional[CheckInRecord]:
        today = local_day(self.clock.now(), self.tz)
        for record in self._check_ins:
            if record.calendar_day(self.tz) == today:
                return record
        return None

    def has_check_in_for_today(self) -> bool:
        return self.today_check_in() is not None

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call `callback(snapshot)` after every mutation. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
