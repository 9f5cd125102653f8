"""
JSON file implementation of the ledger snapshot repository.

Write path: snapshot under the ledger lock -> release -> serialize -> temp file
in the same directory -> fsync -> os.replace over the committed file. Readers
therefore see either the old snapshot or the complete new one.
"""

from datetime import datetime, timezone
import os
from pathlib import Path
import tempfile
import threading
from typing import Any, Optional

import orjson

from src.platform.exception.exceptions import CustomBaseError, PersistenceError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import (
    BookingLedger,
    LedgerSnapshot,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.conference_entity import Conference


def snapshot_to_document(snapshot: LedgerSnapshot) -> dict[str, Any]:
    conference = snapshot.conference
    return {
        'conference': {
            'name': conference.name,
            'total_tickets': conference.total_tickets,
            'remaining_tickets': conference.remaining_tickets,
        },
        'bookings': [
            {
                'id': booking.id,
                'first_name': booking.first_name,
                'last_name': booking.last_name,
                'email': booking.email,
                'tickets': booking.tickets,
                'booked_at_unix': booking.booked_at_unix,
            }
            for booking in snapshot.bookings
        ],
        'next_id': snapshot.next_id,
    }


def _require(document: dict[str, Any], key: str, expected: type) -> Any:
    value = document[key]
    if isinstance(value, bool) or not isinstance(value, expected):
        raise TypeError(f'{key!r} must be {expected.__name__}, got {type(value).__name__}')
    return value


def _parse_booked_at(document: dict[str, Any]) -> datetime:
    if 'booked_at_unix' in document:
        seconds = _require(document, 'booked_at_unix', int)
        try:
            return datetime.fromtimestamp(seconds, timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f'booked_at_unix {seconds} is out of range') from e
    # ISO-8601 is accepted on read; writes always use booked_at_unix
    return datetime.fromisoformat(_require(document, 'booked_at', str))


def ledger_from_document(document: Any) -> BookingLedger:
    if not isinstance(document, dict):
        raise TypeError('Snapshot root must be an object')

    conference_doc = _require(document, 'conference', dict)
    conference = Conference(
        name=_require(conference_doc, 'name', str),
        total_tickets=_require(conference_doc, 'total_tickets', int),
        remaining_tickets=_require(conference_doc, 'remaining_tickets', int),
    )

    bookings = []
    for booking_doc in _require(document, 'bookings', list):
        if not isinstance(booking_doc, dict):
            raise TypeError('Each booking must be an object')
        bookings.append(
            Booking(
                id=_require(booking_doc, 'id', int),
                first_name=_require(booking_doc, 'first_name', str),
                last_name=_require(booking_doc, 'last_name', str),
                email=_require(booking_doc, 'email', str),
                tickets=_require(booking_doc, 'tickets', int),
                booked_at=_parse_booked_at(booking_doc),
            )
        )

    return BookingLedger.restore(
        conference=conference,
        bookings=bookings,
        next_id=_require(document, 'next_id', int),
    )


class LedgerSnapshotRepoJsonImpl(ILedgerSnapshotRepo):
    def __init__(self, *, path: Path | str) -> None:
        self.path = Path(path)
        self._write_lock = threading.Lock()
        # (ledger origin, revision) of the newest snapshot on disk
        self._last_written: Optional[tuple[str, int]] = None

    def exists(self) -> bool:
        return self.path.is_file()

    @Logger.io
    def save(self, *, ledger: BookingLedger) -> None:
        snapshot = ledger.snapshot()
        payload = orjson.dumps(snapshot_to_document(snapshot), option=orjson.OPT_INDENT_2)

        with self._write_lock:
            if self._is_stale(snapshot):
                Logger.base.debug(
                    f'💾 [SNAPSHOT] Skip revision {snapshot.revision}, newer one already written'
                )
                return
            try:
                self._write_atomically(payload)
            except OSError as e:
                raise PersistenceError(f"Couldn't save state to {self.path}: {e}") from e
            self._last_written = (snapshot.origin, snapshot.revision)

        Logger.base.info(
            f'💾 [SNAPSHOT] Saved {len(snapshot.bookings)} booking(s) to {self.path} '
            f'(revision {snapshot.revision})'
        )

    @Logger.io
    def load(self) -> Optional[BookingLedger]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            Logger.base.info(f'💾 [SNAPSHOT] No snapshot at {self.path}')
            return None
        except OSError as e:
            raise PersistenceError(f'Cannot read snapshot {self.path}: {e}') from e

        try:
            ledger = ledger_from_document(orjson.loads(raw))
        except orjson.JSONDecodeError as e:
            raise PersistenceError(f'Snapshot {self.path} is not valid JSON: {e}') from e
        except (KeyError, TypeError, ValueError, CustomBaseError) as e:
            raise PersistenceError(f'Snapshot {self.path} is corrupt: {e}') from e

        Logger.base.info(f'💾 [SNAPSHOT] Loaded {len(ledger)} booking(s) from {self.path}')
        return ledger

    def _is_stale(self, snapshot: LedgerSnapshot) -> bool:
        if self._last_written is None:
            return False
        origin, revision = self._last_written
        return origin == snapshot.origin and snapshot.revision < revision

    def _write_atomically(self, payload: bytes) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f'.{self.path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'wb') as tmp_file:
                tmp_file.write(payload)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self._fsync_directory(directory)

    @staticmethod
    def _fsync_directory(directory: Path) -> None:
        # Makes the rename itself durable; not supported on every platform
        if not hasattr(os, 'O_DIRECTORY'):
            return
        dir_fd = os.open(directory, os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
