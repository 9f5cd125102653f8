"""
Booking Ledger Aggregate - Aggregate Root for one conference's tickets

[DDD Design Principles]
- BookingLedger is the Aggregate Root; Conference and Booking live inside it
- Every mutation goes through reserve() / release(), each under one exclusive lock
- Readers get copies (list, snapshot, stats), never the live collection

[Business Invariants]
- remaining_tickets == total_tickets - sum(tickets of active bookings)
- Booking ids strictly increase and are never reused, even after cancellation
- reserve() / release() either apply completely or leave the ledger untouched
"""

from datetime import datetime
import threading
from typing import Optional
import uuid

import attrs

from src.platform.exception.exceptions import CapacityError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.conference_entity import Conference
from src.service.ticketing.domain.validator.booking_validators import normalize_email


@attrs.define(frozen=True)
class LedgerSnapshot:
    """Consistent copy of the ledger taken under its lock"""

    conference: Conference
    bookings: tuple[Booking, ...]
    next_id: int
    # Identify which ledger/mutation produced this copy; never persisted
    origin: str
    revision: int


@attrs.define(frozen=True)
class LedgerChange:
    """Result of one mutation; remaining_tickets is read under the same lock"""

    booking: Booking
    remaining_tickets: int


@attrs.define(frozen=True)
class LedgerStats:
    conference_name: str
    total_tickets: int
    remaining_tickets: int
    booked_tickets: int
    booking_count: int
    attendee_first_names: tuple[str, ...]


@attrs.define(repr=False, eq=False)
class BookingLedger:
    _conference: Conference
    # Insertion-ordered: pop() keeps the survivors in booking order
    _bookings: dict[int, Booking] = attrs.field(factory=dict)
    # Last issued id; the next booking gets next_id + 1
    _next_id: int = 0
    _revision: int = attrs.field(default=0, init=False)
    _origin: str = attrs.field(factory=lambda: uuid.uuid4().hex, init=False)
    _lock: threading.Lock = attrs.field(factory=threading.Lock, init=False)

    @classmethod
    @Logger.io
    def open(cls, *, name: str, total_tickets: int) -> 'BookingLedger':
        return cls(conference=Conference.open(name=name, total_tickets=total_tickets))

    @classmethod
    def restore(
        cls, *, conference: Conference, bookings: list[Booking], next_id: int
    ) -> 'BookingLedger':
        """
        Rebuild a ledger from persisted state.

        Raises:
            ValueError: When the state breaks a ledger invariant
        """
        by_id = {booking.id: booking for booking in bookings}
        if len(by_id) != len(bookings):
            raise ValueError('Duplicate booking ids in ledger state')
        ledger = cls(conference=conference, bookings=by_id, next_id=next_id)
        ledger.ensure_consistent()
        return ledger

    def ensure_consistent(self) -> None:
        with self._lock:
            booked = sum(booking.tickets for booking in self._bookings.values())
            conference = self._conference
            if conference.remaining_tickets + booked != conference.total_tickets:
                raise ValueError(
                    f'Remaining tickets ({conference.remaining_tickets}) plus booked tickets '
                    f'({booked}) do not add up to total tickets ({conference.total_tickets})'
                )
            if any(booking_id > self._next_id for booking_id in self._bookings):
                raise ValueError(f'next_id {self._next_id} is behind an existing booking id')

    # ============================ Commands ============================

    @Logger.io
    def reserve(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        tickets: int,
        booked_at: Optional[datetime] = None,
    ) -> LedgerChange:
        """
        Reserve tickets for one attendee.

        Raises:
            ValidationError: Bad name, email or ticket count
            CapacityError: Fewer remaining tickets than requested
        """
        with self._lock:
            booking = Booking.create(
                id=self._next_id + 1,
                first_name=first_name,
                last_name=last_name,
                email=email,
                tickets=tickets,
                booked_at=booked_at,
            )
            remaining = self._conference.remaining_tickets
            if booking.tickets > remaining:
                raise CapacityError(requested=booking.tickets, remaining=remaining)

            # Nothing below can fail
            self._next_id = booking.id
            self._bookings[booking.id] = booking
            self._conference = attrs.evolve(
                self._conference, remaining_tickets=remaining - booking.tickets
            )
            self._revision += 1
            change = LedgerChange(
                booking=booking, remaining_tickets=self._conference.remaining_tickets
            )

        Logger.base.info(
            f'🎟️ [LEDGER] Booking #{booking.id} for {booking.tickets} ticket(s), '
            f'{change.remaining_tickets} remaining'
        )
        return change

    @Logger.io
    def release(self, *, booking_id: int) -> LedgerChange:
        """
        Remove a booking and give its tickets back.

        Raises:
            NotFoundError: No booking with that id
        """
        with self._lock:
            booking = self._bookings.pop(booking_id, None)
            if booking is None:
                raise NotFoundError(f'Booking #{booking_id} not found')
            self._conference = attrs.evolve(
                self._conference,
                remaining_tickets=self._conference.remaining_tickets + booking.tickets,
            )
            self._revision += 1
            change = LedgerChange(
                booking=booking, remaining_tickets=self._conference.remaining_tickets
            )

        Logger.base.info(f'🔓 [LEDGER] Booking #{booking_id} cancelled, {booking.tickets} released')
        return change

    def book(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        tickets: int,
        booked_at: Optional[datetime] = None,
    ) -> Booking:
        return self.reserve(
            first_name=first_name,
            last_name=last_name,
            email=email,
            tickets=tickets,
            booked_at=booked_at,
        ).booking

    def cancel(self, *, booking_id: int) -> Booking:
        return self.release(booking_id=booking_id).booking

    # ============================ Queries ============================

    @property
    def conference(self) -> Conference:
        with self._lock:
            return self._conference

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        with self._lock:
            return self._bookings.get(booking_id)

    def find_by_email(self, email: str) -> list[Booking]:
        target = normalize_email(email)
        with self._lock:
            return [booking for booking in self._bookings.values() if booking.email == target]

    def list(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return LedgerSnapshot(
                conference=self._conference,
                bookings=tuple(self._bookings.values()),
                next_id=self._next_id,
                origin=self._origin,
                revision=self._revision,
            )

    def stats(self) -> LedgerStats:
        with self._lock:
            conference = self._conference
            bookings = tuple(self._bookings.values())
        return LedgerStats(
            conference_name=conference.name,
            total_tickets=conference.total_tickets,
            remaining_tickets=conference.remaining_tickets,
            booked_tickets=conference.booked_tickets,
            booking_count=len(bookings),
            attendee_first_names=tuple(booking.first_name for booking in bookings),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)

    def __repr__(self) -> str:
        conference = self._conference
        return (
            f'BookingLedger(name={conference.name!r}, total={conference.total_tickets}, '
            f'remaining={conference.remaining_tickets}, next_id={self._next_id})'
        )
