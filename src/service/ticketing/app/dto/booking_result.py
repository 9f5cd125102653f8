"""Results of ledger commands, carrying whether the follow-up save succeeded."""

import attrs

from src.service.ticketing.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingResult:
    booking: Booking
    remaining_tickets: int
    # False when the booking is in memory but the snapshot write failed
    persisted: bool = True


@attrs.define(frozen=True)
class CancelResult:
    booking: Booking
    remaining_tickets: int
    persisted: bool = True
