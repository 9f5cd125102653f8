import attrs

from src.service.ticketing.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingConfirmation:
    """Value Object handed to the notifier; a copy of committed data, never the live ledger"""

    booking_id: int
    email: str
    first_name: str
    tickets: int
    conference_name: str

    @classmethod
    def from_booking(cls, booking: Booking, *, conference_name: str) -> 'BookingConfirmation':
        return cls(
            booking_id=booking.id,
            email=booking.email,
            first_name=booking.first_name,
            tickets=booking.tickets,
            conference_name=conference_name,
        )

    def render(self) -> str:
        return (
            f'Confirmation sent to {self.email} for {self.tickets} ticket(s) '
            f"to '{self.conference_name}' [Booking #{self.booking_id}]."
        )
