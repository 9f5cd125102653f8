import pytest

from src.platform.exception.exceptions import NotFoundError
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.app.query.get_ledger_stats_use_case import GetLedgerStatsUseCase
from src.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger


@pytest.fixture
def booked_ledger(ledger: BookingLedger) -> BookingLedger:
    ledger.book(first_name='Ann', last_name='Lee', email='ann@x.com', tickets=3)
    ledger.book(first_name='Bo', last_name='Li', email='bo@x.com', tickets=2)
    ledger.book(first_name='Ann', last_name='Lee', email='ANN@x.com', tickets=1)
    return ledger


@pytest.mark.unit
class TestBookingQueries:
    def test_get_booking(self, booked_ledger: BookingLedger) -> None:
        booking = GetBookingUseCase(ledger=booked_ledger).execute(booking_id=2)

        assert booking.full_name == 'Bo Li'

    def test_get_missing_booking_raises(self, booked_ledger: BookingLedger) -> None:
        with pytest.raises(NotFoundError, match='Booking #42 not found'):
            GetBookingUseCase(ledger=booked_ledger).execute(booking_id=42)

    def test_list_all_in_booking_order(self, booked_ledger: BookingLedger) -> None:
        bookings = ListBookingsUseCase(ledger=booked_ledger).execute()

        assert [booking.id for booking in bookings] == [1, 2, 3]

    def test_list_by_email_ignores_case(self, booked_ledger: BookingLedger) -> None:
        bookings = ListBookingsUseCase(ledger=booked_ledger).execute(email=' Ann@X.COM ')

        assert [booking.id for booking in bookings] == [1, 3]

    def test_stats(self, booked_ledger: BookingLedger) -> None:
        stats = GetLedgerStatsUseCase(ledger=booked_ledger).execute()

        assert stats.remaining_tickets == 4
        assert stats.booking_count == 3
        assert stats.attendee_first_names == ('Ann', 'Bo', 'Ann')
