from datetime import datetime, timedelta, timezone

import attrs
import pytest

from src.platform.exception.exceptions import ValidationError
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.conference_entity import Conference


BOOKED_AT = datetime(2025, 10, 9, 12, 30, 45, tzinfo=timezone.utc)


@pytest.mark.unit
class TestBookingCreate:
    def test_create_normalizes_input(self) -> None:
        booking = Booking.create(
            id=1,
            first_name='  ann ',
            last_name='lee',
            email=' Ann@X.COM ',
            tickets=3,
            booked_at=BOOKED_AT,
        )

        assert booking.first_name == 'Ann'
        assert booking.last_name == 'Lee'
        assert booking.full_name == 'Ann Lee'
        assert booking.email == 'ann@x.com'
        assert booking.tickets == 3
        assert booking.booked_at == BOOKED_AT

    def test_create_defaults_booked_at_to_now_in_whole_utc_seconds(self) -> None:
        before = datetime.now(timezone.utc).replace(microsecond=0)

        booking = Booking.create(
            id=1, first_name='Ann', last_name='Lee', email='ann@x.com', tickets=1
        )

        assert booking.booked_at.tzinfo == timezone.utc
        assert booking.booked_at.microsecond == 0
        assert before <= booking.booked_at <= datetime.now(timezone.utc)

    def test_create_converts_aware_datetime_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))

        booking = Booking.create(
            id=1,
            first_name='Ann',
            last_name='Lee',
            email='ann@x.com',
            tickets=1,
            booked_at=datetime(2025, 10, 9, 14, 30, 45, tzinfo=plus_two),
        )

        assert booking.booked_at == BOOKED_AT
        assert booking.booked_at_unix == int(BOOKED_AT.timestamp())

    @pytest.mark.parametrize(
        ('overrides', 'message'),
        [
            ({'first_name': 'A'}, 'First name must have at least 2 characters'),
            ({'last_name': ' '}, 'Last name must have at least 2 characters'),
            ({'email': 'bad-email'}, 'Invalid email address'),
            ({'tickets': 0}, 'Tickets must be greater than 0'),
        ],
    )
    def test_create_rejects_invalid_field(self, overrides: dict, message: str) -> None:
        params = {
            'id': 1,
            'first_name': 'Ann',
            'last_name': 'Lee',
            'email': 'ann@x.com',
            'tickets': 1,
            **overrides,
        }

        with pytest.raises(ValidationError, match=message):
            Booking.create(**params)

    def test_booking_is_immutable(self) -> None:
        booking = Booking.create(
            id=1, first_name='Ann', last_name='Lee', email='ann@x.com', tickets=1
        )

        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            booking.tickets = 5  # type: ignore[misc]


@pytest.mark.unit
class TestConference:
    def test_open_starts_with_every_ticket_remaining(self) -> None:
        conference = Conference.open(name='  PyCon  ', total_tickets=10)

        assert conference.name == 'PyCon'
        assert conference.remaining_tickets == 10
        assert conference.booked_tickets == 0
        assert not conference.is_sold_out

    @pytest.mark.parametrize('total', [0, -1])
    def test_open_rejects_non_positive_capacity(self, total: int) -> None:
        with pytest.raises(ValidationError, match='Total tickets must be greater than 0'):
            Conference.open(name='PyCon', total_tickets=total)

    def test_open_rejects_blank_name(self) -> None:
        with pytest.raises(ValueError, match='cannot be empty'):
            Conference.open(name='   ', total_tickets=10)

    @pytest.mark.parametrize('remaining', [-1, 11])
    def test_remaining_must_stay_within_capacity(self, remaining: int) -> None:
        with pytest.raises(ValueError, match='remaining_tickets must be between 0 and 10'):
            Conference(name='PyCon', total_tickets=10, remaining_tickets=remaining)

    def test_sold_out_when_nothing_remains(self) -> None:
        conference = Conference(name='PyCon', total_tickets=10, remaining_tickets=0)

        assert conference.is_sold_out
        assert conference.booked_tickets == 10
