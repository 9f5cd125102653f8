from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.validator.booking_validators import (
    NumericValidators,
    StringValidators,
    normalize_email,
    normalize_name,
)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define(frozen=True)
class Booking:
    """
    One attendee's reservation. Immutable; cancelling removes it from the ledger.

    booked_at is kept at whole-second UTC precision so a snapshot round trip
    through booked_at_unix reproduces the same value.
    """

    id: int
    first_name: str = attrs.field(validator=StringValidators.validate_first_name)
    last_name: str = attrs.field(validator=StringValidators.validate_last_name)
    email: str = attrs.field(validator=StringValidators.validate_email_field)
    tickets: int = attrs.field(validator=NumericValidators.validate_ticket_count)
    booked_at: datetime = attrs.field(converter=_to_utc)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: int,
        first_name: str,
        last_name: str,
        email: str,
        tickets: int,
        booked_at: Optional[datetime] = None,
    ) -> 'Booking':
        # Validate raw input first so the error names the field the user typed
        StringValidators.validate_name(first_name, 'First name')
        StringValidators.validate_name(last_name, 'Last name')
        StringValidators.validate_email(email)
        NumericValidators.validate_positive_int(tickets, 'Tickets')

        return cls(
            id=id,
            first_name=normalize_name(first_name),
            last_name=normalize_name(last_name),
            email=normalize_email(email),
            tickets=tickets,
            booked_at=(booked_at or datetime.now(timezone.utc)).replace(microsecond=0),
        )

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    @property
    def booked_at_unix(self) -> int:
        return int(self.booked_at.timestamp())
