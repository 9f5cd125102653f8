from typing import Any

import attrs

from src.service.ticketing.domain.validator.booking_validators import NumericValidators


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f'Conference {attribute.name} cannot be empty')


def _validate_remaining(instance: 'Conference', attribute: attrs.Attribute, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError('remaining_tickets must be an integer')
    if not 0 <= value <= instance.total_tickets:
        raise ValueError(
            f'remaining_tickets must be between 0 and {instance.total_tickets}, got {value}'
        )


@attrs.define(frozen=True)
class Conference:
    name: str = attrs.field(validator=_validate_non_empty_string)
    total_tickets: int = attrs.field(validator=NumericValidators.validate_total_tickets)
    remaining_tickets: int = attrs.field(validator=_validate_remaining)

    @classmethod
    def open(cls, *, name: str, total_tickets: int) -> 'Conference':
        NumericValidators.validate_positive_int(total_tickets, 'Total tickets')
        return cls(name=name.strip(), total_tickets=total_tickets, remaining_tickets=total_tickets)

    @property
    def booked_tickets(self) -> int:
        return self.total_tickets - self.remaining_tickets

    @property
    def is_sold_out(self) -> bool:
        return self.remaining_tickets == 0
