"""Validation and normalization rules for attendee input."""

import re
from typing import Any

from src.platform.exception.exceptions import ValidationError


EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_NAME_LENGTH = 2
# Letters, digits and underscore join a word; anything else starts a new one
NAME_WORD_PATTERN = re.compile(r'\w+')


class StringValidators:
    @staticmethod
    def validate_name(value: Any, field_name: str = 'Name') -> None:
        """Names need at least two characters once surrounding whitespace is removed."""
        if not isinstance(value, str) or len(value.strip()) < MIN_NAME_LENGTH:
            raise ValidationError(
                f'{field_name} must have at least {MIN_NAME_LENGTH} characters',
                field=field_name.lower().replace(' ', '_'),
            )

    @staticmethod
    def validate_email(value: Any) -> None:
        if not isinstance(value, str) or not EMAIL_PATTERN.match(value.strip()):
            raise ValidationError('Invalid email address', field='email')

    @staticmethod
    def validate_first_name(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator for Booking.first_name"""
        StringValidators.validate_name(value, 'First name')

    @staticmethod
    def validate_last_name(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator for Booking.last_name"""
        StringValidators.validate_name(value, 'Last name')

    @staticmethod
    def validate_email_field(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator for Booking.email"""
        StringValidators.validate_email(value)


class NumericValidators:
    @staticmethod
    def validate_positive_int(value: Any, field_name: str) -> None:
        # bool is an int subclass; True must not count as one ticket
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f'{field_name} must be a whole number', field=field_name.lower())
        if value <= 0:
            raise ValidationError(f'{field_name} must be greater than 0', field=field_name.lower())

    @staticmethod
    def validate_ticket_count(_instance: Any, _attribute: Any, value: int) -> None:
        """attrs validator for Booking.tickets"""
        NumericValidators.validate_positive_int(value, 'Tickets')

    @staticmethod
    def validate_total_tickets(_instance: Any, _attribute: Any, value: int) -> None:
        """attrs validator for Conference.total_tickets"""
        NumericValidators.validate_positive_int(value, 'Total tickets')


def normalize_name(value: str) -> str:
    """'mary-jane mc2x' -> 'Mary-Jane Mc2x' (str.title would give 'Mc2X')"""
    return NAME_WORD_PATTERN.sub(lambda word: word.group().capitalize(), value.strip().lower())


def normalize_email(value: str) -> str:
    return value.strip().lower()
