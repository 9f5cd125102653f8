"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.booking_confirmation import BookingConfirmation

__all__ = ['BookingConfirmation']
