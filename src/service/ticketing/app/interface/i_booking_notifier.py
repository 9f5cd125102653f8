from abc import ABC, abstractmethod

from src.service.ticketing.domain.value_object.booking_confirmation import BookingConfirmation


class IBookingNotifier(ABC):
    """Sends booking confirmations without blocking the booking caller"""

    @abstractmethod
    def notify(self, *, confirmation: BookingConfirmation) -> None:
        pass

    @abstractmethod
    def join_pending(self, *, timeout: float | None = None) -> None:
        """Wait for confirmations that are still scheduled"""
        pass
