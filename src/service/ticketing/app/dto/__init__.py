"""Application layer DTOs"""

from src.service.ticketing.app.dto.booking_result import BookingResult, CancelResult

__all__ = [
    'BookingResult',
    'CancelResult',
]
