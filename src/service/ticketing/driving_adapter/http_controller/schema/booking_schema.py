from datetime import datetime
from typing import List

from pydantic import BaseModel

from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import LedgerStats
from src.service.ticketing.domain.entity.booking_entity import Booking


class BookingCreateRequest(BaseModel):
    first_name: str
    last_name: str
    email: str
    tickets: int

    model_config = {
        'json_schema_extra': {
            'example': {
                'first_name': 'ann',
                'last_name': 'lee',
                'email': 'Ann@Example.com',
                'tickets': 3,
            }
        },
    }


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'first_name': 'Ann',
                'last_name': 'Lee',
                'email': 'ann@example.com',
                'tickets': 3,
                'booked_at': '2025-01-10T10:30:00Z',
            }
        },
    }

    id: int
    first_name: str
    last_name: str
    email: str
    tickets: int
    booked_at: datetime

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            first_name=booking.first_name,
            last_name=booking.last_name,
            email=booking.email,
            tickets=booking.tickets,
            booked_at=booking.booked_at,
        )


class BookingCreatedResponse(BaseModel):
    booking: BookingResponse
    remaining_tickets: int
    # False when the booking stands in memory but the snapshot write failed
    persisted: bool


class CancelBookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'booking_id': 1,
                'released_tickets': 3,
                'remaining_tickets': 100,
                'persisted': True,
            }
        },
    }

    booking_id: int
    released_tickets: int
    remaining_tickets: int
    persisted: bool


class LedgerStatsResponse(BaseModel):
    conference_name: str
    total_tickets: int
    remaining_tickets: int
    booked_tickets: int
    booking_count: int
    attendee_first_names: List[str]

    @classmethod
    def from_stats(cls, stats: LedgerStats) -> 'LedgerStatsResponse':
        return cls(
            conference_name=stats.conference_name,
            total_tickets=stats.total_tickets,
            remaining_tickets=stats.remaining_tickets,
            booked_tickets=stats.booked_tickets,
            booking_count=stats.booking_count,
            attendee_first_names=list(stats.attendee_first_names),
        )
