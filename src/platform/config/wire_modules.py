"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticketing.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    export_bookings_csv_use_case,
)
from src.service.ticketing.app.query import (
    get_booking_use_case,
    get_ledger_stats_use_case,
    list_bookings_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    cancel_booking_use_case,
    export_bookings_csv_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    get_ledger_stats_use_case,
]
