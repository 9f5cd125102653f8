from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger
from src.service.ticketing.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    def __init__(self, *, ledger: BookingLedger) -> None:
        self.ledger = ledger

    @classmethod
    @inject
    def depends(cls, ledger: BookingLedger = Depends(Provide[Container.ledger])) -> Self:
        return cls(ledger=ledger)

    @Logger.io
    def execute(self, *, email: Optional[str] = None) -> List[Booking]:
        """All bookings in booking order, or only those for one email (case-insensitive)."""
        if email:
            return self.ledger.find_by_email(email)
        return self.ledger.list()
