from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger
from src.service.ticketing.domain.entity.booking_entity import Booking


class GetBookingUseCase:
    def __init__(self, *, ledger: BookingLedger) -> None:
        self.ledger = ledger

    @classmethod
    @inject
    def depends(cls, ledger: BookingLedger = Depends(Provide[Container.ledger])) -> Self:
        return cls(ledger=ledger)

    @Logger.io
    def execute(self, *, booking_id: int) -> Booking:
        booking = self.ledger.find_by_id(booking_id)
        if booking is None:
            raise NotFoundError(f'Booking #{booking_id} not found')
        return booking
