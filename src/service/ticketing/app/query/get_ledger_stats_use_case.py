from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import (
    BookingLedger,
    LedgerStats,
)


class GetLedgerStatsUseCase:
    def __init__(self, *, ledger: BookingLedger) -> None:
        self.ledger = ledger

    @classmethod
    @inject
    def depends(cls, ledger: BookingLedger = Depends(Provide[Container.ledger])) -> Self:
        return cls(ledger=ledger)

    @Logger.io
    def execute(self) -> LedgerStats:
        return self.ledger.stats()
