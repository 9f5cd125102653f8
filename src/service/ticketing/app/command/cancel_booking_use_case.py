from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.ledger_save_helper import save_ledger_or_warn
from src.service.ticketing.app.dto.booking_result import CancelResult
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger


class CancelBookingUseCase:
    def __init__(self, *, ledger: BookingLedger, snapshot_repo: ILedgerSnapshotRepo) -> None:
        self.ledger = ledger
        self.snapshot_repo = snapshot_repo

    @classmethod
    @inject
    def depends(
        cls,
        ledger: BookingLedger = Depends(Provide[Container.ledger]),
        snapshot_repo: ILedgerSnapshotRepo = Depends(Provide[Container.ledger_snapshot_repo]),
    ) -> Self:
        return cls(ledger=ledger, snapshot_repo=snapshot_repo)

    @Logger.io
    def execute(self, *, booking_id: int) -> CancelResult:
        """
        Raises:
            NotFoundError: No booking with that id (nothing is saved)
        """
        change = self.ledger.release(booking_id=booking_id)
        persisted = save_ledger_or_warn(snapshot_repo=self.snapshot_repo, ledger=self.ledger)
        return CancelResult(
            booking=change.booking,
            remaining_tickets=change.remaining_tickets,
            persisted=persisted,
        )
