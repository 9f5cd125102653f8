from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.ledger_save_helper import save_ledger_or_warn
from src.service.ticketing.app.dto.booking_result import BookingResult
from src.service.ticketing.app.interface.i_booking_notifier import IBookingNotifier
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger
from src.service.ticketing.domain.value_object.booking_confirmation import BookingConfirmation


class CreateBookingUseCase:
    """
    Flow:
    1. Reserve on the ledger (validation + capacity check, all-or-nothing)
    2. Save the snapshot; a failure is reported, not rolled back
    3. Hand a copy of the committed booking to the confirmation notifier
    """

    def __init__(
        self,
        *,
        ledger: BookingLedger,
        snapshot_repo: ILedgerSnapshotRepo,
        notifier: IBookingNotifier,
    ) -> None:
        self.ledger = ledger
        self.snapshot_repo = snapshot_repo
        self.notifier = notifier

    @classmethod
    @inject
    def depends(
        cls,
        ledger: BookingLedger = Depends(Provide[Container.ledger]),
        snapshot_repo: ILedgerSnapshotRepo = Depends(Provide[Container.ledger_snapshot_repo]),
        notifier: IBookingNotifier = Depends(Provide[Container.booking_notifier]),
    ) -> Self:
        return cls(ledger=ledger, snapshot_repo=snapshot_repo, notifier=notifier)

    @Logger.io
    def execute(self, *, first_name: str, last_name: str, email: str, tickets: int) -> BookingResult:
        change = self.ledger.reserve(
            first_name=first_name, last_name=last_name, email=email, tickets=tickets
        )
        persisted = save_ledger_or_warn(snapshot_repo=self.snapshot_repo, ledger=self.ledger)

        self.notifier.notify(
            confirmation=BookingConfirmation.from_booking(
                change.booking, conference_name=self.ledger.conference.name
            )
        )

        return BookingResult(
            booking=change.booking,
            remaining_tickets=change.remaining_tickets,
            persisted=persisted,
        )
