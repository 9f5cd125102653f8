from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.ledger_save_helper import save_ledger_or_warn
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger


class InitLedgerUseCase:
    """
    Bring up the ledger at process start.

    Absent snapshot -> fresh ledger (saved right away).
    Present but unreadable snapshot -> PersistenceError propagates; starting
    empty would silently discard the bookings on disk.
    """

    def __init__(self, *, snapshot_repo: ILedgerSnapshotRepo) -> None:
        self.snapshot_repo = snapshot_repo

    @Logger.io
    def load_existing(self) -> Optional[BookingLedger]:
        return self.snapshot_repo.load()

    @Logger.io
    def create_fresh(self, *, name: str, total_tickets: int) -> BookingLedger:
        ledger = BookingLedger.open(name=name, total_tickets=total_tickets)
        save_ledger_or_warn(snapshot_repo=self.snapshot_repo, ledger=ledger)
        Logger.base.info(f'🆕 [LEDGER] Opened {name!r} with {total_tickets} tickets')
        return ledger

    @Logger.io
    def execute(self, *, name: str, total_tickets: int) -> BookingLedger:
        if not self.snapshot_repo.exists():
            return self.create_fresh(name=name, total_tickets=total_tickets)
        # None when the file is removed between exists() and load()
        ledger = self.load_existing()
        if ledger is not None:
            return ledger
        return self.create_fresh(name=name, total_tickets=total_tickets)
