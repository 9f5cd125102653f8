from src.platform.exception.exceptions import PersistenceError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger


def save_ledger_or_warn(*, snapshot_repo: ILedgerSnapshotRepo, ledger: BookingLedger) -> bool:
    """
    Persist after a mutation that already succeeded in memory.

    A failed save is not rolled back: the mutation stands and the caller is
    told via the return value, so memory and disk differ until the next
    successful save.
    """
    try:
        snapshot_repo.save(ledger=ledger)
    except PersistenceError as e:
        Logger.base.warning(f"⚠️ [SNAPSHOT] Couldn't save state: {e.message}")
        return False
    return True
