"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_booking_csv_exporter import IBookingCsvExporter
from src.service.ticketing.app.interface.i_booking_notifier import IBookingNotifier
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo

__all__ = [
    'IBookingCsvExporter',
    'IBookingNotifier',
    'ILedgerSnapshotRepo',
]
