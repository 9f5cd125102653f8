from abc import ABC, abstractmethod
from pathlib import Path

from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import LedgerSnapshot


class IBookingCsvExporter(ABC):
    @abstractmethod
    def export(self, *, snapshot: LedgerSnapshot, path: Path) -> Path:
        """
        Write one CSV row per booking, in booking order

        Raises:
            ExportError: When the file cannot be created or written
        """
        pass
