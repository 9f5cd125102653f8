"""
Ledger Snapshot Repository Interface

Persists the whole ledger (conference, bookings, id counter) as one document.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger


class ILedgerSnapshotRepo(ABC):
    @abstractmethod
    def save(self, *, ledger: BookingLedger) -> None:
        """
        Write the ledger so a crash mid-write leaves the previous snapshot intact

        Raises:
            PersistenceError: When the snapshot cannot be written
        """
        pass

    @abstractmethod
    def load(self) -> Optional[BookingLedger]:
        """
        Read the committed snapshot

        Returns:
            The restored ledger, or None when no snapshot exists yet

        Raises:
            PersistenceError: When a snapshot exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    def exists(self) -> bool:
        pass
