import csv
from datetime import timezone
from pathlib import Path

from src.platform.exception.exceptions import ExportError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_csv_exporter import IBookingCsvExporter
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import LedgerSnapshot
from src.service.ticketing.domain.entity.booking_entity import Booking


CSV_HEADER = ('id', 'first_name', 'last_name', 'email', 'tickets', 'booked_at')
# RFC 3339, always UTC
TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def booking_to_row(booking: Booking) -> tuple[str, ...]:
    return (
        str(booking.id),
        booking.first_name,
        booking.last_name,
        booking.email,
        str(booking.tickets),
        booking.booked_at.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT),
    )


class BookingCsvExporterImpl(IBookingCsvExporter):
    @Logger.io
    def export(self, *, snapshot: LedgerSnapshot, path: Path) -> Path:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open('w', newline='', encoding='utf-8') as csv_file:
                writer = csv.writer(csv_file)
                writer.writerow(CSV_HEADER)
                writer.writerows(booking_to_row(booking) for booking in snapshot.bookings)
        except OSError as e:
            raise ExportError(f'Export to {path} failed: {e}') from e

        Logger.base.info(f'📄 [EXPORT] Wrote {len(snapshot.bookings)} booking(s) to {path}')
        return path
