from pathlib import Path
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_csv_exporter import IBookingCsvExporter
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger


class ExportBookingsCsvUseCase:
    def __init__(
        self, *, ledger: BookingLedger, exporter: IBookingCsvExporter, default_path: Path
    ) -> None:
        self.ledger = ledger
        self.exporter = exporter
        self.default_path = default_path

    @classmethod
    @inject
    def depends(
        cls,
        ledger: BookingLedger = Depends(Provide[Container.ledger]),
        exporter: IBookingCsvExporter = Depends(Provide[Container.booking_csv_exporter]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(ledger=ledger, exporter=exporter, default_path=config.EXPORT_CSV_PATH)

    @Logger.io
    def execute(self, *, path: Optional[Path | str] = None) -> Path:
        target = Path(path) if path else self.default_path
        # Read-only: the exporter works on a copy, the ledger is never touched
        return self.exporter.export(snapshot=self.ledger.snapshot(), path=target)
