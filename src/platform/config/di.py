"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.ticketing.driven_adapter.export.booking_csv_exporter_impl import (
    BookingCsvExporterImpl,
)
from src.service.ticketing.driven_adapter.notification.booking_confirmation_notifier_impl import (
    BookingConfirmationNotifierImpl,
)
from src.service.ticketing.driven_adapter.repo.ledger_snapshot_repo_json_impl import (
    LedgerSnapshotRepoJsonImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Snapshot file backing the ledger
    ledger_snapshot_repo = providers.Singleton(
        LedgerSnapshotRepoJsonImpl, path=config_service.provided.LEDGER_SNAPSHOT_PATH
    )

    booking_csv_exporter = providers.Singleton(BookingCsvExporterImpl)

    # Fire-and-forget confirmations (daemon timer per booking)
    booking_notifier = providers.Singleton(
        BookingConfirmationNotifierImpl,
        delay_seconds=config_service.provided.CONFIRMATION_DELAY_SECONDS,
    )

    # The one ledger instance of the process (set by main.py lifespan / the CLI after loading)
    ledger = providers.Object(None)


container = Container()
