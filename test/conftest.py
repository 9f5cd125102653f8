"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (log dir, snapshot/export paths, inline confirmations)
- Ledger, snapshot repo and notifier fixtures shared by unit tests
- DI container reset so every integration test starts from a fresh ledger file

Architecture:
- Unit tests (*_unit_test.py): build objects directly, no container involved
- Integration tests (*_integration_test.py): drive the FastAPI app / click CLI
  through the real container, with settings pointing at tmp_path
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# src.platform.config.core_setting builds `settings` at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Never touch ./data or ./bookings.csv of a developer checkout
    scratch_dir = Path(tempfile.mkdtemp(prefix='ticketing_test_'))
    os.environ['LEDGER_SNAPSHOT_PATH'] = str(scratch_dir / 'bookings.json')
    os.environ['EXPORT_CSV_PATH'] = str(scratch_dir / 'bookings.csv')

    # Deliver confirmations inline so tests can assert on them
    os.environ['CONFIRMATION_DELAY_SECONDS'] = '0'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402

from src.platform.config.core_setting import Settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import (  # noqa: E402
    BookingLedger,
)
from src.service.ticketing.driven_adapter.notification.booking_confirmation_notifier_impl import (  # noqa: E402
    BookingConfirmationNotifierImpl,
)
from src.service.ticketing.driven_adapter.repo.ledger_snapshot_repo_json_impl import (  # noqa: E402
    LedgerSnapshotRepoJsonImpl,
)


TEST_CONFERENCE_NAME = 'PyCon Test'
TEST_TOTAL_TICKETS = 10


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if not any(marker.name == 'unit' for marker in item.iter_markers()):
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Domain / adapter fixtures
# =============================================================================
@pytest.fixture
def ledger() -> BookingLedger:
    return BookingLedger.open(name=TEST_CONFERENCE_NAME, total_tickets=TEST_TOTAL_TICKETS)


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / 'data' / 'bookings.json'


@pytest.fixture
def snapshot_repo(snapshot_path: Path) -> LedgerSnapshotRepoJsonImpl:
    return LedgerSnapshotRepoJsonImpl(path=snapshot_path)


@pytest.fixture
def notifier() -> BookingConfirmationNotifierImpl:
    return BookingConfirmationNotifierImpl(delay_seconds=0)


# =============================================================================
# Container fixtures (integration)
# =============================================================================
@pytest.fixture
def test_settings(tmp_path: Path, snapshot_path: Path) -> Settings:
    return Settings(
        LEDGER_SNAPSHOT_PATH=snapshot_path,
        EXPORT_CSV_PATH=tmp_path / 'export' / 'bookings.csv',
        DEFAULT_CONFERENCE_NAME=TEST_CONFERENCE_NAME,
        DEFAULT_TOTAL_TICKETS=TEST_TOTAL_TICKETS,
        CONFIRMATION_DELAY_SECONDS=0,
    )


@pytest.fixture
def test_container(test_settings: Settings) -> Generator[None, None, None]:
    """Point the container at tmp_path; singletons are rebuilt from the overridden settings."""
    container.reset_singletons()
    with container.config_service.override(test_settings):
        yield
    container.reset_singletons()
