"""
Integration test configuration.

`client` runs the real FastAPI app (lifespan included) against the container
fixture from test/conftest.py, so every test gets its own snapshot file.
"""

from collections.abc import Generator

from fastapi.testclient import TestClient
import pytest

from src.main import app
from src.platform.config.di import container
from src.service.ticketing.driven_adapter.notification.booking_confirmation_notifier_impl import (
    BookingConfirmationNotifierImpl,
)


@pytest.fixture
def client(test_container: None) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sent_confirmations(client: TestClient) -> BookingConfirmationNotifierImpl:
    return container.booking_notifier()
