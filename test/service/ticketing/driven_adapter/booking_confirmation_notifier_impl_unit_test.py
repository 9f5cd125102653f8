import threading
import time

import pytest

from src.service.ticketing.domain.value_object.booking_confirmation import BookingConfirmation
from src.service.ticketing.driven_adapter.notification.booking_confirmation_notifier_impl import (
    BookingConfirmationNotifierImpl,
)


CONFIRMATION = BookingConfirmation(
    booking_id=7, email='ann@x.com', first_name='Ann', tickets=2, conference_name='PyCon Test'
)


@pytest.mark.unit
class TestBookingConfirmation:
    def test_render_names_recipient_tickets_and_booking(self) -> None:
        assert CONFIRMATION.render() == (
            "Confirmation sent to ann@x.com for 2 ticket(s) to 'PyCon Test' [Booking #7]."
        )


@pytest.mark.unit
class TestBookingConfirmationNotifier:
    def test_zero_delay_delivers_inline(self, notifier: BookingConfirmationNotifierImpl) -> None:
        notifier.notify(confirmation=CONFIRMATION)

        assert notifier.sent == [CONFIRMATION]

    def test_delayed_delivery_does_not_block_the_caller(self) -> None:
        """
        Given a notifier with a delay
        When a confirmation is queued
        Then notify returns at once and the confirmation arrives after join_pending
        """
        notifier = BookingConfirmationNotifierImpl(delay_seconds=0.2)

        started = time.monotonic()
        notifier.notify(confirmation=CONFIRMATION)
        elapsed = time.monotonic() - started

        assert elapsed < 0.2
        assert notifier.sent == []

        notifier.join_pending(timeout=5)

        assert notifier.sent == [CONFIRMATION]

    def test_delivery_runs_on_a_daemon_thread(self) -> None:
        notifier = BookingConfirmationNotifierImpl(delay_seconds=0.05)
        seen: list[threading.Thread] = []
        deliver = notifier._deliver

        def spy(confirmation: BookingConfirmation) -> None:
            seen.append(threading.current_thread())
            deliver(confirmation)

        notifier._deliver = spy  # type: ignore[method-assign]
        notifier.notify(confirmation=CONFIRMATION)
        notifier.join_pending(timeout=5)

        assert len(seen) == 1
        assert seen[0] is not threading.main_thread()
        assert seen[0].daemon

    def test_join_pending_with_nothing_queued_returns(
        self, notifier: BookingConfirmationNotifierImpl
    ) -> None:
        notifier.join_pending(timeout=0.1)

        assert notifier.sent == []
