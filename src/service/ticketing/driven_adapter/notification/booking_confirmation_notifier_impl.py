"""
Mock confirmation mailer.

Each confirmation is delivered on its own daemon timer thread after a fixed
delay, so booking never waits on it. The timer only holds the
BookingConfirmation value; it has no handle on the ledger.
"""

import threading
from typing import List

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_notifier import IBookingNotifier
from src.service.ticketing.domain.value_object.booking_confirmation import BookingConfirmation


class BookingConfirmationNotifierImpl(IBookingNotifier):
    def __init__(self, *, delay_seconds: float = 2.0) -> None:
        self.delay_seconds = delay_seconds
        self.sent: List[BookingConfirmation] = []  # Outbox, inspected by tests
        self._lock = threading.Lock()
        self._pending: set[threading.Timer] = set()

    def notify(self, *, confirmation: BookingConfirmation) -> None:
        if self.delay_seconds <= 0:
            self._deliver(confirmation)
            return

        timer = threading.Timer(self.delay_seconds, self._deliver, args=(confirmation,))
        timer.daemon = True
        with self._lock:
            self._pending.add(timer)
        timer.start()

    def join_pending(self, *, timeout: float | None = None) -> None:
        with self._lock:
            pending = list(self._pending)
        for timer in pending:
            timer.join(timeout)

    def _deliver(self, confirmation: BookingConfirmation) -> None:
        try:
            Logger.base.info(f'✅ [CONFIRMATION] {confirmation.render()}')
            with self._lock:
                self.sent.append(confirmation)
        except Exception as e:
            # Runs on a timer thread; nobody upstream can catch this
            Logger.base.opt(exception=e).error(
                f'❌ [CONFIRMATION] Failed for booking #{confirmation.booking_id}'
            )
        finally:
            with self._lock:
                self._pending.discard(threading.current_thread())  # type: ignore[arg-type]
