"""CLI entry point for conference ticketing (interactive menu)."""

from pathlib import Path
from typing import Optional

import click

from src.platform.config.core_setting import Settings, settings
from src.platform.config.di import container
from src.platform.exception.exceptions import (
    CustomBaseError,
    ExportError,
    NotFoundError,
    PersistenceError,
)
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ticketing.app.command.export_bookings_csv_use_case import (
    ExportBookingsCsvUseCase,
)
from src.service.ticketing.app.command.init_ledger_use_case import InitLedgerUseCase
from src.service.ticketing.app.interface.i_booking_notifier import IBookingNotifier
from src.service.ticketing.app.interface.i_ledger_snapshot_repo import ILedgerSnapshotRepo
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.app.query.get_ledger_stats_use_case import GetLedgerStatsUseCase
from src.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import BookingLedger
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.driven_adapter.repo.ledger_snapshot_repo_json_impl import (
    LedgerSnapshotRepoJsonImpl,
)


BOOKED_AT_FORMAT = '%a, %d %b %Y %H:%M:%S UTC'
RULE = '=' * 52
# Upper bound on how long Exit waits for queued confirmations
CONFIRMATION_DRAIN_TIMEOUT_SECONDS = 5.0


def _ask(label: str, default: str = '', suffix: str = ': ') -> str:
    return click.prompt(
        label, default=default, show_default=bool(default), prompt_suffix=suffix
    ).strip()


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text.strip())
    except ValueError:
        return None


def _describe(booking: Booking) -> str:
    return (
        f'#{booking.id} - {booking.full_name}, {booking.email}, {booking.tickets} ticket(s), '
        f'booked {booking.booked_at.strftime(BOOKED_AT_FORMAT)}'
    )


class TicketingMenu:
    """One interactive session over a single ledger."""

    def __init__(
        self,
        *,
        ledger: BookingLedger,
        snapshot_repo: ILedgerSnapshotRepo,
        notifier: IBookingNotifier,
        config: Settings,
    ) -> None:
        self.ledger = ledger
        self.notifier = notifier
        self.create_booking = CreateBookingUseCase(
            ledger=ledger, snapshot_repo=snapshot_repo, notifier=notifier
        )
        self.cancel_booking = CancelBookingUseCase(ledger=ledger, snapshot_repo=snapshot_repo)
        self.get_booking = GetBookingUseCase(ledger=ledger)
        self.list_bookings = ListBookingsUseCase(ledger=ledger)
        self.get_stats = GetLedgerStatsUseCase(ledger=ledger)
        self.export_csv = ExportBookingsCsvUseCase(
            ledger=ledger,
            exporter=container.booking_csv_exporter(),
            default_path=config.EXPORT_CSV_PATH,
        )
        self.actions = {
            '1': self.book,
            '2': self.show_bookings,
            '3': self.find,
            '4': self.cancel,
            '5': self.show_stats,
            '6': self.export,
        }

    def run(self) -> None:
        while True:
            self.print_header()
            self.print_menu()
            choice = _ask('', suffix='> ')
            if choice == '0':
                click.echo('Goodbye!')
                self.notifier.join_pending(timeout=CONFIRMATION_DRAIN_TIMEOUT_SECONDS)
                return
            action = self.actions.get(choice)
            if action is None:
                click.echo('Unknown choice. Try again.\n')
                continue
            action()

    def print_header(self) -> None:
        conference = self.ledger.conference
        click.echo(RULE)
        click.echo(f'🎟️  {conference.name} - Ticketing CLI')
        click.echo(RULE)
        click.echo(
            f'Total Tickets: {conference.total_tickets}\tRemaining: {conference.remaining_tickets}\n'
        )

    @staticmethod
    def print_menu() -> None:
        click.echo('Choose an option:')
        click.echo('  1) Book tickets')
        click.echo('  2) List bookings')
        click.echo('  3) Find booking (by ID or email)')
        click.echo('  4) Cancel booking')
        click.echo('  5) Show stats')
        click.echo('  6) Export CSV')
        click.echo('  0) Exit')

    # ============================ Actions ============================

    def book(self) -> None:
        remaining = self.ledger.conference.remaining_tickets
        if remaining == 0:
            click.echo('Sorry, the conference is sold out!\n')
            return

        first_name = _ask('First name')
        last_name = _ask('Last name')
        email = _ask('Email')
        tickets = _parse_int(_ask(f'Number of tickets (max {remaining})'))
        if tickets is None:
            click.echo('Invalid number.\n')
            return

        try:
            result = self.create_booking.execute(
                first_name=first_name, last_name=last_name, email=email, tickets=tickets
            )
        except CustomBaseError as e:
            click.echo(f'Error: {e.message}\n')
            return

        if not result.persisted:
            click.echo("Warning: couldn't save state; the booking is kept in memory only.")
        booking = result.booking
        click.echo(
            f'\n🎉 Booked! Booking ID: {booking.id} - {booking.full_name} '
            f'for {booking.tickets} ticket(s).\n'
        )

    def show_bookings(self) -> None:
        bookings = self.list_bookings.execute()
        if not bookings:
            click.echo('No bookings yet.\n')
            return
        click.echo('\nCurrent Bookings:')
        click.echo('ID\tName\t\t\tEmail\t\t\t\tTickets\tBooked At')
        for booking in bookings:
            click.echo(
                f'{booking.id}\t{booking.full_name:<16}\t{booking.email:<24}\t'
                f'{booking.tickets}\t{booking.booked_at.strftime(BOOKED_AT_FORMAT)}'
            )
        click.echo()

    def find(self) -> None:
        mode = _ask('Search by (1) ID or (2) Email?')
        if mode == '1':
            booking_id = _parse_int(_ask('Enter booking ID'))
            if booking_id is None:
                click.echo('Invalid ID.\n')
                return
            try:
                booking = self.get_booking.execute(booking_id=booking_id)
            except NotFoundError:
                click.echo('Not found.\n')
                return
            click.echo(f'Found: {_describe(booking)}\n')
        elif mode == '2':
            email = _ask('Enter email')
            matches = self.list_bookings.execute(email=email) if email else []
            if not matches:
                click.echo('No bookings for that email.\n')
                return
            for booking in matches:
                click.echo(_describe(booking))
            click.echo()
        else:
            click.echo('Unknown option.\n')

    def cancel(self) -> None:
        booking_id = _parse_int(_ask('Enter booking ID to cancel'))
        if booking_id is None:
            click.echo('Invalid ID.\n')
            return
        try:
            result = self.cancel_booking.execute(booking_id=booking_id)
        except CustomBaseError as e:
            click.echo(f'Error: {e.message}\n')
            return
        if not result.persisted:
            click.echo("Warning: couldn't save state; the cancellation is kept in memory only.")
        click.echo('Booking cancelled. Tickets restored.\n')

    def show_stats(self) -> None:
        stats = self.get_stats.execute()
        click.echo('\n- Stats -')
        click.echo(f'Conference: {stats.conference_name}')
        click.echo(f'Total tickets: {stats.total_tickets}')
        click.echo(f'Remaining tickets: {stats.remaining_tickets}')
        click.echo(f'Total bookings: {stats.booking_count}')
        if stats.attendee_first_names:
            click.echo(f'Attendees (first names): {", ".join(stats.attendee_first_names)}')
        click.echo()

    def export(self) -> None:
        path = _ask('Export path', default=str(self.export_csv.default_path))
        try:
            written = self.export_csv.execute(path=path)
        except ExportError as e:
            click.echo(f'Export failed: {e.message}')
            return
        click.echo(f'Exported to {written}\n')


def _prompt_conference_name(default: str) -> str:
    while True:
        name = _ask('Enter conference name', default=default)
        if name:
            return name
        click.echo('Conference name cannot be empty.')


@click.command()
@click.version_option(version=settings.VERSION)
@click.option(
    '--snapshot',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Ledger snapshot file (defaults to LEDGER_SNAPSHOT_PATH).',
)
def main(snapshot: Optional[Path]) -> None:
    """Conference ticketing - book, list, find, cancel and export tickets."""
    config: Settings = container.config_service()
    snapshot_repo = LedgerSnapshotRepoJsonImpl(path=snapshot or config.LEDGER_SNAPSHOT_PATH)
    init_ledger = InitLedgerUseCase(snapshot_repo=snapshot_repo)

    try:
        ledger = init_ledger.load_existing()
    except PersistenceError as e:
        # Starting empty here would overwrite the bookings on disk at the next save
        raise click.ClickException(e.message) from e

    if ledger is None:
        name = _prompt_conference_name(config.DEFAULT_CONFERENCE_NAME)
        total_tickets = click.prompt(
            'Enter total number of tickets',
            type=click.IntRange(min=1),
            default=config.DEFAULT_TOTAL_TICKETS,
        )
        ledger = init_ledger.create_fresh(name=name, total_tickets=total_tickets)
    else:
        click.echo(f'Loaded existing state from {snapshot_repo.path}')

    Logger.base.debug(f'🖥️ [CLI] Session started on {ledger!r}')
    TicketingMenu(
        ledger=ledger,
        snapshot_repo=snapshot_repo,
        notifier=container.booking_notifier(),
        config=config,
    ).run()


if __name__ == '__main__':
    main()
