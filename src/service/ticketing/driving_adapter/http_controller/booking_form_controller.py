"""
Minimal HTML front-end: one page with the booking list and a booking form.

Successful posts redirect back to the page (post/redirect/get); failed posts
re-render it with the error text and the typed values.
"""

from html import escape
from typing import Iterable, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ticketing.app.query.get_ledger_stats_use_case import GetLedgerStatsUseCase
from src.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ticketing.domain.aggregate.booking_ledger_aggregate import LedgerStats
from src.service.ticketing.domain.entity.booking_entity import Booking


router = APIRouter()

SAVE_WARNING = "Warning: couldn't save state; the change is kept in memory only."


def _redirect_home(
    message: Optional[str] = None, *, error: Optional[str] = None
) -> RedirectResponse:
    params = {'message': message} if message else {'error': error or ''}
    query = urlencode(params)
    return RedirectResponse(url=f'/?{query}', status_code=status.HTTP_303_SEE_OTHER)


def _booking_rows(bookings: Iterable[Booking]) -> str:
    rows = []
    for booking in bookings:
        rows.append(
            '<tr>'
            f'<td>{booking.id}</td>'
            f'<td>{escape(booking.full_name)}</td>'
            f'<td>{escape(booking.email)}</td>'
            f'<td>{booking.tickets}</td>'
            f'<td>{booking.booked_at:%a, %d %b %Y %H:%M:%S UTC}</td>'
            f'<td><form method="post" action="/bookings/{booking.id}/cancel">'
            '<button type="submit">Cancel</button></form></td>'
            '</tr>'
        )
    return '\n'.join(rows) or '<tr><td colspan="6">No bookings yet.</td></tr>'


def render_page(
    *,
    stats: LedgerStats,
    bookings: list[Booking],
    message: Optional[str] = None,
    error: Optional[str] = None,
    email_filter: Optional[str] = None,
    form_values: Optional[dict[str, str]] = None,
) -> str:
    values = {key: escape(value) for key, value in (form_values or {}).items()}
    notice = ''
    if error:
        notice = f'<p class="error">Error: {escape(error)}</p>'
    elif message:
        notice = f'<p class="notice">{escape(message)}</p>'
    sold_out = '<p><strong>Sorry, the conference is sold out!</strong></p>' if not stats.remaining_tickets else ''

    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{escape(stats.conference_name)} - Tickets</title></head>
<body>
<h1>{escape(stats.conference_name)}</h1>
<p>Total Tickets: {stats.total_tickets} | Remaining: {stats.remaining_tickets} | Bookings: {stats.booking_count}</p>
{notice}
{sold_out}
<h2>Book tickets</h2>
<form method="post" action="/bookings/form">
  <label>First name <input name="first_name" value="{values.get('first_name', '')}"></label>
  <label>Last name <input name="last_name" value="{values.get('last_name', '')}"></label>
  <label>Email <input name="email" value="{values.get('email', '')}"></label>
  <label>Tickets (max {stats.remaining_tickets}) <input name="tickets" value="{values.get('tickets', '1')}"></label>
  <button type="submit">Book</button>
</form>
<h2>Bookings</h2>
<form method="get" action="/">
  <label>Find by email <input name="email" value="{escape(email_filter or '')}"></label>
  <button type="submit">Find</button> <a href="/">Show all</a>
</form>
<table>
<tr><th>ID</th><th>Name</th><th>Email</th><th>Tickets</th><th>Booked At</th><th></th></tr>
{_booking_rows(bookings)}
</table>
<p><a href="/api/booking/export">Export CSV</a></p>
</body>
</html>"""


@router.get('/', response_class=HTMLResponse)
@Logger.io
def booking_page(
    email: Optional[str] = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    list_use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
    stats_use_case: GetLedgerStatsUseCase = Depends(GetLedgerStatsUseCase.depends),
) -> HTMLResponse:
    return HTMLResponse(
        render_page(
            stats=stats_use_case.execute(),
            bookings=list_use_case.execute(email=email),
            message=message,
            error=error,
            email_filter=email,
        )
    )


@router.post('/bookings/form', response_class=HTMLResponse, response_model=None)
@Logger.io
def submit_booking_form(
    first_name: str = Form(''),
    last_name: str = Form(''),
    email: str = Form(''),
    tickets: str = Form(''),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
    list_use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
    stats_use_case: GetLedgerStatsUseCase = Depends(GetLedgerStatsUseCase.depends),
) -> HTMLResponse | RedirectResponse:
    form_values = {
        'first_name': first_name,
        'last_name': last_name,
        'email': email,
        'tickets': tickets,
    }
    try:
        ticket_count = int(tickets.strip())
    except ValueError:
        error: Optional[str] = 'Tickets must be a whole number'
    else:
        try:
            result = use_case.execute(
                first_name=first_name, last_name=last_name, email=email, tickets=ticket_count
            )
        except CustomBaseError as e:
            error = e.message
        else:
            message = (
                f'Booked! Booking ID: {result.booking.id} - {result.booking.full_name} '
                f'for {result.booking.tickets} ticket(s).'
            )
            if not result.persisted:
                message = f'{message} {SAVE_WARNING}'
            return _redirect_home(message)

    return HTMLResponse(
        render_page(
            stats=stats_use_case.execute(),
            bookings=list_use_case.execute(),
            error=error,
            form_values=form_values,
        ),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@router.post('/bookings/{booking_id}/cancel')
@Logger.io
def submit_cancel_form(
    booking_id: int,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> RedirectResponse:
    try:
        result = use_case.execute(booking_id=booking_id)
    except CustomBaseError as e:
        # e.g. a double submit of the same cancel button
        return _redirect_home(error=e.message)
    message = f'Booking #{booking_id} cancelled. {result.booking.tickets} ticket(s) restored.'
    if not result.persisted:
        message = f'{message} {SAVE_WARNING}'
    return _redirect_home(message)
