import os
from pathlib import Path
import tempfile
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ticketing.app.command.export_bookings_csv_use_case import (
    ExportBookingsCsvUseCase,
)
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.app.query.get_ledger_stats_use_case import GetLedgerStatsUseCase
from src.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreatedResponse,
    BookingCreateRequest,
    BookingResponse,
    CancelBookingResponse,
    LedgerStatsResponse,
)


router = APIRouter()


@router.get('', response_model=List[BookingResponse])
@Logger.io
def list_bookings(
    email: Optional[str] = None,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    """All bookings in booking order; ?email= narrows to one attendee (case-insensitive)."""
    return [BookingResponse.from_booking(booking) for booking in use_case.execute(email=email)]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
def create_booking(
    request: BookingCreateRequest,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingCreatedResponse:
    result = use_case.execute(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        tickets=request.tickets,
    )
    return BookingCreatedResponse(
        booking=BookingResponse.from_booking(result.booking),
        remaining_tickets=result.remaining_tickets,
        persisted=result.persisted,
    )


@router.get('/stats')
@Logger.io
def get_stats(
    use_case: GetLedgerStatsUseCase = Depends(GetLedgerStatsUseCase.depends),
) -> LedgerStatsResponse:
    return LedgerStatsResponse.from_stats(use_case.execute())


@router.get('/export')
@Logger.io
def export_bookings(
    use_case: ExportBookingsCsvUseCase = Depends(ExportBookingsCsvUseCase.depends),
) -> FileResponse:
    """Each download gets its own temp file, removed once the response is sent."""
    fd, tmp_name = tempfile.mkstemp(prefix='bookings-', suffix='.csv')
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        use_case.execute(path=tmp_path)
    except CustomBaseError:
        tmp_path.unlink(missing_ok=True)
        raise
    return FileResponse(
        tmp_path,
        media_type='text/csv',
        filename=use_case.default_path.name,
        background=BackgroundTask(tmp_path.unlink, missing_ok=True),
    )


@router.get('/{booking_id}')
@Logger.io
def get_booking(
    booking_id: int,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    return BookingResponse.from_booking(use_case.execute(booking_id=booking_id))


@router.delete('/{booking_id}')
@Logger.io
def cancel_booking(
    booking_id: int,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancelBookingResponse:
    result = use_case.execute(booking_id=booking_id)
    return CancelBookingResponse(
        booking_id=result.booking.id,
        released_tickets=result.booking.tickets,
        remaining_tickets=result.remaining_tickets,
        persisted=result.persisted,
    )
