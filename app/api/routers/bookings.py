"""Endpoints de agendamientos: listado renderizado, alta con validación y detalle."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_controller
from app.api.schemas.booking import BookingCreateResponse, BookingForm, BookingOut
from app.domain.schedule import BookingDetail, CalendarView, ScheduleView
from app.services.booking_service import BookingController


router = APIRouter(tags=["Bookings"])


@router.get(
    "/bookings",
    response_model=ScheduleView,
    summary="Listar agendamientos",
    description="Relee todos los agendamientos (fecha, hora de inicio) y devuelve filas de tabla y eventos de calendario.",
)
def get_bookings(
    viewport_width: Optional[int] = Query(default=None, ge=0, description="Ancho del viewport en px"),
    controller: BookingController = Depends(get_controller),
) -> ScheduleView:
    return controller.load_and_render(viewport_width)


@router.post(
    "/bookings",
    status_code=status.HTTP_201_CREATED,
    response_model=BookingCreateResponse,
    summary="Crear agendamiento",
    description=(
        "Valida y crea un agendamiento. Si se solapa con otro del mismo día responde 409; "
        "reenviar con `confirm_overlap=true` para continuar."
    ),
)
def create_booking(
    payload: BookingForm,
    viewport_width: Optional[int] = Query(default=None, ge=0, description="Ancho del viewport en px"),
    controller: BookingController = Depends(get_controller),
) -> BookingCreateResponse:
    outcome = controller.submit_booking(
        payload.form_fields(),
        confirm_overlap=payload.confirm_overlap,
        viewport_width=viewport_width,
    )
    return BookingCreateResponse(
        message="ok",
        id=outcome.id,
        data=BookingOut(**outcome.booking.model_dump()),
        schedule=outcome.schedule,
        overlap_confirmed=outcome.overlap_confirmed,
        form_reset=outcome.form_reset,
    )


@router.get(
    "/bookings/{booking_id}/detail",
    response_model=BookingDetail,
    summary="Detalle de agendamiento",
    description="Contenido del modal al hacer click en un evento del calendario.",
)
def get_booking_detail(
    booking_id: str,
    controller: BookingController = Depends(get_controller),
) -> BookingDetail:
    return controller.event_detail(booking_id)


@router.get(
    "/calendar/view",
    response_model=CalendarView,
    summary="Vista de calendario por ancho",
    description="Re-evalúa la vista (dayGridMonth o listMonth) tras un resize.",
)
def get_calendar_view(
    viewport_width: Optional[int] = Query(default=None, ge=0, description="Ancho del viewport en px"),
    controller: BookingController = Depends(get_controller),
) -> CalendarView:
    return controller.calendar_view_for_width(viewport_width)
