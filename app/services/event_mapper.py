"""
Mapper de `Booking` a view-models de presentación (fila de tabla, evento de
calendario, detalle del modal y opciones del calendario).

Funciones puras: no tocan el store ni dependen de un navegador.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from app.core.time import format_display_date, to_local_datetime, today_iso, truncate_time
from app.domain.booking import Booking

DEFAULT_START = "07:00"
DEFAULT_END = "08:00"

PLACEHOLDER_TITLE = "Sem agendamentos"
PLACEHOLDER_START = "09:00"
PLACEHOLDER_END = "09:30"

GRID_VIEW = "dayGridMonth"
LIST_VIEW = "listMonth"
MOBILE_BREAKPOINT_PX = 768


def to_table_row(booking: Booking) -> Dict[str, Any]:
    return {
        "id": booking.id,
        "teacher": booking.teacher,
        "class_name": booking.class_name,
        "date": format_display_date(booking.date),
        "start_time": truncate_time(booking.start_time),
        "end_time": truncate_time(booking.end_time),
    }


def to_calendar_event(booking: Booking) -> Dict[str, Any]:
    """Evento en el formato que consume el widget de calendario.

    Si falta alguna hora se usa la ventana 07:00-08:00.
    """
    start = truncate_time(booking.start_time) or DEFAULT_START
    end = truncate_time(booking.end_time) or DEFAULT_END
    return {
        "title": f"{booking.class_name} - {booking.teacher}",
        "start": to_local_datetime(booking.date, start),
        "end": to_local_datetime(booking.date, end),
        "extendedProps": booking.model_dump(),
    }


def placeholder_event(today: Optional[str] = None) -> Dict[str, Any]:
    """Evento de relleno para un calendario vacío. Nunca se persiste."""
    day = today or today_iso()
    return {
        "title": PLACEHOLDER_TITLE,
        "start": to_local_datetime(day, PLACEHOLDER_START),
        "end": to_local_datetime(day, PLACEHOLDER_END),
        "extendedProps": {"placeholder": True},
    }


def build_calendar_events(bookings: Iterable[Booking], today: Optional[str] = None) -> List[Dict[str, Any]]:
    events = [to_calendar_event(b) for b in bookings]
    return events or [placeholder_event(today)]


def to_detail_view(props: Dict[str, Any]) -> Dict[str, Any]:
    """Contenido del modal al hacer click en un evento (recibe `extendedProps`)."""
    return {
        "heading": "Detalhes do Agendamento",
        "teacher": props.get("teacher") or "",
        "class_name": props.get("class_name") or "",
        "date": format_display_date(props.get("date")),
        "start_time": truncate_time(props.get("start_time")),
        "end_time": truncate_time(props.get("end_time")),
    }


def is_mobile(viewport_width: Optional[int], breakpoint: int = MOBILE_BREAKPOINT_PX) -> bool:
    # Equivale a `(max-width: 768px)`; sin ancho conocido se asume escritorio
    return viewport_width is not None and viewport_width <= breakpoint


def calendar_view_for_width(viewport_width: Optional[int], breakpoint: int = MOBILE_BREAKPOINT_PX) -> str:
    return LIST_VIEW if is_mobile(viewport_width, breakpoint) else GRID_VIEW


def calendar_options(
    viewport_width: Optional[int],
    breakpoint: int = MOBILE_BREAKPOINT_PX,
    locale: str = "pt-br",
) -> Dict[str, Any]:
    """Opciones de inicialización del widget según el ancho de la pantalla."""
    view = calendar_view_for_width(viewport_width, breakpoint)
    return {
        "initialView": view,
        "locale": locale,
        "headerToolbar": {
            "left": "prev,next today",
            "center": "title",
            "right": view,
        },
        "views": {LIST_VIEW: {"buttonText": "Lista"}},
        "buttonText": {"today": "Hoje"},
        "height": "auto",
        "displayEventTime": True,
        "eventDisplay": "block",
        "dayMaxEventRows": 3,
        "moreLinkClick": "popover",
    }
