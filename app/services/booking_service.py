"""
Controlador de la agenda: carga -> valida -> inserta -> recarga.

Se construye una sola vez por aplicación (ver `app.main`) y se inyecta en los
routers; el store es cualquier objeto con `list_bookings`,
`list_bookings_by_date` e `insert_booking` (por defecto el repo de Mongo).
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional

from app.core.exceptions import BookingNotFound, OverlapDetected
from app.core.time import today_iso
from app.domain.booking import Booking
from app.domain.schedule import BookingDetail, CalendarView, ScheduleView, SubmitOutcome
from app.repositories import booking_repo
from app.services import booking_validator as validator
from app.services import event_mapper as mapper

_log = logging.getLogger("agenda.controller")


class BookingController:
    def __init__(
        self,
        store: Any = booking_repo,
        *,
        window_start: str = validator.WINDOW_START,
        window_end: str = validator.WINDOW_END,
        mobile_breakpoint: int = mapper.MOBILE_BREAKPOINT_PX,
        locale: str = "pt-br",
        today: Callable[[], str] = today_iso,
    ) -> None:
        self.store = store
        self.window_start = window_start
        self.window_end = window_end
        self.mobile_breakpoint = mobile_breakpoint
        self.locale = locale
        self._today = today
        # Caché desechable: se reemplaza completa en cada carga
        self._bookings: List[Booking] = []

    @property
    def bookings(self) -> List[Booking]:
        return list(self._bookings)

    def calendar_view_for_width(self, viewport_width: Optional[int]) -> CalendarView:
        """Vista a usar tras un resize (grid en escritorio, lista en móvil)."""
        return CalendarView(
            view=mapper.calendar_view_for_width(viewport_width, self.mobile_breakpoint),
            options=mapper.calendar_options(viewport_width, self.mobile_breakpoint, self.locale),
        )

    def load_and_render(self, viewport_width: Optional[int] = None) -> ScheduleView:
        """Relee todo el store y reconstruye tabla y calendario desde cero."""
        bookings = self.store.list_bookings()
        self._bookings = list(bookings)
        _log.debug("Agenda recargada: %d agendamientos", len(self._bookings))
        return ScheduleView(
            rows=[mapper.to_table_row(b) for b in self._bookings],
            events=mapper.build_calendar_events(self._bookings, self._today()),
            calendar=self.calendar_view_for_width(viewport_width),
        )

    def submit_booking(
        self,
        form: Mapping[str, Any],
        confirm_overlap: bool = False,
        viewport_width: Optional[int] = None,
    ) -> SubmitOutcome:
        """
        Valida e inserta un agendamiento.

        - Errores fatales: se propagan (`BookingValidationError`), nada se envía.
        - Solapamiento sin confirmar: `OverlapDetected` con los conflictos.
        - Éxito: inserta, recarga y devuelve el resultado con `form_reset=True`.
        """
        # Reglas fatales antes de consultar el store
        result = validator.validate(form, window_start=self.window_start, window_end=self.window_end)
        draft = result.booking

        existing = self.store.list_bookings_by_date(draft.date)
        result.conflicts = validator.find_conflicts(draft, existing)
        if result.overlap_detected:
            if not confirm_overlap:
                raise OverlapDetected([mapper.to_table_row(b) for b in result.conflicts])
            _log.info(
                "Solapamiento confirmado date=%s %s-%s conflicts=%d",
                draft.date, draft.start_time, draft.end_time, len(result.conflicts),
            )

        doc = result.booking.to_document()
        inserted_id = self.store.insert_booking(doc)
        _log.info("Agendamiento creado id=%s date=%s", inserted_id, draft.date)

        schedule = self.load_and_render(viewport_width)
        created = Booking.model_validate({**doc, "id": inserted_id})
        return SubmitOutcome(
            id=inserted_id,
            booking=created,
            schedule=schedule,
            overlap_confirmed=result.overlap_detected,
            form_reset=True,
        )

    def event_detail(self, booking_id: str) -> BookingDetail:
        """Detalle (modal) de un evento de la agenda cargada; recarga si no está en caché."""
        found = self._find(booking_id)
        if found is None:
            self.load_and_render()
            found = self._find(booking_id)
        if found is None:
            raise BookingNotFound()
        return BookingDetail(**mapper.to_detail_view(found.model_dump()))

    def _find(self, booking_id: str) -> Optional[Booking]:
        for b in self._bookings:
            if b.id == booking_id:
                return b
        return None
