"""Validación de un agendamiento candidato.

Reglas en orden (fail-fast, solo se reporta la primera violación):
  1. Campos completos tras `strip()`            -> MissingField
  2. inicio < fin (minutos desde medianoche)    -> InvalidInterval
  3. dentro de la ventana permitida (inclusiva) -> OutsideAllowedWindow
  4. lunes a viernes                            -> WeekendNotAllowed
  5. solapamiento con el mismo día (aviso)      -> se devuelve en `conflicts`

El solapamiento no se bloquea aquí: el llamador decide si pide confirmación.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from app.core.exceptions import (
    InvalidInterval,
    MissingField,
    OutsideAllowedWindow,
    WeekendNotAllowed,
)
from app.core.time import is_weekend, minutes_since_midnight
from app.domain.booking import Booking, BookingDraft

WINDOW_START = "07:00"
WINDOW_END = "18:00"

REQUIRED_FIELDS = ("teacher", "class_name", "date", "start_time", "end_time")


class ValidationResult(BaseModel):
    booking: BookingDraft
    conflicts: List[Booking] = Field(default_factory=list)

    @property
    def overlap_detected(self) -> bool:
        return bool(self.conflicts)


def _interval(b: Booking) -> Tuple[int, int]:
    # Registros sin hora cuentan como 00:00-00:00 (nunca solapan)
    return (
        minutes_since_midnight(b.start_time or "00:00"),
        minutes_since_midnight(b.end_time or "00:00"),
    )


def intervals_overlap(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """Intervalos semiabiertos: tocarse en un extremo no es solapamiento."""
    return max(a[0], b[0]) < min(a[1], b[1])


def check_required(candidate: Mapping[str, Any]) -> BookingDraft:
    values = {k: str(candidate.get(k) or "").strip() for k in REQUIRED_FIELDS}
    missing = [k for k, v in values.items() if not v]
    if missing:
        raise MissingField(missing)
    return BookingDraft(**values)


def check_rules(
    draft: BookingDraft,
    window_start: str = WINDOW_START,
    window_end: str = WINDOW_END,
) -> None:
    start = minutes_since_midnight(draft.start_time)
    end = minutes_since_midnight(draft.end_time)
    if start >= end:
        raise InvalidInterval()
    if start < minutes_since_midnight(window_start) or end > minutes_since_midnight(window_end):
        raise OutsideAllowedWindow(window_start, window_end)
    if is_weekend(draft.date):
        raise WeekendNotAllowed()


def find_conflicts(draft: BookingDraft, existing: Iterable[Booking]) -> List[Booking]:
    """Devuelve los agendamientos del mismo día cuyo intervalo se cruza con el candidato."""
    cand = (minutes_since_midnight(draft.start_time), minutes_since_midnight(draft.end_time))
    return [
        b for b in existing
        if b.date == draft.date and intervals_overlap(_interval(b), cand)
    ]


def validate(
    candidate: Mapping[str, Any],
    existing_same_date: Optional[Iterable[Booking]] = None,
    *,
    window_start: str = WINDOW_START,
    window_end: str = WINDOW_END,
) -> ValidationResult:
    """Aplica las reglas fatales y calcula los conflictos (aviso).

    Lanza la primera `BookingValidationError` encontrada.
    """
    draft = check_required(candidate)
    check_rules(draft, window_start=window_start, window_end=window_end)
    conflicts = find_conflicts(draft, existing_same_date or [])
    return ValidationResult(booking=draft, conflicts=conflicts)
