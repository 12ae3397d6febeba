"""
View-models de la agenda: lo que devuelve el controlador para tabla, calendario
y modal. El widget espera `extendedProps` en camelCase.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domain.booking import Booking


class TableRow(BaseModel):
    id: Optional[str] = None
    teacher: str
    class_name: str
    date: str  # DD/MM/YYYY
    start_time: str  # HH:MM
    end_time: str


class CalendarEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    start: str  # YYYY-MM-DDTHH:MM (hora local, sin zona)
    end: str
    extended_props: Dict[str, Any] = Field(default_factory=dict, alias="extendedProps")


class CalendarView(BaseModel):
    view: str
    options: Dict[str, Any]


class ScheduleView(BaseModel):
    rows: List[TableRow]
    events: List[CalendarEvent]
    calendar: CalendarView


class BookingDetail(BaseModel):
    heading: str
    teacher: str
    class_name: str
    date: str
    start_time: str
    end_time: str


class SubmitOutcome(BaseModel):
    id: str
    booking: Booking
    schedule: ScheduleView
    overlap_confirmed: bool = False
    form_reset: bool = True
