"""
Esquemas Pydantic para `booking` (agendamientos de turma).

Convenciones:
- Campos en inglés y snake_case.
- El formulario acepta campos vacíos: la completitud la decide el validador
  para reportar `MissingField` en vez de un 422 genérico.
- Las horas del formulario son `HH:MM` (como un `<input type=time>`).
- Las vistas de agenda (tabla/calendario/modal) viven en `app.domain.schedule`.
"""
from datetime import date as _date
from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.core.time import check_time
from app.domain.schedule import ScheduleView


class BookingForm(BaseModel):
    teacher: str = ""
    class_name: str = Field(default="", validation_alias=AliasChoices("class_name", "turma"))
    date: str = ""  # YYYY-MM-DD
    start_time: str = ""  # HH:MM 24h
    end_time: str = ""
    confirm_overlap: bool = False

    @field_validator("teacher", "class_name", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("date", mode="before")
    @classmethod
    def _validate_date(cls, v: Any) -> str:
        v = str(v or "").strip()
        if v and (len(v) != 10 or v[4] != "-" or v[7] != "-"):
            raise ValueError("date must be YYYY-MM-DD")
        if v:
            _date.fromisoformat(v)
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _validate_time(cls, v: Any) -> str:
        v = str(v or "").strip()
        return check_time(v, allow_seconds=False) if v else v

    def form_fields(self) -> Dict[str, str]:
        return self.model_dump(exclude={"confirm_overlap"})


class BookingOut(BaseModel):
    id: Optional[str] = None
    teacher: str
    class_name: str
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    created_at: Optional[str] = None


class BookingCreateResponse(BaseModel):
    message: str
    id: str
    data: BookingOut
    schedule: ScheduleView
    overlap_confirmed: bool = False
    form_reset: bool = True
