"""
Modelo explícito de `booking` tal como sale del store.

Los documentos de Mongo se validan aquí antes de llegar al validador o al
mapper: `teacher`, `class_name` y `date` son obligatorios; las horas pueden
faltar (el mapper aplica una ventana por defecto) pero si existen deben ser
`HH:MM[:SS]` válidas.
"""
from __future__ import annotations

from datetime import date as _date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.time import check_time


class Booking(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    teacher: str = Field(min_length=1)
    class_name: str = Field(min_length=1)
    date: str  # YYYY-MM-DD
    start_time: Optional[str] = None  # HH:MM[:SS]
    end_time: Optional[str] = None
    created_at: Optional[str] = None

    @field_validator("teacher", "class_name")
    @classmethod
    def _strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("date")
    @classmethod
    def _validate_date(cls, v: str) -> str:
        if len(v) != 10 or v[4] != "-" or v[7] != "-":
            raise ValueError("date must be YYYY-MM-DD")
        _date.fromisoformat(v)
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        return check_time(v)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Booking":
        """Convierte un documento Mongo (con `_id`) al modelo."""
        data = dict(doc)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)


def _with_seconds(value: str) -> str:
    return value if len(value) == 8 else f"{value}:00"


class BookingDraft(BaseModel):
    """Candidato ya recortado y aceptado por el validador (aún sin persistir)."""

    teacher: str
    class_name: str
    date: str
    start_time: str  # HH:MM[:SS]
    end_time: str

    def to_document(self) -> Dict[str, Any]:
        # El store guarda HH:MM:SS
        return {
            "teacher": self.teacher,
            "class_name": self.class_name,
            "date": self.date,
            "start_time": _with_seconds(self.start_time),
            "end_time": _with_seconds(self.end_time),
        }
