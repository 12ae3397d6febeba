"""
Utilidades de fecha/hora de pared (sin zona horaria).

Todas las funciones son puras: trabajan sobre strings `YYYY-MM-DD` y `HH:MM`
(o `HH:MM:SS`) y nunca convierten a UTC, de modo que una fecha no puede
cruzar de día por un offset del host.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def format_display_date(iso: Optional[str]) -> str:
    """`YYYY-MM-DD` -> `DD/MM/YYYY`; cadena vacía si no hay valor."""
    if not iso:
        return ""
    year, month, day = iso.split("-")
    return f"{day}/{month}/{year}"


def _time_parts(value: str) -> tuple[int, int]:
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"hora inválida: {value!r}")
    return int(parts[0]), int(parts[1])


def check_time(value: str, allow_seconds: bool = True) -> str:
    """Valida `HH:MM` (o `HH:MM:SS` si `allow_seconds`) estricto, 24h; lanza ValueError."""
    parts = value.split(":")
    sizes = (2, 3) if allow_seconds else (2,)
    if len(parts) in sizes and all(len(p) == 2 and p.isdigit() for p in parts):
        h, m = int(parts[0]), int(parts[1])
        if h < 24 and m < 60 and (len(parts) == 2 or int(parts[2]) < 60):
            return value
    raise ValueError("time must be HH:MM or HH:MM:SS" if allow_seconds else "time must be HH:MM")


def minutes_since_midnight(time_hm: str) -> int:
    hour, minute = _time_parts(time_hm)
    return hour * 60 + minute


def truncate_time(value: Optional[str]) -> str:
    """Recorta `HH:MM:SS` a `HH:MM` (los primeros 5 caracteres)."""
    return (value or "")[:5]


def to_local_datetime(date_ymd: str, time_hm: str) -> str:
    """
    Construye `YYYY-MM-DDTHH:MM` a partir de partes numéricas.

    El datetime es naive (hora de pared), así que la salida conserva
    exactamente el día y la hora de entrada sin importar la zona del host.
    """
    year, month, day = (int(p) for p in date_ymd.split("-"))
    hour, minute = _time_parts(time_hm)
    dt = datetime(year, month, day, hour, minute)
    return f"{dt.year}-{dt.month:02d}-{dt.day:02d}T{dt.hour:02d}:{dt.minute:02d}"


def parse_date(date_ymd: str) -> date:
    return date.fromisoformat(date_ymd.strip())


def weekday_index(date_ymd: str) -> int:
    """Índice de día de la semana con domingo=0 ... sábado=6."""
    # Python: lunes=0
    return (parse_date(date_ymd).weekday() + 1) % 7


def is_weekend(date_ymd: str) -> bool:
    return weekday_index(date_ymd) in (0, 6)


def today_iso() -> str:
    """Fecha local de hoy (hora de pared del servidor)."""
    return date.today().isoformat()
