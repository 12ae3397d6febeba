"""Repo de la colección `booking` (gateway hacia el store externo).

Solo lectura ordenada e inserción: no existen update/delete.
Los documentos se validan contra `Booking` al salir; los malformados se omiten.
"""
from typing import Any, Dict, List
from datetime import datetime, timezone
import logging

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.exceptions import StoreReadFailure, StoreWriteFailure
from app.domain.booking import Booking
from app.infrastructure.db.mongo import get_db

_log = logging.getLogger("agenda.repo.booking")

ORDER = [("date", 1), ("start_time", 1)]


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _coll():
    return get_db()[settings.bookings_collection]


def _to_bookings(docs: List[Dict[str, Any]]) -> List[Booking]:
    out: List[Booking] = []
    for d in docs:
        try:
            out.append(Booking.from_document(d))
        except ValidationError as e:
            _log.warning("Documento booking inválido omitido (_id=%s): %s", d.get("_id"), e.errors())
    return out


def list_bookings() -> List[Booking]:
    """Todos los agendamientos ordenados por fecha y hora de inicio."""
    try:
        docs = list(_coll().find({}).sort(ORDER))
    except (PyMongoError, RuntimeError) as e:
        raise StoreReadFailure(f"Erro ao carregar agendamentos: {e}") from e
    return _to_bookings(docs)


def list_bookings_by_date(date: str) -> List[Booking]:
    """Agendamientos de una fecha (consulta de solapamiento)."""
    try:
        docs = list(_coll().find({"date": date}).sort(ORDER))
    except (PyMongoError, RuntimeError) as e:
        raise StoreReadFailure(f"Erro ao carregar agendamentos: {e}") from e
    return _to_bookings(docs)


def insert_booking(doc: Dict[str, Any]) -> str:
    """Inserta un agendamiento y devuelve su id (str)."""
    data = dict(doc)
    data.setdefault("created_at", _now_iso())
    try:
        res = _coll().insert_one(data)
    except (PyMongoError, RuntimeError) as e:
        raise StoreWriteFailure(f"Erro ao salvar: {e}") from e
    return str(res.inserted_id)
