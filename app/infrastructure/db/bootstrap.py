"""
Bootstrap de la base Mongo: define y aplica el validador (JSON Schema) e índices
de la colección de agendamientos.
Se ejecuta al inicio de la app; no tumba la app si algo falla.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.core.config import settings

_log = logging.getLogger("agenda.mongo.bootstrap")

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
_TIME_PATTERN = r"^\d{2}:\d{2}(:\d{2})?$"

BOOKING_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["teacher", "class_name", "date", "start_time", "end_time"],
    "properties": {
        "teacher": {"bsonType": "string", "minLength": 1},
        "class_name": {"bsonType": "string", "minLength": 1},
        "date": {"bsonType": "string", "pattern": _DATE_PATTERN},
        "start_time": {"bsonType": "string", "pattern": _TIME_PATTERN},
        "end_time": {"bsonType": "string", "pattern": _TIME_PATTERN},
        "created_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza la colección `booking` con su validador y el índice de orden
    usado por el listado (date asc, start_time asc).
    """
    name = settings.bookings_collection
    _collmod_or_create(name, BOOKING_VALIDATOR)
    _ensure_indexes(name, [
        {"keys": [("date", 1), ("start_time", 1)], "name": "date_start_time"},
    ])
    _log.info("Colección '%s' lista", name)
