from __future__ import annotations

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from app.core.exceptions import StoreReadFailure, StoreWriteFailure
from app.domain.booking import Booking
from app.main import create_app
from app.services.booking_service import BookingController

TUESDAY = "2025-09-23"
SATURDAY = "2025-09-27"
SUNDAY = "2025-09-28"


class FakeStore:
    """Store en memoria con la misma interfaz que `booking_repo`."""

    def __init__(self, docs: List[Dict[str, Any]] | None = None) -> None:
        self.docs: List[Dict[str, Any]] = []
        self.list_calls = 0
        self.fail_read: str | None = None
        self.fail_write: str | None = None
        for d in docs or []:
            self.insert_booking(d)

    def _sorted(self, docs):
        return sorted(docs, key=lambda d: (d["date"], d.get("start_time") or ""))

    def list_bookings(self) -> List[Booking]:
        self.list_calls += 1
        if self.fail_read:
            raise StoreReadFailure(self.fail_read)
        return [Booking.from_document(d) for d in self._sorted(self.docs)]

    def list_bookings_by_date(self, date: str) -> List[Booking]:
        if self.fail_read:
            raise StoreReadFailure(self.fail_read)
        return [Booking.from_document(d) for d in self._sorted(self.docs) if d["date"] == date]

    def insert_booking(self, doc: Dict[str, Any]) -> str:
        if self.fail_write:
            raise StoreWriteFailure(self.fail_write)
        inserted_id = f"b{len(self.docs) + 1}"
        self.docs.append({**doc, "_id": inserted_id})
        return inserted_id


class _InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCollection:
    """Colección mínima con `find().sort()` e `insert_one` para probar el repo."""

    def __init__(self, docs=None, fail=False):
        self.docs = list(docs or [])
        self.fail = fail
        self.last_sort = None

    def find(self, query):
        if self.fail:
            raise PyMongoError("boom")
        self._matches = [d for d in self.docs if all(d.get(k) == v for k, v in query.items())]
        return self

    def sort(self, keys):
        self.last_sort = keys
        return sorted(self._matches, key=lambda d: tuple(d.get(k) or "" for k, _ in keys))

    def insert_one(self, doc):
        if self.fail:
            raise PyMongoError("write refused")
        self.docs.append(doc)
        return _InsertResult(f"oid{len(self.docs)}")


def form(**overrides: Any) -> Dict[str, Any]:
    data = {
        "teacher": "Ana",
        "class_name": "3A",
        "date": TUESDAY,
        "start_time": "09:00",
        "end_time": "10:00",
    }
    data.update(overrides)
    return data


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def controller(store: FakeStore) -> BookingController:
    return BookingController(store=store, today=lambda: "2025-09-22")


@pytest.fixture
def client(controller: BookingController) -> TestClient:
    app = create_app(controller=controller, connect_db=False)
    return TestClient(app)
