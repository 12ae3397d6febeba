import pytest

from app.core.exceptions import StoreReadFailure, StoreWriteFailure
from app.repositories import booking_repo

from conftest import FakeCollection


@pytest.fixture
def coll(monkeypatch):
    c = FakeCollection([
        {"_id": 2, "teacher": "Bia", "class_name": "2B", "date": "2025-09-23", "start_time": "10:00:00", "end_time": "11:00:00"},
        {"_id": 1, "teacher": "Ana", "class_name": "3A", "date": "2025-09-23", "start_time": "08:00:00", "end_time": "09:00:00"},
        {"_id": 3, "teacher": "Caio", "class_name": "1C", "date": "2025-09-22", "start_time": "07:00:00", "end_time": "08:00:00"},
    ])
    monkeypatch.setattr(booking_repo, "get_db", lambda: {booking_repo.settings.bookings_collection: c})
    return c


def test_list_bookings_ordered(coll):
    items = booking_repo.list_bookings()
    assert [b.teacher for b in items] == ["Caio", "Ana", "Bia"]
    assert items[0].id == "3"
    assert coll.last_sort == [("date", 1), ("start_time", 1)]


def test_list_by_date(coll):
    items = booking_repo.list_bookings_by_date("2025-09-23")
    assert [b.teacher for b in items] == ["Ana", "Bia"]


def test_malformed_documents_are_skipped(coll):
    coll.docs.append({"_id": 9, "teacher": "", "class_name": "X", "date": "2025-09-23"})
    coll.docs.append({"_id": 10, "teacher": "Dani", "class_name": "4D", "date": "23/09/2025"})
    coll.docs.append({"_id": 11, "teacher": "Eva", "class_name": "5E", "date": "2025-09-23", "start_time": "9:00:00", "end_time": "10:00:00"})
    coll.docs.append({"_id": 12, "teacher": "Fabi", "class_name": "6F", "date": "2025-09-23", "start_time": "09:00:00", "end_time": "25:00"})
    coll.docs.append({"_id": 13, "teacher": "Gil", "class_name": "7G", "date": "2025-09-23", "start_time": "09:60", "end_time": "10:00"})
    assert [b.teacher for b in booking_repo.list_bookings()] == ["Caio", "Ana", "Bia"]


def test_blank_times_are_kept_as_missing(coll):
    coll.docs.append({"_id": 14, "teacher": "Hugo", "class_name": "8H", "date": "2025-09-24", "start_time": "", "end_time": None})
    hugo = booking_repo.list_bookings()[-1]
    assert hugo.teacher == "Hugo"
    assert hugo.start_time is None and hugo.end_time is None


def test_insert_stamps_created_at(coll):
    inserted_id = booking_repo.insert_booking({"teacher": "Dani", "class_name": "4D", "date": "2025-09-24", "start_time": "09:00:00", "end_time": "10:00:00"})
    assert inserted_id == "oid4"
    assert coll.docs[-1]["created_at"].endswith("Z")


def test_read_failure_wraps_message(coll):
    coll.fail = True
    with pytest.raises(StoreReadFailure) as exc:
        booking_repo.list_bookings()
    assert "boom" in exc.value.message


def test_write_failure_wraps_message(coll):
    coll.fail = True
    with pytest.raises(StoreWriteFailure) as exc:
        booking_repo.insert_booking({"teacher": "Dani"})
    assert "write refused" in exc.value.message


def test_uninitialised_db_is_read_failure():
    # Sin init_mongo() el cliente no existe
    with pytest.raises(StoreReadFailure):
        booking_repo.list_bookings()
