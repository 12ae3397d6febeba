import os
import time
from datetime import datetime, timezone

import pytest

from app.core.time import (
    check_time,
    format_display_date,
    is_weekend,
    minutes_since_midnight,
    to_local_datetime,
    today_iso,
    truncate_time,
    weekday_index,
)
from app.services.event_mapper import build_calendar_events

FAR_FROM_UTC = ["Pacific/Kiritimati", "Pacific/Pago_Pago"]  # UTC+14 y UTC-11


@pytest.fixture(params=FAR_FROM_UTC)
def host_tz(request, monkeypatch):
    """Cambia la zona horaria del proceso y la restaura al terminar."""
    if not os.path.exists(os.path.join("/usr/share/zoneinfo", request.param)):
        pytest.skip(f"tzdata sin {request.param}")
    monkeypatch.setenv("TZ", request.param)
    time.tzset()
    yield request.param
    monkeypatch.undo()
    time.tzset()


def test_format_display_date():
    assert format_display_date("2025-09-23") == "23/09/2025"


@pytest.mark.parametrize("value", ["", None])
def test_format_display_date_empty(value):
    assert format_display_date(value) == ""


def test_to_local_datetime_keeps_wall_clock(host_tz):
    assert time.strftime("%Z") != "UTC"
    assert to_local_datetime("2025-09-23", "07:05") == "2025-09-23T07:05"
    assert to_local_datetime("2025-09-23", "23:59") == "2025-09-23T23:59"
    assert to_local_datetime("2025-09-23", "00:00") == "2025-09-23T00:00"


def test_today_iso_is_host_local_date(host_tz):
    local_today = datetime.now().date().isoformat()
    assert today_iso() == local_today
    offset = datetime.now(timezone.utc).astimezone().utcoffset()
    assert abs(offset.total_seconds()) >= 11 * 3600


def test_placeholder_uses_host_local_date(host_tz):
    event = build_calendar_events([])[0]
    assert event["start"] == f"{datetime.now().date().isoformat()}T09:00"


def test_to_local_datetime_pads_fields():
    assert to_local_datetime("2025-01-02", "7:5") == "2025-01-02T07:05"
    assert to_local_datetime("2025-12-31", "23:59:00") == "2025-12-31T23:59"


def test_minutes_since_midnight():
    assert minutes_since_midnight("00:00") == 0
    assert minutes_since_midnight("07:00") == 420
    assert minutes_since_midnight("18:00:00") == 1080


def test_minutes_since_midnight_rejects_garbage():
    with pytest.raises(ValueError):
        minutes_since_midnight("9h")


def test_truncate_time():
    assert truncate_time("09:30:00") == "09:30"
    assert truncate_time(None) == ""


def test_weekday_index_sunday_zero():
    assert weekday_index("2025-09-28") == 0  # domingo
    assert weekday_index("2025-09-22") == 1  # lunes
    assert weekday_index("2025-09-27") == 6  # sábado
    assert is_weekend("2025-09-27")
    assert not is_weekend("2025-09-26")


@pytest.mark.parametrize("value", ["09:00", "23:59", "00:00:59"])
def test_check_time_accepts(value):
    assert check_time(value) == value


@pytest.mark.parametrize("value", ["9:00", "24:00", "09:60", "09:00:60", "0900", "ab:cd"])
def test_check_time_rejects(value):
    with pytest.raises(ValueError):
        check_time(value)


def test_check_time_without_seconds():
    assert check_time("09:30", allow_seconds=False) == "09:30"
    with pytest.raises(ValueError):
        check_time("09:30:00", allow_seconds=False)
