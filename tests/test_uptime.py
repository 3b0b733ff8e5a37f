from __future__ import annotations

from datetime import datetime, timedelta, timezone

from hello_api.core import uptime as uptime_module
from hello_api.core.uptime import format_iso, process_clock


def test_format_iso_uses_z_suffix_and_milliseconds():
    moment = datetime(2023, 6, 1, 8, 30, 15, 123456, tzinfo=timezone.utc)
    assert format_iso(moment) == "2023-06-01T08:30:15.123Z"


def test_format_iso_converts_to_utc():
    plus_two = timezone(timedelta(hours=2))
    moment = datetime(2023, 6, 1, 10, 0, 0, tzinfo=plus_two)
    assert format_iso(moment) == "2023-06-01T08:00:00.000Z"


def test_process_start_is_captured_once():
    assert process_clock() is process_clock()
    assert uptime_module.started_at == process_clock().started_at
    assert process_clock().started_at <= datetime.now(timezone.utc)


def test_module_level_helpers_delegate_to_process_clock():
    assert uptime_module.uptime() >= 0
    assert uptime_module.now_iso().endswith("Z")
