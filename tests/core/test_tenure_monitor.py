from __future__ import annotations

import pendulum
import pytest

from gurustatus.core import TenureMonitor, TenureMonitorConfig, is_headmaster
from gurustatus.core.dates import SECONDS_PER_YEAR
from gurustatus.schemas import TeacherRecord

NOW = pendulum.datetime(2026, 1, 15)


def headmaster(teacher_id: str, tmt: str | None, **kwargs) -> TeacherRecord:
    defaults = {"teacher_id": teacher_id, "name": f"Kepala {teacher_id}", "position": "Kepala Madrasah"}
    defaults.update(kwargs)
    return TeacherRecord(tenure_start=tmt, **defaults)


def start_for_days_remaining(days: int, term_years: int = 4) -> str:
    """TMT whose first term ends ``days`` after NOW."""
    return NOW.add(days=days).subtract(years=term_years).to_date_string()


@pytest.fixture
def monitor() -> TenureMonitor:
    return TenureMonitor(now_provider=lambda: NOW)


def test_exact_term_multiple_rolls_into_next_period(monitor):
    tmt = NOW.subtract(seconds=int(4 * SECONDS_PER_YEAR)).to_iso8601_string()

    alert = monitor.assess(headmaster("H-1", tmt))

    assert alert is not None
    assert alert.current_period == 2
    assert alert.expiry_date.year == pendulum.parse(tmt).year + 8


def test_expiry_keeps_calendar_month_and_day(monitor):
    alert = monitor.assess(headmaster("H-1", "2023-08-17"))

    assert alert is not None
    assert alert.current_period == 1
    assert alert.expiry_date.to_date_string() == "2027-08-17"
    assert alert.alert_level == "safe"


def test_limit_exceeded_takes_precedence(monitor):
    alert = monitor.assess(headmaster("H-1", "2013-01-01"))

    assert alert is not None
    assert alert.current_period == 4
    assert alert.days_remaining > 365
    assert alert.alert_level == "limit_exceeded"
    assert alert.max_period == 3


def test_far_expiry_produces_no_alert(monitor):
    record = headmaster("H-1", start_for_days_remaining(400))

    assessed = monitor.assess(record)
    assert assessed is not None
    assert assessed.days_remaining == 400
    assert assessed.alert_level == "safe"
    assert monitor.compute_alerts([record]) == []


def test_expiry_within_threshold_warns(monitor):
    alert = monitor.assess(headmaster("H-1", start_for_days_remaining(100)))

    assert alert is not None
    assert alert.days_remaining == 100
    assert alert.alert_level == "warning"


def test_threshold_is_configurable(monitor):
    record = headmaster("H-1", start_for_days_remaining(100))

    alerts = monitor.compute_alerts([record], TenureMonitorConfig(threshold_days=30))

    assert alerts == []


def test_calendar_expiry_before_average_term_is_expired():
    # 2022-03-01 .. 2023-03-01 has no leap day, so the calendar term is shorter
    # than the 365.25-day average used for the period number.
    monitor = TenureMonitor(config=TenureMonitorConfig(term_length_years=1))
    now = pendulum.datetime(2023, 3, 1, 3, 0, 0)

    alert = monitor.assess(headmaster("H-1", "2022-03-01"), now=now)

    assert alert is not None
    assert alert.current_period == 1
    assert alert.days_remaining == 0
    assert alert.alert_level == "expired"


def test_leap_day_start_rolls_to_march(monitor):
    config = TenureMonitorConfig(term_length_years=1)
    now = pendulum.datetime(2020, 6, 1)

    alert = monitor.assess(headmaster("H-1", "2020-02-29"), now=now, config=config)

    assert alert is not None
    assert alert.expiry_date.to_date_string() == "2021-03-01"


@pytest.mark.parametrize("tmt", [None, "", "tidak ada", "2020-13-45"])
def test_missing_or_invalid_tmt_produces_no_alert(monitor, tmt):
    record = headmaster("H-1", tmt)

    assert monitor.assess(record) is None
    assert monitor.compute_alerts([record]) == []


def test_alerts_sorted_by_days_remaining(monitor):
    records = [
        headmaster("warn-100", start_for_days_remaining(100)),
        headmaster("over-limit", "2013-01-01"),
        headmaster("warn-10", start_for_days_remaining(10)),
        headmaster("safe", start_for_days_remaining(900)),
    ]

    alerts = monitor.compute_alerts(records)

    assert [alert.teacher_id for alert in alerts] == ["warn-10", "warn-100", "over-limit"]
    assert [alert.days_remaining for alert in alerts] == sorted(
        alert.days_remaining for alert in alerts
    )


def test_only_headmasters_are_monitored(monitor):
    teacher = TeacherRecord(teacher_id="T-1", position="Guru Fiqih", tenure_start="2013-01-01")

    assert monitor.compute_alerts([teacher]) == []


@pytest.mark.parametrize(
    "fields",
    [
        {"position": "Kepala Madrasah"},
        {"raw_status": "KAMAD"},
        {"raw_status": "GTY / Kepala"},
        {"title": "Kepala Madrasah"},
    ],
)
def test_headmaster_keywords(fields):
    assert is_headmaster(TeacherRecord(**fields)) is True


def test_plain_teacher_is_not_headmaster():
    assert is_headmaster(TeacherRecord(position="Guru Kelas", raw_status="GTY")) is False


def test_inactive_headmasters_are_not_monitored(monitor):
    retired = headmaster("retired", "2013-01-01", is_active=False)
    unflagged = headmaster("unflagged", "2013-01-01")
    active = headmaster("active", "2013-01-01", is_active=True)

    alerts = monitor.compute_alerts([retired, unflagged, active])

    assert [alert.teacher_id for alert in alerts] == ["unflagged", "active"]


def test_compute_alerts_accepts_export_dicts_and_skips_non_records(monitor):
    raw = {"_id": "H-9", "mapel": "Kepala Madrasah", "tmt": "2013-01-01", "isActive": "ya"}
    inactive = {"_id": "H-10", "mapel": "Kepala Madrasah", "tmt": "2013-01-01", "isActive": False}

    alerts = monitor.compute_alerts([None, raw, 42, inactive])

    assert [alert.teacher_id for alert in alerts] == ["H-9"]
    assert alerts[0].alert_level == "limit_exceeded"
