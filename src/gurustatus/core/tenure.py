"""Headmaster term-limit monitoring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Literal

import pendulum

from ..schemas import TeacherRecord
from .dates import SECONDS_PER_DAY, NowProvider, elapsed_years, parse_date

AlertLevel = Literal["safe", "warning", "expired", "limit_exceeded"]

HEADMASTER_POSITION_KEYWORDS: tuple[str, ...] = ("kepala",)
HEADMASTER_STATUS_KEYWORDS: tuple[str, ...] = ("kepala", "kamad")


@dataclass
class TenureMonitorConfig:
    """Term rules for headmaster appointments."""

    term_length_years: int = 4
    term_limit: int = 3
    threshold_days: int = 365


@dataclass(slots=True)
class TenureAlert:
    """Tenure position of one headmaster relative to mandatory rotation."""

    teacher_id: str | None
    name: str | None
    unit: str | None
    tenure_start: str | None
    current_period: int
    expiry_date: pendulum.DateTime
    days_remaining: int
    alert_level: AlertLevel
    max_period: int


def is_headmaster(record: TeacherRecord) -> bool:
    """Keyword match on the position and status fields."""
    position = " ".join(filter(None, (record.position, record.title))).lower()
    status = (record.raw_status or "").lower()
    return any(word in position for word in HEADMASTER_POSITION_KEYWORDS) or any(
        word in status for word in HEADMASTER_STATUS_KEYWORDS
    )


def _shift_year(start: pendulum.DateTime, year: int) -> pendulum.DateTime:
    try:
        return start.set(year=year)
    except ValueError:
        # 29 Feb in a non-leap year rolls over to 1 Mar.
        return start.set(year=year, month=3, day=1)


class TenureMonitor:
    """Derive term-limit alerts from headmaster TMT dates."""

    def __init__(
        self,
        *,
        config: TenureMonitorConfig | None = None,
        now_provider: NowProvider | None = None,
    ) -> None:
        self._config = config or TenureMonitorConfig()
        self._now_provider = now_provider or pendulum.now

    @property
    def config(self) -> TenureMonitorConfig:
        return self._config

    def assess(
        self,
        record: TeacherRecord,
        *,
        now: pendulum.DateTime | None = None,
        config: TenureMonitorConfig | None = None,
    ) -> TenureAlert | None:
        """Return the tenure position for ``record``, or ``None`` without a usable TMT."""
        parsed = parse_date(record.tenure_start)
        if parsed.value is None:
            return None
        cfg = config or self._config
        reference = now or self._now_provider()
        start = parsed.value

        years = elapsed_years(start, reference)
        current_period = math.floor(years / cfg.term_length_years) + 1
        expiry = _shift_year(start, start.year + current_period * cfg.term_length_years)
        days_remaining = math.ceil(
            (expiry.timestamp() - reference.timestamp()) / SECONDS_PER_DAY
        )

        return TenureAlert(
            teacher_id=record.teacher_id,
            name=record.name,
            unit=record.unit,
            tenure_start=record.tenure_start,
            current_period=current_period,
            expiry_date=expiry,
            days_remaining=days_remaining,
            alert_level=self._level(current_period, days_remaining, cfg),
            max_period=cfg.term_limit,
        )

    def compute_alerts(
        self,
        records: Iterable[TeacherRecord | dict[str, Any] | None],
        config: TenureMonitorConfig | None = None,
        *,
        now: pendulum.DateTime | None = None,
    ) -> list[TenureAlert]:
        """Alerts for active at-risk headmasters, most urgent first.

        Records flagged ``is_active=False`` are skipped; a missing flag counts
        as active.
        """
        reference = now or self._now_provider()
        alerts: list[TenureAlert] = []
        for record in records:
            if isinstance(record, dict):
                record = TeacherRecord.model_validate(record)
            if not isinstance(record, TeacherRecord) or record.is_active is False:
                continue
            if not is_headmaster(record):
                continue
            alert = self.assess(record, now=reference, config=config)
            if alert is None or alert.alert_level == "safe":
                continue
            alerts.append(alert)
        alerts.sort(key=lambda item: item.days_remaining)
        return alerts

    @staticmethod
    def _level(
        current_period: int,
        days_remaining: int,
        config: TenureMonitorConfig,
    ) -> AlertLevel:
        if current_period > config.term_limit:
            return "limit_exceeded"
        if days_remaining <= 0:
            return "expired"
        if days_remaining <= config.threshold_days:
            return "warning"
        return "safe"
