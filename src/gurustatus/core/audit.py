"""Data quality health check for teacher records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Literal

import pendulum

from ..schemas import TeacherRecord
from ..validators import validate_nik, validate_phone_number
from .dates import NowProvider, elapsed_years, parse_date

Severity = Literal["high", "medium", "low"]

_SEVERITY_ORDER: dict[str, int] = {"high": 0, "medium": 1, "low": 2}


@dataclass
class AuditConfig:
    """Plausibility bounds for the health check."""

    min_age: int = 17
    max_age: int = 75
    min_nuptk_length: int = 6


@dataclass(slots=True)
class AuditIssue:
    type: str
    message: str
    severity: Severity
    teacher_id: str | None = None
    name: str | None = None
    school: str | None = None


class DataAuditor:
    """Flag incomplete, implausible and duplicated teacher records."""

    def __init__(
        self,
        *,
        config: AuditConfig | None = None,
        now_provider: NowProvider | None = None,
    ) -> None:
        self._config = config or AuditConfig()
        self._now_provider = now_provider or pendulum.now

    def run(
        self,
        records: Iterable[TeacherRecord],
        *,
        now: pendulum.DateTime | None = None,
    ) -> list[AuditIssue]:
        reference = now or self._now_provider()
        issues: list[AuditIssue] = []
        names_by_nuptk: dict[str, list[str]] = {}

        for record in records:
            issues.extend(self._check_record(record, reference))

            nuptk = (record.nuptk or "").strip()
            if len(nuptk) >= self._config.min_nuptk_length and nuptk != "-":
                names_by_nuptk.setdefault(nuptk, []).append(record.name or "")

        for nuptk, names in names_by_nuptk.items():
            if len(names) > 1:
                issues.append(
                    AuditIssue(
                        type="DUPLICATE_NUPTK",
                        message=f"NUPTK {nuptk} dipakai oleh: {', '.join(names)}",
                        severity="high",
                    )
                )

        issues.sort(key=lambda issue: _SEVERITY_ORDER[issue.severity])
        return issues

    def _check_record(
        self,
        record: TeacherRecord,
        now: pendulum.DateTime,
    ) -> list[AuditIssue]:
        found: list[AuditIssue] = []

        def issue(kind: str, message: str, severity: Severity) -> None:
            found.append(
                AuditIssue(
                    type=kind,
                    message=message,
                    severity=severity,
                    teacher_id=record.teacher_id,
                    name=record.name,
                    school=record.unit,
                )
            )

        if not record.birth_place or not record.birth_date:
            issue("MISSING_BIO", "Data Lahir (Tempat/Tanggal) kosong.", "high")

        if record.birth_date:
            age = self._age(record.birth_date, now)
            if age < self._config.min_age or age > self._config.max_age:
                issue("AGE_ANOMALY", f"Umur tidak wajar: {age} tahun.", "medium")

        tenure_start = parse_date(record.tenure_start)
        if tenure_start.value is not None and tenure_start.value > now:
            issue("FUTURE_TMT", f"TMT masa depan: {record.tenure_start}", "medium")

        if record.phone:
            phone = validate_phone_number(record.phone)
            if not phone.is_valid:
                issue("INVALID_PHONE", f"Nomor HP {record.phone}: {phone.error}", "low")

        if record.nik:
            nik = validate_nik(record.nik)
            if nik.warning:
                issue("NIK_WARNING", nik.warning, "low")

        return found

    @staticmethod
    def _age(birth_date: str, now: pendulum.DateTime) -> int:
        parsed = parse_date(birth_date)
        if parsed.value is None:
            return 0
        return math.floor(elapsed_years(parsed.value, now))
