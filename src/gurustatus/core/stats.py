"""Dashboard aggregation over teacher records."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

import pendulum

from ..normalize import match_kecamatan, title_case
from ..schemas import TeacherRecord
from .classifier import EmploymentStatus, StatusClassifier

UNKNOWN_LABEL = "Tidak Diketahui"
CERTIFIED_LABEL = "Sudah Sertifikasi"
NOT_CERTIFIED_LABEL = "Belum Sertifikasi"


@dataclass
class StatsConfig:
    top_units: int = 5
    valid_kecamatan: list[str] | None = None
    min_similarity: float = 85.0


@dataclass(slots=True)
class StatsSummary:
    total: int
    status: dict[str, int]
    certification: dict[str, int]
    units: list[tuple[str, int]] = field(default_factory=list)
    kecamatan: list[tuple[str, int]] = field(default_factory=list)


class DashboardStats:
    """Counts shown on the dashboard: status, certification, schools, districts."""

    def __init__(
        self,
        classifier: StatusClassifier,
        *,
        config: StatsConfig | None = None,
    ) -> None:
        self._classifier = classifier
        self._config = config or StatsConfig()

    def compute(
        self,
        records: Iterable[TeacherRecord],
        *,
        now: pendulum.DateTime | None = None,
    ) -> StatsSummary:
        status_counts = {status.value: 0 for status in EmploymentStatus}
        certification = {CERTIFIED_LABEL: 0, NOT_CERTIFIED_LABEL: 0}
        units: Counter[str] = Counter()
        districts: Counter[str] = Counter()
        total = 0

        for record, status in self._classifier.classify_many(records, now=now):
            total += 1
            status_counts[status.value] += 1
            certification[CERTIFIED_LABEL if record.is_certified else NOT_CERTIFIED_LABEL] += 1
            units[(record.unit or "").strip() or UNKNOWN_LABEL] += 1
            districts[self._kecamatan(record.kecamatan)] += 1

        return StatsSummary(
            total=total,
            status=status_counts,
            certification=certification,
            units=units.most_common(self._config.top_units),
            kecamatan=districts.most_common(),
        )

    def _kecamatan(self, value: str | None) -> str:
        text = (value or "").strip()
        if not text:
            return UNKNOWN_LABEL
        if self._config.valid_kecamatan:
            matched = match_kecamatan(
                text,
                self._config.valid_kecamatan,
                min_similarity=self._config.min_similarity,
            )
            if matched:
                return matched
        return title_case(text)
