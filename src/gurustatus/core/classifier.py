"""Employment status classification for teacher records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, NamedTuple

import pendulum

from ..schemas import TeacherRecord
from .dates import NowProvider, elapsed_years, parse_date

CIVIL_SERVANT_TOKENS: tuple[str, ...] = ("PNS", "ASN", "PPPK", "CPNS")
SUPPORT_STAFF_EDUCATION: tuple[str, ...] = (
    "SD",
    "SMP",
    "SMA",
    "SMK",
    "D1",
    "D2",
    "D3",
    "MA ",
    "MTS ",
    "MI ",
    "PAKET",
)
SUPPORT_STAFF_ROLES: tuple[str, ...] = ("TENDIK", "TU", "OPERATOR", "PENJAGA", "KEAMANAN")
PERMANENT_TOKENS: tuple[str, ...] = ("GTY", "TETAP")


class EmploymentStatus(str, Enum):
    """Canonical status tags used by reports and SK templates."""

    PNS = "PNS"
    TENDIK = "Tendik"
    GTY = "GTY"
    GTT = "GTT"


@dataclass
class ClassifierConfig:
    """Thresholds for status classification."""

    permanent_after_years: float = 2.0


@dataclass(frozen=True, slots=True)
class StatusSignals:
    """Normalized view of the record fields the rules look at."""

    status: str
    education: str
    tenure_years: float | None


class StatusRule(NamedTuple):
    name: str
    predicate: Callable[[StatusSignals], bool]
    result: EmploymentStatus


def _contains_any(text: str, tokens: Iterable[str]) -> bool:
    return any(token in text for token in tokens)


def _is_support_staff_education(education: str) -> bool:
    # Substring match is intentionally loose: any value containing "SD" counts.
    return any(
        education == token or education.startswith(token + " ") or token in education
        for token in SUPPORT_STAFF_EDUCATION
    )


class StatusClassifier:
    """Map a teacher record to exactly one :class:`EmploymentStatus`.

    Rules are evaluated in order and the first match wins:

    1. civil servant tokens in the raw status -> PNS
    2. sub-bachelor education or a non-teaching role -> Tendik
    3. a parseable TMT at least ``permanent_after_years`` old -> GTY,
       any other parseable TMT -> GTT
    4. without a usable TMT, "GTY"/"TETAP" in the raw status -> GTY
    5. otherwise GTT
    """

    DEFAULT_STATUS = EmploymentStatus.GTT

    def __init__(
        self,
        *,
        config: ClassifierConfig | None = None,
        now_provider: NowProvider | None = None,
    ) -> None:
        self._config = config or ClassifierConfig()
        self._now_provider = now_provider or pendulum.now
        self._rules = self._build_rules()

    @property
    def rules(self) -> tuple[StatusRule, ...]:
        return self._rules

    def classify(
        self,
        record: TeacherRecord | dict[str, Any] | None,
        *,
        now: pendulum.DateTime | None = None,
    ) -> EmploymentStatus:
        rule = self._first_match(record, now)
        return rule.result if rule else self.DEFAULT_STATUS

    def explain(
        self,
        record: TeacherRecord | dict[str, Any] | None,
        *,
        now: pendulum.DateTime | None = None,
    ) -> str:
        """Return the name of the rule that decided the status."""
        rule = self._first_match(record, now)
        return rule.name if rule else "default"

    def classify_many(
        self,
        records: Iterable[TeacherRecord],
        *,
        now: pendulum.DateTime | None = None,
    ) -> list[tuple[TeacherRecord, EmploymentStatus]]:
        reference = now or self._now_provider()
        return [(record, self.classify(record, now=reference)) for record in records]

    def signals(
        self,
        record: TeacherRecord | dict[str, Any] | None,
        now: pendulum.DateTime | None = None,
    ) -> StatusSignals | None:
        if isinstance(record, dict):
            record = TeacherRecord.model_validate(record)
        if not isinstance(record, TeacherRecord):
            return None
        status = (record.raw_status or "").strip().upper()
        education = (record.education_level or "").strip().upper()
        tenure_years: float | None = None
        parsed = parse_date(record.tenure_start)
        if parsed.value is not None:
            reference = now or self._now_provider()
            tenure_years = abs(elapsed_years(parsed.value, reference))
        return StatusSignals(status=status, education=education, tenure_years=tenure_years)

    def _first_match(
        self,
        record: TeacherRecord | dict[str, Any] | None,
        now: pendulum.DateTime | None,
    ) -> StatusRule | None:
        signals = self.signals(record, now)
        if signals is None:
            return None
        for rule in self._rules:
            if rule.predicate(signals):
                return rule
        return None

    def _build_rules(self) -> tuple[StatusRule, ...]:
        permanent_after = self._config.permanent_after_years
        return (
            StatusRule(
                "civil_servant",
                lambda s: _contains_any(s.status, CIVIL_SERVANT_TOKENS),
                EmploymentStatus.PNS,
            ),
            StatusRule(
                "support_staff",
                lambda s: _is_support_staff_education(s.education)
                or _contains_any(s.status, SUPPORT_STAFF_ROLES),
                EmploymentStatus.TENDIK,
            ),
            StatusRule(
                "tenure_permanent",
                lambda s: s.tenure_years is not None and s.tenure_years >= permanent_after,
                EmploymentStatus.GTY,
            ),
            StatusRule(
                "tenure_temporary",
                lambda s: s.tenure_years is not None,
                EmploymentStatus.GTT,
            ),
            StatusRule(
                "declared_permanent",
                lambda s: _contains_any(s.status, PERMANENT_TOKENS),
                EmploymentStatus.GTY,
            ),
        )
