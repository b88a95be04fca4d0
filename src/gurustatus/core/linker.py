"""Link teacher records to school master data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from rapidfuzz import fuzz, process

from ..normalize import fuzzy_key, school_key_variants
from ..schemas import SchoolRecord, TeacherRecord

LinkMethod = Literal["id", "fuzzy", "similar", "dead_id", "unmatched"]


@dataclass
class LinkerConfig:
    """Fallback similarity for names that do not share a normalized key.

    ``None`` disables the similarity fallback.
    """

    min_similarity: float | None = 92.0


@dataclass(slots=True)
class LinkResult:
    teacher_id: str | None
    name: str | None
    unit: str | None
    method: LinkMethod
    school_id: str | None = None
    school_name: str | None = None
    score: float | None = None


class SchoolLinker:
    """Resolve each teacher's school: by id first, then by normalized unit name."""

    def __init__(self, *, config: LinkerConfig | None = None) -> None:
        self._config = config or LinkerConfig()

    def link(
        self,
        teachers: Iterable[TeacherRecord],
        schools: Iterable[SchoolRecord],
    ) -> list[LinkResult]:
        by_id: dict[str, SchoolRecord] = {}
        by_key: dict[str, SchoolRecord] = {}
        for school in schools:
            if school.school_id:
                by_id[school.school_id] = school
            for key in school_key_variants(school.name):
                by_key.setdefault(key, school)

        return [self._link_one(teacher, by_id, by_key) for teacher in teachers]

    def _link_one(
        self,
        teacher: TeacherRecord,
        by_id: dict[str, SchoolRecord],
        by_key: dict[str, SchoolRecord],
    ) -> LinkResult:
        result = LinkResult(
            teacher_id=teacher.teacher_id,
            name=teacher.name,
            unit=teacher.unit,
            method="unmatched",
        )

        if teacher.school_id:
            school = by_id.get(teacher.school_id)
            if school is not None:
                return self._resolved(result, school, "id")
            result.method = "dead_id"

        key = fuzzy_key(teacher.unit)
        if not key:
            return result

        school = by_key.get(key)
        if school is not None:
            return self._resolved(result, school, "fuzzy")

        if self._config.min_similarity is not None and by_key:
            best = process.extractOne(
                key,
                list(by_key),
                scorer=fuzz.token_sort_ratio,
                score_cutoff=self._config.min_similarity,
            )
            if best is not None:
                matched_key, score, _ = best
                return self._resolved(result, by_key[matched_key], "similar", score=score)

        return result

    @staticmethod
    def _resolved(
        result: LinkResult,
        school: SchoolRecord,
        method: LinkMethod,
        *,
        score: float | None = None,
    ) -> LinkResult:
        result.method = method
        result.school_id = school.school_id
        result.school_name = school.name
        result.score = score
        return result
