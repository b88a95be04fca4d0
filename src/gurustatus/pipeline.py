"""Record loading, rule evaluation runs and result output."""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, TypeVar

import pendulum
import structlog
from pydantic import BaseModel, ValidationError

from . import __version__
from .core import (
    DashboardStats,
    DataAuditor,
    SchoolLinker,
    StatusClassifier,
    TenureMonitor,
)
from .core.dates import NowProvider, resolve_as_of
from .schemas import SchoolRecord, TeacherRecord

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordLoadError(ValueError):
    """Raised when an export file cannot be read completely."""

    def __init__(self, path: Path, errors: list[str]):
        super().__init__("Record loading failed")
        self.path = path
        self.errors = errors

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Record loading failed for {self.path}: {self.errors}"


class RecordLoader:
    """Load a whole collection of records from a JSON array or JSONL export.

    Any unreadable entry aborts the load; partial collections are never returned.
    """

    def load_teachers(self, path: Path) -> list[TeacherRecord]:
        return self._load(path, TeacherRecord)

    def load_schools(self, path: Path) -> list[SchoolRecord]:
        return self._load(path, SchoolRecord)

    def _load(self, path: Path, model: type[RecordT]) -> list[RecordT]:
        records: list[RecordT] = []
        errors: list[str] = []
        for label, item in self._entries(path, errors):
            if not isinstance(item, dict):
                errors.append(f"{label}: expected an object, got {type(item).__name__}")
                continue
            try:
                records.append(model.model_validate(item))
            except ValidationError as exc:
                errors.append(f"{label}: {exc}")
        if errors:
            raise RecordLoadError(path, errors)
        return records

    @classmethod
    def _entries(cls, path: Path, errors: list[str]) -> Iterator[tuple[str, Any]]:
        try:
            yield from cls._decode(path, errors)
        except UnicodeDecodeError as exc:
            errors.append(f"invalid UTF-8 ({exc})")

    @staticmethod
    def _decode(path: Path, errors: list[str]) -> Iterator[tuple[str, Any]]:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() == ".json":
                try:
                    data = json.load(handle)
                except json.JSONDecodeError as exc:
                    errors.append(f"invalid JSON ({exc})")
                    return
                if not isinstance(data, list):
                    errors.append("top-level JSON value must be an array")
                    return
                for idx, item in enumerate(data):
                    yield f"item {idx}", item
                return

            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    yield f"line {idx}", json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")


class OutputWriter:
    """Persist run results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )


class RecordsPipeline:
    """Runs one rule engine over an exported teacher collection."""

    def __init__(
        self,
        *,
        classifier: StatusClassifier,
        monitor: TenureMonitor,
        auditor: DataAuditor,
        stats: DashboardStats,
        linker: SchoolLinker,
        loader: RecordLoader | None = None,
        writer: OutputWriter | None = None,
        now_provider: NowProvider | None = None,
    ) -> None:
        self._classifier = classifier
        self._monitor = monitor
        self._auditor = auditor
        self._stats = stats
        self._linker = linker
        self._loader = loader or RecordLoader()
        self._writer = writer or OutputWriter()
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    def classify(
        self,
        *,
        teachers_path: Path,
        output_path: Path,
        as_of: str | None = None,
    ) -> list[dict[str, Any]]:
        teachers = self._loader.load_teachers(teachers_path)
        now = resolve_as_of(as_of, self._now_provider)

        results: list[dict[str, Any]] = []
        for record in teachers:
            status = self._classifier.classify(record, now=now)
            results.append(
                {
                    "teacher_id": record.teacher_id,
                    "name": record.name,
                    "raw_status": record.raw_status,
                    "status": status.value,
                    "rule": self._classifier.explain(record, now=now),
                }
            )

        counts: dict[str, int] = {}
        for item in results:
            counts[item["status"]] = counts.get(item["status"], 0) + 1
        self._logger.info("classification.summary", teacher_count=len(teachers), counts=counts)
        return self._finish("classify", output_path, now, len(teachers), results)

    def alerts(
        self,
        *,
        teachers_path: Path,
        output_path: Path,
        as_of: str | None = None,
    ) -> list[dict[str, Any]]:
        teachers = self._loader.load_teachers(teachers_path)
        now = resolve_as_of(as_of, self._now_provider)

        alerts = self._monitor.compute_alerts(teachers, now=now)
        results = [asdict(alert) for alert in alerts]

        levels: dict[str, int] = {}
        for alert in alerts:
            levels[alert.alert_level] = levels.get(alert.alert_level, 0) + 1
        self._logger.info("tenure.alerts", teacher_count=len(teachers), levels=levels)
        return self._finish("alerts", output_path, now, len(teachers), results)

    def audit(
        self,
        *,
        teachers_path: Path,
        output_path: Path,
        as_of: str | None = None,
    ) -> list[dict[str, Any]]:
        teachers = self._loader.load_teachers(teachers_path)
        now = resolve_as_of(as_of, self._now_provider)

        issues = self._auditor.run(teachers, now=now)
        results = [asdict(issue) for issue in issues]
        self._logger.info("audit.issues", teacher_count=len(teachers), issue_count=len(issues))
        return self._finish("audit", output_path, now, len(teachers), results)

    def stats(
        self,
        *,
        teachers_path: Path,
        output_path: Path,
        as_of: str | None = None,
    ) -> dict[str, Any]:
        teachers = self._loader.load_teachers(teachers_path)
        now = resolve_as_of(as_of, self._now_provider)

        summary = self._stats.compute(teachers, now=now)
        result = {
            "total": summary.total,
            "status": [{"name": name, "value": value} for name, value in summary.status.items()],
            "certification": [
                {"name": name, "value": value} for name, value in summary.certification.items()
            ],
            "units": [{"name": name, "jumlah": count} for name, count in summary.units],
            "kecamatan": [{"name": name, "jumlah": count} for name, count in summary.kecamatan],
        }
        self._logger.info("stats.summary", teacher_count=summary.total, status=summary.status)
        self._finish("stats", output_path, now, summary.total, result)
        return result

    def link(
        self,
        *,
        teachers_path: Path,
        schools_path: Path,
        output_path: Path,
    ) -> list[dict[str, Any]]:
        teachers = self._loader.load_teachers(teachers_path)
        schools = self._loader.load_schools(schools_path)
        now = self._now_provider()

        links = self._linker.link(teachers, schools)
        results = [asdict(link) for link in links]

        methods: dict[str, int] = {}
        for link in links:
            methods[link.method] = methods.get(link.method, 0) + 1
            if link.method in ("dead_id", "unmatched"):
                self._logger.warning(
                    "link.unresolved",
                    teacher_id=link.teacher_id,
                    unit=link.unit,
                    method=link.method,
                )
        self._logger.info(
            "link.summary",
            teacher_count=len(teachers),
            school_count=len(schools),
            methods=methods,
        )
        return self._finish("link", output_path, now, len(teachers), results)

    def _finish(
        self,
        operation: str,
        output_path: Path,
        now: pendulum.DateTime,
        record_count: int,
        results: Any,
    ) -> Any:
        metadata = {
            "operation": operation,
            "record_count": record_count,
            "as_of": now.to_iso8601_string(),
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "results": results})
        return results


def _json_default(value):  # type: ignore[override]
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
