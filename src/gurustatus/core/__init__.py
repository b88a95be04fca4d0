"""Rule engines over teacher records."""

from __future__ import annotations

from .audit import AuditConfig, AuditIssue, DataAuditor
from .classifier import ClassifierConfig, EmploymentStatus, StatusClassifier
from .dates import ParsedDate, parse_date
from .linker import LinkerConfig, LinkResult, SchoolLinker
from .stats import DashboardStats, StatsConfig, StatsSummary
from .tenure import TenureAlert, TenureMonitor, TenureMonitorConfig, is_headmaster

__all__ = [
    "AuditConfig",
    "AuditIssue",
    "ClassifierConfig",
    "DashboardStats",
    "DataAuditor",
    "EmploymentStatus",
    "LinkResult",
    "LinkerConfig",
    "ParsedDate",
    "SchoolLinker",
    "StatsConfig",
    "StatsSummary",
    "StatusClassifier",
    "TenureAlert",
    "TenureMonitor",
    "TenureMonitorConfig",
    "is_headmaster",
    "parse_date",
]
