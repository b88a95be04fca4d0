"""Dependency injection container for the rule engines."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    AuditConfig,
    ClassifierConfig,
    DashboardStats,
    DataAuditor,
    LinkerConfig,
    SchoolLinker,
    StatsConfig,
    StatusClassifier,
    TenureMonitor,
    TenureMonitorConfig,
)
from .pipeline import OutputWriter, RecordLoader, RecordsPipeline


class RecordsContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    classifier_config = providers.Singleton(ClassifierConfig)
    tenure_config = providers.Singleton(TenureMonitorConfig)
    audit_config = providers.Singleton(AuditConfig)
    stats_config = providers.Singleton(StatsConfig)
    linker_config = providers.Singleton(LinkerConfig)

    classifier = providers.Singleton(StatusClassifier, config=classifier_config)
    tenure_monitor = providers.Singleton(TenureMonitor, config=tenure_config)
    auditor = providers.Singleton(DataAuditor, config=audit_config)
    dashboard_stats = providers.Singleton(
        DashboardStats,
        classifier=classifier,
        config=stats_config,
    )
    linker = providers.Singleton(SchoolLinker, config=linker_config)

    loader = providers.Singleton(RecordLoader)
    writer = providers.Singleton(OutputWriter)

    pipeline = providers.Factory(
        RecordsPipeline,
        classifier=classifier,
        monitor=tenure_monitor,
        auditor=auditor,
        stats=dashboard_stats,
        linker=linker,
        loader=loader,
        writer=writer,
    )


def create_container(*, settings: dict | None = None) -> RecordsContainer:
    """Instantiate container with optional overrides."""

    container = RecordsContainer()

    if not settings or not isinstance(settings, dict):
        return container

    if "classifier" in settings:
        container.classifier_config.override(
            providers.Singleton(ClassifierConfig, **settings["classifier"])
        )

    if "tenure" in settings:
        container.tenure_config.override(
            providers.Singleton(TenureMonitorConfig, **settings["tenure"])
        )

    if "audit" in settings:
        container.audit_config.override(providers.Singleton(AuditConfig, **settings["audit"]))

    if "stats" in settings:
        container.stats_config.override(providers.Singleton(StatsConfig, **settings["stats"]))

    if "linker" in settings:
        container.linker_config.override(
            providers.Singleton(LinkerConfig, **settings["linker"])
        )

    return container
