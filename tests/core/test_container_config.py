from __future__ import annotations

from pathlib import Path

from gurustatus.config import ConfigManager
from gurustatus.container import create_container
from gurustatus.schemas import load_config


def test_create_container_defaults():
    container = create_container()

    assert container.tenure_monitor().config.term_length_years == 4
    assert container.tenure_monitor().config.term_limit == 3
    assert container.classifier()._config.permanent_after_years == 2.0
    assert container.dashboard_stats()._classifier is container.classifier()


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "classifier": {"permanent_after_years": 3.0},
            "tenure": {"term_length_years": 5, "term_limit": 2, "threshold_days": 180},
            "audit": {"min_age": 20},
            "stats": {"top_units": 3},
            "linker": {"min_similarity": None},
        }
    )

    assert container.classifier()._config.permanent_after_years == 3.0
    tenure = container.tenure_monitor().config
    assert (tenure.term_length_years, tenure.term_limit, tenure.threshold_days) == (5, 2, 180)
    assert container.auditor()._config.min_age == 20
    assert container.auditor()._config.max_age == 75
    assert container.dashboard_stats()._config.top_units == 3
    assert container.linker()._config.min_similarity is None


def test_config_manager_reads_yaml(tmp_path: Path):
    (tmp_path / "cilacap.yaml").write_text(
        "tenure:\n  threshold_days: 90\nstats:\n  valid_kecamatan: [Kroya, Maos]\n",
        encoding="utf-8",
    )

    raw = ConfigManager.read(tmp_path / "cilacap.yaml")
    settings = load_config(raw).to_settings()

    assert settings == {
        "tenure": {"threshold_days": 90},
        "stats": {"valid_kecamatan": ["Kroya", "Maos"]},
    }


def test_config_manager_treats_empty_file_as_empty_mapping(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert ConfigManager.read(path) == {}
