from __future__ import annotations

from gurustatus.core import LinkerConfig, SchoolLinker
from gurustatus.schemas import SchoolRecord, TeacherRecord

SCHOOLS = [
    SchoolRecord(school_id="S-1", name="MTsS Ma'arif NU Cimanggu"),
    SchoolRecord(school_id="S-2", name="MI Ma'arif NU 01 Kroya"),
    SchoolRecord(school_id="S-3", name="SMP Ma'arif Majenang"),
]


def link_one(teacher: TeacherRecord, config: LinkerConfig | None = None):
    return SchoolLinker(config=config).link([teacher], SCHOOLS)[0]


def test_known_school_id_wins():
    result = link_one(TeacherRecord(teacher_id="T-1", school_id="S-2", unit="nama lama"))

    assert result.method == "id"
    assert result.school_name == "MI Ma'arif NU 01 Kroya"


def test_unit_name_matches_after_normalization():
    result = link_one(TeacherRecord(teacher_id="T-1", unit="mi maarif nu 01  kroya."))

    assert result.method == "fuzzy"
    assert result.school_id == "S-2"


def test_prefix_aliases_match():
    mts = link_one(TeacherRecord(unit="MTs Ma'arif NU Cimanggu"))
    smps = link_one(TeacherRecord(unit="SMPS Maarif Majenang"))

    assert (mts.method, mts.school_id) == ("fuzzy", "S-1")
    assert (smps.method, smps.school_id) == ("fuzzy", "S-3")


def test_similar_name_falls_back_to_similarity():
    result = link_one(TeacherRecord(unit="MI Maarif NU 1 Kroya"))

    assert result.method == "similar"
    assert result.school_id == "S-2"
    assert result.score is not None


def test_similarity_fallback_can_be_disabled():
    result = link_one(TeacherRecord(unit="MI Maarif NU 1 Kroya"), LinkerConfig(min_similarity=None))

    assert result.method == "unmatched"
    assert result.school_id is None


def test_dead_school_id_without_name_match():
    result = link_one(TeacherRecord(school_id="S-404", unit="Sekolah Lain"))

    assert result.method == "dead_id"
    assert result.school_id is None


def test_dead_school_id_recovered_by_name():
    result = link_one(TeacherRecord(school_id="S-404", unit="MI Ma'arif NU 01 Kroya"))

    assert result.method == "fuzzy"
    assert result.school_id == "S-2"
