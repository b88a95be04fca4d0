"""Pydantic models for exported teacher and school documents."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_TRUE_FLAGS = {"true", "1", "ya", "yes", "y", "sudah"}
_FALSE_FLAGS = {"false", "0", "tidak", "no", "n", "belum"}


def _coerce_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    return None


def _coerce_flag(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_FLAGS:
            return True
        if normalized in _FALSE_FLAGS:
            return False
    return None


class TeacherRecord(BaseModel):
    """Teacher document as stored by the records system.

    None of the fields are guaranteed; free-text values are kept verbatim and
    interpreted by the rule engines.
    """

    teacher_id: str | None = Field(
        default=None, validation_alias=AliasChoices("teacher_id", "_id", "id")
    )
    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "nama"))
    raw_status: str | None = Field(
        default=None, validation_alias=AliasChoices("raw_status", "status")
    )
    education_level: str | None = Field(
        default=None,
        validation_alias=AliasChoices("education_level", "pendidikanTerakhir"),
    )
    tenure_start: str | None = Field(
        default=None, validation_alias=AliasChoices("tenure_start", "tmt")
    )
    position: str | None = Field(
        default=None, validation_alias=AliasChoices("position", "mapel")
    )
    title: str | None = Field(default=None, validation_alias=AliasChoices("title", "jabatan"))
    unit: str | None = Field(default=None, validation_alias=AliasChoices("unit", "unitKerja"))
    kecamatan: str | None = None
    nuptk: str | None = None
    nik: str | None = None
    birth_place: str | None = Field(
        default=None, validation_alias=AliasChoices("birth_place", "tempatLahir")
    )
    birth_date: str | None = Field(
        default=None, validation_alias=AliasChoices("birth_date", "tanggalLahir")
    )
    phone: str | None = Field(
        default=None, validation_alias=AliasChoices("phone", "phoneNumber")
    )
    is_certified: bool | None = Field(
        default=None, validation_alias=AliasChoices("is_certified", "isCertified")
    )
    is_active: bool | None = Field(
        default=None, validation_alias=AliasChoices("is_active", "isActive")
    )
    school_id: str | None = Field(
        default=None, validation_alias=AliasChoices("school_id", "schoolId")
    )

    model_config = ConfigDict(extra="allow")

    @field_validator(
        "teacher_id",
        "name",
        "raw_status",
        "education_level",
        "tenure_start",
        "position",
        "title",
        "unit",
        "kecamatan",
        "nuptk",
        "nik",
        "birth_place",
        "birth_date",
        "phone",
        "school_id",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return _coerce_text(value)

    @field_validator("is_certified", "is_active", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool | None:
        return _coerce_flag(value)


class SchoolRecord(BaseModel):
    """School master-data document."""

    school_id: str | None = Field(
        default=None, validation_alias=AliasChoices("school_id", "_id", "id")
    )
    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "nama"))
    nsm: str | None = None
    npsn: str | None = None
    kecamatan: str | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("school_id", "name", "nsm", "npsn", "kecamatan", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return _coerce_text(value)
