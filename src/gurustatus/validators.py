"""Phone number and NIK validation for teacher contact data."""

from __future__ import annotations

import re
from dataclasses import dataclass

# First two digits of a NIK identify the province.
PROVINCE_CODES: dict[str, str] = {
    "11": "Aceh",
    "12": "Sumatera Utara",
    "13": "Sumatera Barat",
    "14": "Riau",
    "15": "Jambi",
    "16": "Sumatera Selatan",
    "17": "Bengkulu",
    "18": "Lampung",
    "19": "Kepulauan Bangka Belitung",
    "21": "Kepulauan Riau",
    "31": "DKI Jakarta",
    "32": "Jawa Barat",
    "33": "Jawa Tengah",
    "34": "DI Yogyakarta",
    "35": "Jawa Timur",
    "36": "Banten",
    "51": "Bali",
    "52": "Nusa Tenggara Barat",
    "53": "Nusa Tenggara Timur",
    "61": "Kalimantan Barat",
    "62": "Kalimantan Tengah",
    "63": "Kalimantan Selatan",
    "64": "Kalimantan Timur",
    "65": "Kalimantan Utara",
    "71": "Sulawesi Utara",
    "72": "Sulawesi Tengah",
    "73": "Sulawesi Selatan",
    "74": "Sulawesi Tenggara",
    "75": "Gorontalo",
    "76": "Sulawesi Barat",
    "81": "Maluku",
    "82": "Maluku Utara",
    "91": "Papua Barat",
    "94": "Papua",
}

_NON_DIGIT = re.compile(r"\D")
_PHONE_PATTERN = re.compile(r"08[0-9]{8,11}")
_NIK_PATTERN = re.compile(r"[0-9]{16}")


@dataclass(frozen=True, slots=True)
class PhoneValidation:
    is_valid: bool
    normalized: str
    error: str | None = None


@dataclass(frozen=True, slots=True)
class NikValidation:
    """NIK problems are reported as warnings and never block a record."""

    is_valid: bool = True
    warning: str | None = None
    province: str | None = None


def normalize_phone_number(phone: str | None) -> str:
    """Strip formatting and convert a ``62`` country prefix to a leading ``0``."""
    if not phone:
        return ""
    cleaned = _NON_DIGIT.sub("", phone)
    if cleaned.startswith("62"):
        cleaned = "0" + cleaned[2:]
    return cleaned


def validate_phone_number(phone: str | None) -> PhoneValidation:
    """Accept 08xxx, +62xxx and 62xxx; normalize to 08xxxxxxxxxx."""
    if not phone:
        return PhoneValidation(is_valid=False, normalized="", error="Nomor HP wajib diisi")

    cleaned = normalize_phone_number(phone)
    if not _PHONE_PATTERN.fullmatch(cleaned):
        return PhoneValidation(
            is_valid=False,
            normalized=cleaned,
            error="Format harus 08xxxxxxxxxx (10-13 digit)",
        )
    return PhoneValidation(is_valid=True, normalized=cleaned)


def is_valid_phone_number(phone: str | None) -> bool:
    return validate_phone_number(phone).is_valid


def validate_nik(nik: str | None) -> NikValidation:
    if not nik:
        return NikValidation(warning="NIK kosong")
    if not _NIK_PATTERN.fullmatch(nik):
        return NikValidation(warning="NIK harus 16 digit angka")

    province_code = nik[:2]
    province = PROVINCE_CODES.get(province_code)
    if province is None:
        return NikValidation(warning=f"Kode provinsi {province_code} tidak valid")
    return NikValidation(province=province)


__all__ = [
    "NikValidation",
    "PhoneValidation",
    "PROVINCE_CODES",
    "is_valid_phone_number",
    "normalize_phone_number",
    "validate_nik",
    "validate_phone_number",
]
