"""Name normalization helpers for schools and districts."""

from __future__ import annotations

import re
from typing import Sequence

from rapidfuzz import fuzz

# Kecamatan of Kabupaten Cilacap, the default service area.
DEFAULT_KECAMATAN: tuple[str, ...] = (
    "Adipala",
    "Bantarsari",
    "Binangun",
    "Cilacap Selatan",
    "Cilacap Tengah",
    "Cilacap Utara",
    "Cimanggu",
    "Cipari",
    "Dayeuhluhur",
    "Gandrungmangu",
    "Jeruklegi",
    "Kampung Laut",
    "Karangpucung",
    "Kawunganten",
    "Kedungreja",
    "Kesugihan",
    "Kroya",
    "Majenang",
    "Maos",
    "Nusawungu",
    "Patimuan",
    "Sampang",
    "Sidareja",
    "Wanareja",
)

_PUNCTUATION = re.compile(r"['\"`.,()-]")
_WHITESPACE = re.compile(r"\s+")
_KECAMATAN_PREFIX = re.compile(r"kec\.|kecamatan")

_SCHOOL_PREFIX_ALIASES: tuple[tuple[str, str], ...] = (
    ("mtss ", "mts "),
    ("mts ", "mtss "),
    ("smp ", "smps "),
)


def title_case(text: str | None) -> str:
    """Lowercase ``text`` and capitalise the first letter of every word."""
    if not text:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))


def fuzzy_key(name: str | None) -> str:
    """Comparison key: lowercase, no punctuation, single spaces."""
    if not name:
        return ""
    key = _PUNCTUATION.sub("", name.lower())
    return _WHITESPACE.sub(" ", key).strip()


def school_key_variants(name: str | None) -> list[str]:
    """The fuzzy key of ``name`` plus keys for common prefix spellings."""
    key = fuzzy_key(name)
    if not key:
        return []
    variants = [key]
    for prefix, replacement in _SCHOOL_PREFIX_ALIASES:
        if key.startswith(prefix):
            variants.append(replacement + key[len(prefix):])
    return variants


def match_kecamatan(
    value: str | None,
    valid: Sequence[str] = DEFAULT_KECAMATAN,
    *,
    min_similarity: float = 85.0,
) -> str | None:
    """Return the canonical kecamatan for a free-text value, if one is close enough."""
    if not value:
        return None
    needle = _KECAMATAN_PREFIX.sub("", value.lower(), count=1).strip()
    if not needle:
        return None

    for candidate in valid:
        lowered = candidate.lower()
        if lowered == needle or needle in lowered or lowered in needle:
            return candidate

    best: str | None = None
    best_score = 0.0
    for candidate in valid:
        score = fuzz.ratio(needle, candidate.lower())
        if score >= min_similarity and score > best_score:
            best, best_score = candidate, score
    return best

