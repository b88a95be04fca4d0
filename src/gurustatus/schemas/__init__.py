"""Pydantic schema definitions for exported records and configuration."""

from __future__ import annotations

from .config import AppConfig, load_config
from .teacher import SchoolRecord, TeacherRecord

__all__ = [
    "AppConfig",
    "SchoolRecord",
    "TeacherRecord",
    "load_config",
]
