"""Named permission presets."""

from enum import StrEnum


class PresetName(StrEnum):
    """Canonical permission templates."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    READONLY = "readonly"
