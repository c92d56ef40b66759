"""Permission model: closed schema, presets, merge policy and check."""

from pontual.domain.permissions.policy import (
    NO_CHANGES_SUMMARY,
    PERMISSIONS_CREATED_SUMMARY,
    has_permission,
    merge_with_defaults,
    summarize_changes,
)
from pontual.domain.permissions.presets import (
    DEFAULT_SUPER_ADMIN_ID,
    STORAGE_FALLBACK_PRESET,
    UI_NEW_USER_PRESET,
    preset,
)
from pontual.domain.permissions.schema import (
    PERMISSION_LABELS,
    PERMISSION_SCHEMA,
    PermissionSet,
    all_permission_keys,
    schema_violation,
)

__all__ = [
    "DEFAULT_SUPER_ADMIN_ID",
    "NO_CHANGES_SUMMARY",
    "PERMISSIONS_CREATED_SUMMARY",
    "PERMISSION_LABELS",
    "PERMISSION_SCHEMA",
    "PermissionSet",
    "STORAGE_FALLBACK_PRESET",
    "UI_NEW_USER_PRESET",
    "all_permission_keys",
    "has_permission",
    "merge_with_defaults",
    "preset",
    "schema_violation",
    "summarize_changes",
]
