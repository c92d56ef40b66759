"""Merge policy, authorization check and change summaries.

This is the only place where permission strings are split and looked up.
All three functions are pure and never raise.
"""

from collections.abc import Mapping

from pontual.domain.permissions.presets import STORAGE_FALLBACK_PRESET, preset
from pontual.domain.permissions.schema import PERMISSION_SCHEMA, PermissionSet

PERMISSIONS_CREATED_SUMMARY = "Permissions created"
NO_CHANGES_SUMMARY = "No changes"


def merge_with_defaults(stored: Mapping | None) -> PermissionSet:
    """Fill a possibly partial stored set up to the full schema.

    Missing modules and actions take the supervisor preset's value. Keys the
    schema does not define and non-boolean values are ignored.
    """
    merged = preset(STORAGE_FALLBACK_PRESET)
    if not isinstance(stored, Mapping):
        return merged

    for module, actions in PERMISSION_SCHEMA.items():
        stored_module = stored.get(module.value)
        if not isinstance(stored_module, Mapping):
            continue
        for action in actions:
            value = stored_module.get(action)
            if isinstance(value, bool):
                merged[module.value][action] = value
    return merged


def has_permission(permissions: Mapping | None, permission: str) -> bool:
    """Return True only if ``permission`` ("module.action") is granted."""
    if not permissions or not isinstance(permission, str):
        return False

    module, _, action = permission.partition(".")
    if not module or not action:
        return False

    if not isinstance(permissions, Mapping):
        return False
    module_permissions = permissions.get(module)
    if not isinstance(module_permissions, Mapping):
        return False

    return module_permissions.get(action) is True


def summarize_changes(before: Mapping | None, after: Mapping) -> str:
    """Describe which flags flipped between two permission sets."""
    if before is None:
        return PERMISSIONS_CREATED_SUMMARY

    changes: list[str] = []
    for module, actions in after.items():
        if not isinstance(actions, Mapping):
            continue
        before_module = before.get(module)
        if not isinstance(before_module, Mapping):
            before_module = {}
        for action, value in actions.items():
            if action in before_module and before_module[action] == value:
                continue
            status = "ativada" if value else "desativada"
            changes.append(f"{module}.{action} {status}")

    return ", ".join(changes) if changes else NO_CHANGES_SUMMARY
