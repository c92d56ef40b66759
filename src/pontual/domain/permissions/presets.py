"""Canonical permission presets."""

from copy import deepcopy

from pontual.domain.permissions.schema import PERMISSION_SCHEMA, PermissionSet
from pontual.domain.value_objects import PermissionModule, PresetName

# Matrícula of the built-in administrator. Never looked up in storage.
DEFAULT_SUPER_ADMIN_ID = "9999"


def _grant(module: PermissionModule, *granted: str) -> dict[str, bool]:
    return {action: action in granted for action in PERMISSION_SCHEMA[module]}


_ADMIN: PermissionSet = {
    module.value: _grant(module, *actions) for module, actions in PERMISSION_SCHEMA.items()
}

_SUPERVISOR: PermissionSet = {
    "attendance": _grant(
        PermissionModule.ATTENDANCE, "view", "mark", "search", "viewHistory", "editHistory"
    ),
    "employees": _grant(PermissionModule.EMPLOYEES, "view", "create", "edit", "import"),
    "reports": _grant(
        PermissionModule.REPORTS, "view", "generate", "exportExcel", "exportPDF"
    ),
    "financial": _grant(
        PermissionModule.FINANCIAL,
        "view",
        "viewPayments",
        "editBonus",
        "applyBonus",
        "removeBonus",
    ),
    "c6payment": _grant(PermissionModule.C6PAYMENT, "view", "generate", "export"),
    "errors": _grant(PermissionModule.ERRORS, "view", "create", "edit", "viewStats"),
    "settings": _grant(PermissionModule.SETTINGS),
    "users": _grant(PermissionModule.USERS),
    "datamanagement": _grant(PermissionModule.DATAMANAGEMENT),
}

_READONLY: PermissionSet = {
    "attendance": _grant(PermissionModule.ATTENDANCE, "view", "search", "viewHistory"),
    "employees": _grant(PermissionModule.EMPLOYEES, "view"),
    "reports": _grant(
        PermissionModule.REPORTS, "view", "generate", "exportExcel", "exportPDF"
    ),
    "financial": _grant(PermissionModule.FINANCIAL, "view", "viewPayments"),
    "c6payment": _grant(PermissionModule.C6PAYMENT, "view"),
    "errors": _grant(PermissionModule.ERRORS, "view", "viewStats"),
    "settings": _grant(PermissionModule.SETTINGS),
    "users": _grant(PermissionModule.USERS),
    "datamanagement": _grant(PermissionModule.DATAMANAGEMENT),
}

_PRESETS: dict[PresetName, PermissionSet] = {
    PresetName.ADMIN: _ADMIN,
    PresetName.SUPERVISOR: _SUPERVISOR,
    PresetName.READONLY: _READONLY,
}

# Starting point of the permission editor for a user with no stored row.
UI_NEW_USER_PRESET = PresetName.READONLY

# What the merge policy falls back to when nothing is stored.
STORAGE_FALLBACK_PRESET = PresetName.SUPERVISOR


def preset(name: PresetName | str) -> PermissionSet:
    """Return a fresh copy of the named preset."""
    return deepcopy(_PRESETS[PresetName(name)])
