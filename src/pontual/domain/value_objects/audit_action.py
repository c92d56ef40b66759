"""Audit log action kinds."""

from enum import StrEnum


class AuditAction(StrEnum):
    """Kinds of actions recorded in the audit log."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    VIEW = "view"
    EXPORT = "export"
    IMPORT = "import"
    LOGIN = "login"
    LOGOUT = "logout"
    BULK_ACTION = "bulk_action"
