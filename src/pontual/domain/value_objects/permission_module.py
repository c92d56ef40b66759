"""Functional modules covered by the permission schema."""

from enum import StrEnum


class PermissionModule(StrEnum):
    """Modules of the dashboard, each with its own set of action flags."""

    ATTENDANCE = "attendance"
    EMPLOYEES = "employees"
    REPORTS = "reports"
    FINANCIAL = "financial"
    C6PAYMENT = "c6payment"
    ERRORS = "errors"
    SETTINGS = "settings"
    USERS = "users"
    DATAMANAGEMENT = "datamanagement"
