"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from pontual.application.services import (
    AuditLogService,
    ErrorTrackingService,
    MonitoringConfig,
    PermissionChangeLog,
    PermissionStore,
)
from pontual.infrastructure.permission.permission_checker import StoredPermissionChecker
from pontual.interfaces.api.app import create_app
from pontual.interfaces.api.middleware.auth import RequestUser
from pontual.main import build_resources

SUPER_ADMIN = "9999"


class AuthBypassMiddleware:
    """Middleware that sets context.user from the X-Test-User header."""

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User")
        req.context.user = (
            RequestUser(user_id=user_id, email=f"{user_id}@example.com") if user_id else None
        )


@pytest.fixture
def store(uow_factory) -> PermissionStore:
    return PermissionStore(uow_factory, PermissionChangeLog(uow_factory))


@pytest.fixture
def app(uow_factory, store, clock):
    """Falcon ASGI app wired like production, over the in-memory UoW.

    Permissions are real: the super admin may do anything, other users get
    whatever the store holds for them.
    """
    monitoring = MonitoringConfig()
    audit = AuditLogService(uow_factory, monitoring)
    error_tracking = ErrorTrackingService(uow_factory, monitoring, debounce_seconds=0)
    resources = build_resources(
        uow_factory,
        StoredPermissionChecker(store),
        store,
        audit,
        error_tracking,
        monitoring,
        clock,
    )
    return create_app(resources, error_tracking, middleware=[AuthBypassMiddleware()])


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client acting as the super admin."""
    return TestClient(app, headers={"X-Test-User": SUPER_ADMIN})
