"""Session audit resource."""

import falcon
import falcon.asgi

from pontual.application.services import AuditLogService
from pontual.interfaces.api.requests import current_user


class SessionResource:
    """POST/DELETE /v1/session - record sign-in and sign-out in the audit log.

    Tokens are issued by the identity provider; this only leaves the trail.
    """

    def __init__(self, audit: AuditLogService) -> None:
        self._audit = audit

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        await self._audit.log_login(user.user_id)
        resp.media = {"user_id": user.user_id, "email": user.email}
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        await self._audit.log_logout(user.user_id)
        resp.status = falcon.HTTP_204
