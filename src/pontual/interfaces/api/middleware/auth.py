"""Auth middleware - resolves the acting user from the Bearer token."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context. ``user_id`` is the matrícula."""

    user_id: str
    email: str | None = None


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.user.

    Requests without a valid token get ``req.context.user = None``; resources
    that need a user answer 401.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if user:
            req.context.user = RequestUser(user_id=user.matricula, email=user.email)
