"""Keycloak OIDC provider for token validation."""

from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from pontual.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token. ``matricula`` is the dashboard user id."""

    subject: str
    matricula: str
    email: str | None
    realm_roles: list[str]


class KeycloakProvider:
    """Keycloak OIDC - introspects tokens and extracts user info."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token; None when inactive or the identity provider fails."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("token_introspection_failed", error=str(e))
            return None
        if not token_info.get("active"):
            return None
        matricula = token_info.get("preferred_username")
        if not matricula:
            return None
        return OIDCUser(
            subject=token_info.get("sub", ""),
            matricula=matricula,
            email=token_info.get("email"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
