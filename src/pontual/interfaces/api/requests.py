"""Request helpers shared by API resources."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

import falcon
import falcon.asgi

from pontual.domain.exceptions import ValidationError
from pontual.interfaces.api.middleware.auth import RequestUser


def current_user(req: falcon.asgi.Request) -> RequestUser:
    """Authenticated user or 401."""
    user = getattr(req.context, "user", None)
    if not user:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    return user


def user_agent(req: falcon.asgi.Request) -> str | None:
    return req.get_header("User-Agent")


async def json_body(req: falcon.asgi.Request) -> dict[str, Any]:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")
    return body


def required(body: dict[str, Any], key: str) -> Any:
    if key not in body or body[key] is None:
        raise ValidationError(f"Campo obrigatório: {key}")
    return body[key]


def parse_uuid(value: Any, field: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"{field} inválido") from None


def parse_date(value: Any, field: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{field} deve estar no formato AAAA-MM-DD") from None


def parse_datetime(value: Any, field: str) -> datetime:
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{field} deve ser uma data ISO 8601") from None


def parse_decimal(value: Any, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field} deve ser um número")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} deve ser um número") from None


def optional_param(req: falcon.asgi.Request, name: str, parser: Any) -> Any:
    """Parse a query parameter with ``parser(value, name)``; None when absent."""
    value = req.get_param(name)
    if value is None or value == "":
        return None
    return parser(value, name)


def uuid_list(value: Any, field: str) -> list[UUID]:
    if not isinstance(value, list):
        raise ValidationError(f"{field} deve ser uma lista")
    return [parse_uuid(v, field) for v in value]
