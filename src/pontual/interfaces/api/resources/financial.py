"""Payment and bonus API resources."""

from datetime import date

import falcon
import falcon.asgi

from pontual.application.use_cases.financial.apply_bonus import ApplyBonusUseCase
from pontual.application.use_cases.financial.apply_bulk_daily_rate import (
    ApplyBulkDailyRateUseCase,
)
from pontual.application.use_cases.financial.apply_error_discounts import (
    ApplyErrorDiscountsUseCase,
)
from pontual.application.use_cases.financial.clear_payments import ClearPaymentsUseCase
from pontual.application.use_cases.financial.delete_payment import DeletePaymentUseCase
from pontual.application.use_cases.financial.list_payments import ListPaymentsUseCase
from pontual.application.use_cases.financial.remove_bonus import (
    RemoveBonusBulkUseCase,
    RemoveBonusUseCase,
)
from pontual.application.use_cases.financial.set_daily_rate import SetDailyRateUseCase
from pontual.interfaces.api.requests import (
    current_user,
    json_body,
    optional_param,
    parse_date,
    parse_decimal,
    parse_uuid,
    required,
    uuid_list,
)
from pontual.interfaces.api.serializers import payment_to_dict


def _optional_date(body: dict, key: str) -> date | None:
    value = body.get(key)
    return parse_date(value, key) if value else None


class PaymentsResource:
    """GET/POST /v1/payments - list payments, set one employee's daily rate."""

    def __init__(
        self,
        list_payments: ListPaymentsUseCase,
        set_daily_rate: SetDailyRateUseCase,
    ) -> None:
        self._list = list_payments
        self._set_daily_rate = set_daily_rate

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        payments = await self._list.execute(
            user.user_id,
            start=optional_param(req, "start", parse_date),
            end=optional_param(req, "end", parse_date),
            employee_id=optional_param(req, "employee_id", parse_uuid),
        )
        resp.media = {"items": [payment_to_dict(p) for p in payments]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        bonus = body.get("bonus")
        payment = await self._set_daily_rate.execute(
            user.user_id,
            parse_uuid(required(body, "employee_id"), "employee_id"),
            parse_date(required(body, "date"), "date"),
            parse_decimal(required(body, "daily_rate"), "daily_rate"),
            bonus=parse_decimal(bonus, "bonus") if bonus is not None else None,
        )
        resp.media = payment_to_dict(payment)
        resp.status = falcon.HTTP_200


class PaymentResource:
    """DELETE /v1/payments/{payment_id}."""

    def __init__(self, delete_payment: DeletePaymentUseCase) -> None:
        self._delete = delete_payment

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, payment_id: str
    ) -> None:
        user = current_user(req)
        await self._delete.execute(user.user_id, parse_uuid(payment_id, "payment_id"))
        resp.status = falcon.HTTP_204


class BulkDailyRateResource:
    """POST /v1/payments/bulk-rate - same rate for many employees' present days."""

    def __init__(self, apply_bulk_rate: ApplyBulkDailyRateUseCase) -> None:
        self._apply = apply_bulk_rate

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        result = await self._apply.execute(
            user.user_id,
            uuid_list(required(body, "employee_ids"), "employee_ids"),
            parse_decimal(required(body, "daily_rate"), "daily_rate"),
            start=_optional_date(body, "start"),
            end=_optional_date(body, "end"),
        )
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class ClearPaymentsResource:
    """POST /v1/payments/clear."""

    def __init__(self, clear_payments: ClearPaymentsUseCase) -> None:
        self._clear = clear_payments

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        result = await self._clear.execute(
            user.user_id,
            uuid_list(required(body, "employee_ids"), "employee_ids"),
            start=_optional_date(body, "start"),
            end=_optional_date(body, "end"),
        )
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class ErrorDiscountsResource:
    """POST /v1/payments/discounts - deduct per recorded error."""

    def __init__(self, apply_discounts: ApplyErrorDiscountsUseCase) -> None:
        self._apply = apply_discounts

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        result = await self._apply.execute(
            user.user_id,
            uuid_list(required(body, "employee_ids"), "employee_ids"),
            parse_decimal(required(body, "discount_value"), "discount_value"),
            start=_optional_date(body, "start"),
            end=_optional_date(body, "end"),
        )
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class BonusesResource:
    """POST /v1/bonuses - apply a bonus to everyone present on a day."""

    def __init__(self, apply_bonus: ApplyBonusUseCase) -> None:
        self._apply = apply_bonus

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        result = await self._apply.execute(
            user.user_id,
            parse_date(required(body, "date"), "date"),
            parse_decimal(required(body, "amount"), "amount"),
        )
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class DayBonusResource:
    """DELETE /v1/bonuses/{day} - remove a day's bonus from everyone."""

    def __init__(self, remove_bonus_bulk: RemoveBonusBulkUseCase) -> None:
        self._remove = remove_bonus_bulk

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, day: str
    ) -> None:
        user = current_user(req)
        updated = await self._remove.execute(user.user_id, parse_date(day, "date"))
        resp.media = {"updated": updated}
        resp.status = falcon.HTTP_200


class EmployeeBonusResource:
    """DELETE /v1/bonuses/{day}/{employee_id}."""

    def __init__(self, remove_bonus: RemoveBonusUseCase) -> None:
        self._remove = remove_bonus

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        day: str,
        employee_id: str,
    ) -> None:
        user = current_user(req)
        payment = await self._remove.execute(
            user.user_id, parse_date(day, "date"), parse_uuid(employee_id, "employee_id")
        )
        resp.media = payment_to_dict(payment)
        resp.status = falcon.HTTP_200
