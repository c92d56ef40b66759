"""Payment arithmetic shared by the financial use cases."""

from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID, uuid4

from pontual.domain.entities import Payment
from pontual.domain.exceptions import ValidationError

ZERO = Decimal("0")


def non_negative(value: Decimal | int | float | str, field: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} deve ser um número") from None
    if not amount.is_finite() or amount < ZERO:
        raise ValidationError(f"{field} deve ser um valor não negativo")
    return amount


def payment_snapshot(payment: Payment) -> dict[str, object]:
    return {
        "employee_id": str(payment.employee_id),
        "date": payment.date.isoformat(),
        "daily_rate": str(payment.daily_rate),
        "bonus": str(payment.bonus),
        "total": str(payment.total),
    }


async def upsert_payment(
    uow: object,
    employee_id: UUID,
    day: date,
    user_id: str,
    *,
    daily_rate: Decimal | None = None,
    bonus: Decimal | None = None,
    total: Decimal | None = None,
) -> Payment:
    """Write the day's payment. Fields left as None keep their stored value.

    The total is rate plus bonus unless given explicitly.
    """
    now = datetime.now(UTC)
    existing = await uow.payments.get_for_day(employee_id, day)
    rate = daily_rate if daily_rate is not None else (existing.daily_rate if existing else ZERO)
    day_bonus = bonus if bonus is not None else (existing.bonus if existing else ZERO)
    payment = Payment(
        id=existing.id if existing else uuid4(),
        employee_id=employee_id,
        date=day,
        daily_rate=rate,
        bonus=day_bonus,
        total=total if total is not None else rate + day_bonus,
        created_by=existing.created_by if existing else user_id,
        created_at=existing.created_at if existing else now,
        updated_at=now,
    )
    return await uow.payments.upsert(payment)
