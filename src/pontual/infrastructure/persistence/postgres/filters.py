"""SQL condition building for filtered list queries."""


def build_where(filters: list[tuple[str, object]]) -> tuple[str, list[object]]:
    """Turn ``(condition, value)`` pairs into a WHERE clause and params.

    Pairs whose value is None are skipped. Each condition holds exactly one
    ``%s`` placeholder.
    """
    conditions: list[str] = []
    params: list[object] = []
    for condition, value in filters:
        if value is None:
            continue
        conditions.append(condition)
        params.append(value)
    if not conditions:
        return "", params
    return " WHERE " + " AND ".join(conditions), params


def limit_clause(limit: int | None, params: list[object]) -> str:
    if not limit:
        return ""
    params.append(limit)
    return " LIMIT %s"


def enum_value(member: object | None) -> str | None:
    """Enum members are bound by value; psycopg would otherwise dump their name."""
    return member.value if member is not None else None
