"""PostgreSQL employee repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from pontual.domain.entities import Employee

_COLUMNS = "id, name, cpf, pix_key, pix_type, created_by, created_at"


def _row_to_employee(r: tuple) -> Employee:
    return Employee(
        id=r[0],
        name=r[1],
        cpf=r[2],
        pix_key=r[3],
        pix_type=r[4],
        created_by=r[5],
        created_at=r[6],
    )


class PostgresEmployeeRepository:
    """Employee repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, employee_id: UUID) -> Employee | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM employees WHERE id = %s",
            (employee_id,),
        )
        r = await cur.fetchone()
        return _row_to_employee(r) if r else None

    async def get_by_cpf(self, cpf: str, exclude_id: UUID | None = None) -> Employee | None:
        """Get employee by CPF digits, optionally ignoring one id."""
        if exclude_id:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE cpf = %s AND id <> %s",
                (cpf, exclude_id),
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE cpf = %s",
                (cpf,),
            )
        r = await cur.fetchone()
        return _row_to_employee(r) if r else None

    async def list(self) -> list[Employee]:
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
        return [_row_to_employee(r) for r in await cur.fetchall()]

    async def create(self, employee: Employee) -> Employee:
        await self._conn.execute(
            f"INSERT INTO employees ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                employee.id,
                employee.name,
                employee.cpf,
                employee.pix_key,
                employee.pix_type,
                employee.created_by,
                employee.created_at,
            ),
        )
        return employee

    async def update(self, employee: Employee) -> None:
        await self._conn.execute(
            "UPDATE employees SET name=%s, cpf=%s, pix_key=%s, pix_type=%s WHERE id=%s",
            (employee.name, employee.cpf, employee.pix_key, employee.pix_type, employee.id),
        )

    async def delete(self, employee_id: UUID) -> None:
        await self._conn.execute("DELETE FROM employees WHERE id = %s", (employee_id,))
