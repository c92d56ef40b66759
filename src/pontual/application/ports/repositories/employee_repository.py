"""Employee repository port."""

from typing import Protocol
from uuid import UUID

from pontual.domain.entities import Employee


class EmployeeRepository(Protocol):
    """Port for employee persistence."""

    async def get_by_id(self, employee_id: UUID) -> Employee | None: ...

    async def get_by_cpf(
        self, cpf: str, exclude_id: UUID | None = None
    ) -> Employee | None: ...

    async def list(self) -> list[Employee]: ...

    async def create(self, employee: Employee) -> Employee: ...

    async def update(self, employee: Employee) -> None: ...

    async def delete(self, employee_id: UUID) -> None: ...
