"""Employee API resources."""

import falcon
import falcon.asgi

from pontual.application.dto.employee_input import EmployeeInput
from pontual.application.use_cases.employee.create_employee import CreateEmployeeUseCase
from pontual.application.use_cases.employee.delete_employee import DeleteEmployeeUseCase
from pontual.application.use_cases.employee.import_employees import ImportEmployeesUseCase
from pontual.application.use_cases.employee.list_employees import ListEmployeesUseCase
from pontual.application.use_cases.employee.update_employee import UpdateEmployeeUseCase
from pontual.domain.exceptions import ValidationError
from pontual.infrastructure.spreadsheets.employee_sheet import read_employee_rows
from pontual.interfaces.api.requests import current_user, json_body, parse_uuid, required
from pontual.interfaces.api.serializers import employee_to_dict


def _employee_input(body: dict) -> EmployeeInput:
    return EmployeeInput(
        name=str(required(body, "name")),
        cpf=str(required(body, "cpf")),
        pix_key=body.get("pix_key"),
        pix_type=body.get("pix_type"),
    )


class EmployeesResource:
    """GET/POST /v1/employees - list and create employees."""

    def __init__(
        self,
        list_employees: ListEmployeesUseCase,
        create_employee: CreateEmployeeUseCase,
    ) -> None:
        self._list = list_employees
        self._create = create_employee

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        employees = await self._list.execute(user.user_id)
        resp.media = {"items": [employee_to_dict(e) for e in employees]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        employee = await self._create.execute(user.user_id, _employee_input(body))
        resp.media = employee_to_dict(employee)
        resp.status = falcon.HTTP_201


class EmployeeResource:
    """PUT/DELETE /v1/employees/{employee_id}."""

    def __init__(
        self,
        update_employee: UpdateEmployeeUseCase,
        delete_employee: DeleteEmployeeUseCase,
    ) -> None:
        self._update = update_employee
        self._delete = delete_employee

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, employee_id: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        employee = await self._update.execute(
            user.user_id, parse_uuid(employee_id, "employee_id"), _employee_input(body)
        )
        resp.media = employee_to_dict(employee)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, employee_id: str
    ) -> None:
        user = current_user(req)
        await self._delete.execute(user.user_id, parse_uuid(employee_id, "employee_id"))
        resp.status = falcon.HTTP_204


class EmployeeImportResource:
    """POST /v1/employees/import - xlsx upload, raw body or multipart ``file`` part."""

    def __init__(self, import_employees: ImportEmployeesUseCase) -> None:
        self._import = import_employees

    async def _read_upload(self, req: falcon.asgi.Request) -> bytes:
        content_type = req.content_type or ""
        if "multipart/form-data" not in content_type:
            return await req.stream.read()
        form = await req.get_media()
        async for part in form:
            if part.name == "file":
                return bytes(await part.get_data())
        return b""

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        data = await self._read_upload(req)
        if not data:
            raise ValidationError("Arquivo xlsx é obrigatório")
        rows = read_employee_rows(data)
        result = await self._import.execute(user.user_id, rows)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200
