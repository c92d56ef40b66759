"""Attendance API resources."""

import falcon
import falcon.asgi

from pontual.application.dto.attendance_input import AttendanceMark
from pontual.application.use_cases.attendance.bulk_mark_attendance import (
    BulkMarkAttendanceUseCase,
)
from pontual.application.use_cases.attendance.list_attendance import ListAttendanceUseCase
from pontual.application.use_cases.attendance.mark_attendance import MarkAttendanceUseCase
from pontual.application.use_cases.attendance.reset_attendance import ResetAttendanceUseCase
from pontual.application.use_cases.attendance.update_exit_time import UpdateExitTimeUseCase
from pontual.domain.exceptions import ValidationError
from pontual.domain.value_objects import AttendanceStatus
from pontual.interfaces.api.requests import (
    current_user,
    json_body,
    optional_param,
    parse_date,
    parse_uuid,
    required,
)
from pontual.interfaces.api.serializers import attendance_to_dict


def _status(value: object) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value))
    except ValueError:
        raise ValidationError("status deve ser 'present' ou 'absent'") from None


def _mark(item: object) -> AttendanceMark:
    if not isinstance(item, dict):
        raise ValidationError("Cada marcação deve ser um objeto")
    return AttendanceMark(
        employee_id=parse_uuid(required(item, "employee_id"), "employee_id"),
        date=parse_date(required(item, "date"), "date"),
        status=_status(required(item, "status")),
        exit_time=item.get("exit_time"),
    )


class AttendanceResource:
    """GET/POST/DELETE /v1/attendance.

    GET lists by range, POST marks one employee, DELETE ``?date=`` resets a day.
    """

    def __init__(
        self,
        list_attendance: ListAttendanceUseCase,
        mark_attendance: MarkAttendanceUseCase,
        reset_attendance: ResetAttendanceUseCase,
    ) -> None:
        self._list = list_attendance
        self._mark = mark_attendance
        self._reset = reset_attendance

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        status = req.get_param("status")
        items = await self._list.execute(
            user.user_id,
            start=optional_param(req, "start", parse_date),
            end=optional_param(req, "end", parse_date),
            employee_id=optional_param(req, "employee_id", parse_uuid),
            status=_status(status) if status else None,
        )
        resp.media = {"items": [attendance_to_dict(a) for a in items]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        attendance = await self._mark.execute(user.user_id, _mark(await json_body(req)))
        resp.media = attendance_to_dict(attendance)
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        day = optional_param(req, "date", parse_date)
        if day is None:
            raise ValidationError("Parâmetro obrigatório: date")
        deleted = await self._reset.execute(user.user_id, day)
        resp.media = {"deleted": deleted}
        resp.status = falcon.HTTP_200


class AttendanceBulkResource:
    """POST /v1/attendance/bulk - many marks, partial success reported."""

    def __init__(self, bulk_mark: BulkMarkAttendanceUseCase) -> None:
        self._bulk_mark = bulk_mark

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        items = required(body, "items")
        if not isinstance(items, list):
            raise ValidationError("items deve ser uma lista")
        result = await self._bulk_mark.execute(user.user_id, [_mark(i) for i in items])
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class AttendanceExitTimeResource:
    """PUT /v1/attendance/{attendance_id}/exit-time."""

    def __init__(self, update_exit_time: UpdateExitTimeUseCase) -> None:
        self._update = update_exit_time

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, attendance_id: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        attendance = await self._update.execute(
            user.user_id,
            parse_uuid(attendance_id, "attendance_id"),
            body.get("exit_time"),
        )
        resp.media = attendance_to_dict(attendance)
        resp.status = falcon.HTTP_200
