"""Error record API resources."""

import falcon
import falcon.asgi

from pontual.application.use_cases.error_record.manage_error_records import (
    CreateErrorRecordUseCase,
    DeleteErrorRecordUseCase,
    ListErrorRecordsUseCase,
    UpdateErrorRecordUseCase,
)
from pontual.domain.exceptions import ValidationError
from pontual.interfaces.api.requests import (
    current_user,
    json_body,
    optional_param,
    parse_date,
    parse_uuid,
    required,
)
from pontual.interfaces.api.serializers import error_record_to_dict


def _error_count(body: dict) -> int:
    value = required(body, "error_count")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("error_count deve ser um número inteiro")
    return value


class ErrorRecordsResource:
    """GET/POST /v1/error-records."""

    def __init__(
        self,
        list_records: ListErrorRecordsUseCase,
        create_record: CreateErrorRecordUseCase,
    ) -> None:
        self._list = list_records
        self._create = create_record

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        records = await self._list.execute(
            user.user_id,
            start=optional_param(req, "start", parse_date),
            end=optional_param(req, "end", parse_date),
            employee_id=optional_param(req, "employee_id", parse_uuid),
        )
        resp.media = {"items": [error_record_to_dict(r) for r in records]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        record = await self._create.execute(
            user.user_id,
            parse_uuid(required(body, "employee_id"), "employee_id"),
            parse_date(required(body, "date"), "date"),
            _error_count(body),
            observations=body.get("observations"),
        )
        resp.media = error_record_to_dict(record)
        resp.status = falcon.HTTP_201


class ErrorRecordResource:
    """PUT/DELETE /v1/error-records/{record_id}."""

    def __init__(
        self,
        update_record: UpdateErrorRecordUseCase,
        delete_record: DeleteErrorRecordUseCase,
    ) -> None:
        self._update = update_record
        self._delete = delete_record

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, record_id: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        record = await self._update.execute(
            user.user_id,
            parse_uuid(record_id, "record_id"),
            _error_count(body),
            observations=body.get("observations"),
        )
        resp.media = error_record_to_dict(record)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, record_id: str
    ) -> None:
        user = current_user(req)
        await self._delete.execute(user.user_id, parse_uuid(record_id, "record_id"))
        resp.status = falcon.HTTP_204
