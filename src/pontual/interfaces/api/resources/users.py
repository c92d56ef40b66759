"""User API resources."""

import falcon
import falcon.asgi

from pontual.application.use_cases.user.manage_users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
)
from pontual.interfaces.api.requests import current_user, json_body, required
from pontual.interfaces.api.serializers import user_to_dict


class UsersResource:
    """GET/POST /v1/users - list and create supervisors."""

    def __init__(
        self, list_users: ListUsersUseCase, create_user: CreateUserUseCase
    ) -> None:
        self._list = list_users
        self._create = create_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        users = await self._list.execute(user.user_id)
        resp.media = {"items": [user_to_dict(u) for u in users]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        created = await self._create.execute(
            user.user_id,
            str(required(body, "id")),
            email=body.get("email"),
            permissions=body.get("permissions"),
        )
        resp.media = user_to_dict(created)
        resp.status = falcon.HTTP_201


class UserResource:
    """DELETE /v1/users/{user_id}."""

    def __init__(self, delete_user: DeleteUserUseCase) -> None:
        self._delete = delete_user

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = current_user(req)
        await self._delete.execute(user.user_id, user_id)
        resp.status = falcon.HTTP_204
