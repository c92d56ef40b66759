"""System settings API resource."""

import falcon
import falcon.asgi

from pontual.application.use_cases.settings.update_setting import (
    GetSettingUseCase,
    UpdateSettingUseCase,
)
from pontual.domain.exceptions import NotFound
from pontual.interfaces.api.requests import current_user, json_body, required


class SettingResource:
    """GET/PUT /v1/settings/{key}."""

    def __init__(
        self,
        get_setting: GetSettingUseCase,
        update_setting: UpdateSettingUseCase,
    ) -> None:
        self._get = get_setting
        self._update = update_setting

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, key: str
    ) -> None:
        user = current_user(req)
        value = await self._get.execute(user.user_id, key)
        if value is None:
            raise NotFound("Setting", key)
        resp.media = {"key": key, "value": value}
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, key: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        value = await self._update.execute(user.user_id, key, required(body, "value"))
        resp.media = {"key": key, "value": value}
        resp.status = falcon.HTTP_200
