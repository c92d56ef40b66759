"""CORS middleware - adds Access-Control-Allow-Origin headers."""

import falcon.asgi


class CORSMiddleware:
    """Echo allowed origins and answer OPTIONS preflight.

    ``"*"`` in ``origins`` allows any origin. Requests from other origins get
    no Access-Control-Allow-Origin header, so browsers block them.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = [o.strip() for o in origins if o.strip()]
        self._allow_any = "*" in self._origins

    def _allowed(self, origin: str | None) -> bool:
        return bool(origin) and (self._allow_any or origin in self._origins)

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = req.get_header("Origin")
        resp.set_header("Vary", "Origin")
        if not self._allowed(origin):
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header(
            "Access-Control-Allow-Methods", "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        )
        resp.set_header("Access-Control-Allow-Headers", "Authorization, Content-Type")
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit preflight before auth runs."""
        self._set_cors_headers(req, resp)
        if req.method == "OPTIONS":
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        # Error handlers may have replaced headers set during process_request.
        self._set_cors_headers(req, resp)
