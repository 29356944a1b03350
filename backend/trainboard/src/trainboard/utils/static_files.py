import os
from typing import Optional

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Receive, Scope, Send
from starlette.websockets import WebSocketClose

from trainboard.exceptions import NotFoundError


class SPAStaticFiles(StaticFiles):
    """
    Static files for a single-page application.

    Installed as the router's default app, so it only sees requests no route
    matched. Paths with no matching file are answered with the index page for
    the client-side router, except under ``api_prefix`` where a missing route
    is a plain 404.
    """

    index_file = "index.html"

    def __init__(self, *, directory: str, api_prefix: Optional[str] = None, **kwargs) -> None:
        kwargs.setdefault("html", True)
        super().__init__(directory=directory, **kwargs)
        self.api_prefix = api_prefix.strip("/") if api_prefix else None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "websocket":
            await WebSocketClose()(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def _is_api_path(self, path: str) -> bool:
        if not self.api_prefix:
            return False
        return path == self.api_prefix or path.startswith(self.api_prefix + os.sep)

    async def get_response(self, path: str, scope: Scope) -> Response:
        if self._is_api_path(path):
            raise NotFoundError(f"API route /{path.replace(os.sep, '/')}")
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response(self.index_file, scope)
