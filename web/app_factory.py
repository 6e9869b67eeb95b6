from __future__ import annotations

import traceback
from typing import Any, Awaitable, Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route


class AppCtx:
    """Lightweight adapter exposing the attributes route handlers expect.

    - session: the core session
    - logger: the session's LoggingHandler
    """

    def __init__(self, session) -> None:
        self.session = session

    @property
    def logger(self):
        return self.session.logger


def _guarded(ctx: AppCtx, where: str, handler: Callable[[AppCtx, Request], Awaitable[Any]]):
    """Wrap a route handler so unexpected errors become a logged 500"""
    async def endpoint(request: Request):
        try:
            return await handler(ctx, request)
        except Exception as e:
            ctx.logger.error(where, e, stack=traceback.format_exc())
            return JSONResponse({'error': f'Internal error: {e}'}, status_code=500)
    return endpoint


def create_app(session) -> Starlette:
    """Create a Starlette app over the session's widget handler."""
    ctx = AppCtx(session)

    # Route wrappers that pass our ctx to handlers
    async def api_status(c: AppCtx, request: Request):
        from web.routes.meta import handle_api_status
        return await handle_api_status(c, request)

    async def api_widgets_list(c: AppCtx, request: Request):
        from web.routes.widgets import handle_api_widgets_list
        return await handle_api_widgets_list(c, request)

    async def api_widgets_action(c: AppCtx, request: Request):
        from web.routes.widgets import handle_api_widgets_action
        return await handle_api_widgets_action(c, request)

    routes = [
        Route('/v1/status', _guarded(ctx, 'web.status', api_status), methods=['GET']),
        Route('/v1/widgets', _guarded(ctx, 'web.widgets.list', api_widgets_list), methods=['GET']),
        Route('/v1/widgets', _guarded(ctx, 'web.widgets.action', api_widgets_action), methods=['POST']),
    ]

    app = Starlette(routes=routes)
    # Attach shared state
    app.state.session = session
    return app
