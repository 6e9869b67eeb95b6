from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse


async def handle_api_status(app, request: Request):
    session = app.session
    try:
        actions = list(session.registry.list_available_actions())
    except Exception:
        actions = []
    return JSONResponse({"ok": True, "dialog": session.dialog_open(), "actions": actions})
