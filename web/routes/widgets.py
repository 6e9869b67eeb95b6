from __future__ import annotations

import json
from typing import Any, Dict

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response


def _to_response(result) -> Response:
    return Response(result.body, status_code=int(result.status), media_type=result.content_type)


async def _collect_params(request: Request) -> Dict[str, Any]:
    """JSON object body merged under the query string; query parameters win"""
    params: Dict[str, Any] = {}
    raw = await request.body()
    if raw and raw.strip():
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError('request body must be a JSON object')
        params.update(payload)
    params.update(dict(request.query_params))
    return params


async def handle_api_widgets_list(app, request: Request):
    params = dict(request.query_params)
    result = await run_in_threadpool(app.session.describe_widgets, params)
    app.logger.web_event('widgets_list', {'params': params, 'status': int(result.status)})
    return _to_response(result)


async def handle_api_widgets_action(app, request: Request):
    try:
        params = await _collect_params(request)
    except ValueError as e:
        app.logger.web_event('bad_request', {'error': str(e)})
        return PlainTextResponse('Invalid JSON', status_code=400)

    result = await run_in_threadpool(app.session.handle_request, params)
    app.logger.web_event('widgets_action', {
        'params': params,
        'status': int(result.status),
        'redraw': result.redraw,
    })
    return _to_response(result)
