from __future__ import annotations

"""
Thin WebApp shim that wraps the Starlette app created by web.app_factory.

Tests and CLI code use WebApp and `app._app`.
"""

import uvicorn

DEFAULT_PORT = 14155


class WebApp:
    def __init__(self, session) -> None:
        from web.app_factory import create_app
        self.session = session
        self._app = create_app(self.session)

    def bind_address(self, host: str | None = None, port: int | None = None):
        cfg_host = self.session.get_option('WEB', 'host', fallback='127.0.0.1')
        cfg_port = self.session.get_option('WEB', 'port', fallback=DEFAULT_PORT)
        try:
            cfg_port = int(cfg_port)
        except (TypeError, ValueError):
            cfg_port = DEFAULT_PORT
        return str(host or cfg_host), int(port or cfg_port)

    def start(self, host: str | None = None, port: int | None = None) -> None:
        bind_host, bind_port = self.bind_address(host, port)
        self.session.logger.web_event('server_start', {'host': bind_host, 'port': bind_port})
        uvicorn.run(self._app, host=bind_host, port=bind_port, log_level='info')
