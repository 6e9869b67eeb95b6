from __future__ import annotations

import os
import sys
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def _require_starlette():
    try:
        from starlette.testclient import TestClient  # noqa: F401
    except Exception as e:
        pytest.skip(f"starlette not available: {e}")


def test_selftest_passes(capsys):
    _require_starlette()
    from web.selftest import main

    assert main() == 0
    out = capsys.readouterr().out
    assert "FAIL" not in out
    assert "Selftest: OK" in out


def test_bind_address_prefers_arguments():
    _require_starlette()
    from web.app import WebApp
    from web.selftest import build_session

    sess, _ = build_session()
    app = WebApp(sess)
    assert app.bind_address() == ("127.0.0.1", 14155)
    assert app.bind_address("0.0.0.0", 9000) == ("0.0.0.0", 9000)
    sess.set_option("port", "not-a-port")
    assert app.bind_address()[1] == 14155


def test_start_runs_uvicorn(monkeypatch):
    _require_starlette()
    import uvicorn
    from web.app import WebApp
    from web.selftest import build_session

    calls = {}

    def fake_run(app, host, port, log_level):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr(uvicorn, "run", fake_run)
    sess, _ = build_session()
    app = WebApp(sess)
    app.start(port=8123)
    assert calls == {"app": app._app, "host": "127.0.0.1", "port": 8123}
