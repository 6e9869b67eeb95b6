from __future__ import annotations

import os
import sys
import json

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from utils.logging_utils import LoggingHandler


class FakeConfig:
    def __init__(self, opts: dict):
        self._opts = opts

    def get_option(self, section: str, key: str, fallback=None):
        if section != 'LOG':
            return fallback
        return self._opts.get(key, fallback)


class CaptureOutput:
    def __init__(self):
        self.lines = []

    def write(self, message, **kwargs):
        self.lines.append(str(message))

    def debug(self, message, **kwargs):
        # Used by json writer mirror path
        self.lines.append(str(message))


def _read_lines(tmp_path):
    files = list(tmp_path.glob('*.log'))
    assert files, 'No log files created'
    with files[0].open('r', encoding='utf-8') as f:
        return [l.strip() for l in f if l.strip()]


def test_json_logging_redaction_and_truncation(tmp_path):
    cfg = FakeConfig({
        'active': True,
        'dir': str(tmp_path),
        'per_run': True,
        'format': 'json',
        'mirror_to_console': False,
        'redact': True,
        'redact_keys': 'authorization,token,password',
        'truncate_chars': 10,
        'log_settings': 'basic',
    })
    logger = LoggingHandler(cfg, output_handler=None)

    assert logger.active() is True
    assert os.path.basename(logger.path).startswith('uiremote-')
    logger.settings({'token': 'shhhhh', 'note': 'x' * 50})

    payload = json.loads(_read_lines(tmp_path)[-1])
    assert payload['event'] == 'settings'
    assert payload['aspect'] == 'settings'
    data = payload.get('data') or {}
    assert data.get('token') == '***redacted***'
    assert data.get('note', '').endswith('…')
    assert len(data.get('note')) == 11  # 10 chars + ellipsis


def test_text_logging_and_console_mirror(tmp_path):
    cap = CaptureOutput()
    cfg = FakeConfig({
        'active': True,
        'dir': str(tmp_path),
        'per_run': False,
        'format': 'text',
        'mirror_to_console': True,
        'log_actions': 'basic',
    })
    logger = LoggingHandler(cfg, output_handler=cap)
    assert os.path.basename(logger.path) == 'uiremote.log'
    logger.action_event('press', {'widget': 'PushButton'}, component='actions.press')

    # One text line mirrored to console
    assert any('actions:press' in line and 'widget=PushButton' in line for line in cap.lines)


def test_aspect_levels_gate_events(tmp_path):
    cfg = FakeConfig({
        'active': True,
        'dir': str(tmp_path),
        'format': 'json',
        'log_actions': 'basic',
        'log_web': 'off',
    })
    logger = LoggingHandler(cfg)
    assert logger.is_enabled('actions') is True
    assert logger.is_enabled('actions', 'detail') is False
    assert logger.is_enabled('web') is False

    logger.action_detail('dispatch_start', {'action': 'press'})
    logger.web_event('widgets_action', {'status': 200})
    logger.action_event('request_done', {'status': 200})

    events = [json.loads(line)['event'] for line in _read_lines(tmp_path)]
    assert events == ['request_done']


def test_verbosity_sets_unspecified_aspects(tmp_path):
    cfg = FakeConfig({
        'active': True,
        'dir': str(tmp_path),
        'verbosity': 'detail',
        'log_errors': 'off',
    })
    logger = LoggingHandler(cfg)
    assert logger.is_enabled('web', 'detail') is True
    assert logger.is_enabled('errors') is False


def test_error_events_carry_stack(tmp_path):
    cfg = FakeConfig({'active': True, 'dir': str(tmp_path)})
    logger = LoggingHandler(cfg)
    try:
        raise RuntimeError('boom')
    except RuntimeError as e:
        logger.error('web.widgets.action', e)

    payload = json.loads(_read_lines(tmp_path)[-1])
    assert payload['severity'] == 'error'
    assert payload['component'] == 'web.widgets.action'
    assert payload['data']['message'] == 'boom'
    assert 'RuntimeError' in payload['data']['stack']


def test_inactive_logger_writes_nothing(tmp_path):
    logger = LoggingHandler(FakeConfig({'active': False, 'dir': str(tmp_path)}))
    assert logger.active() is False
    assert logger.path is None
    logger.action_event('request_done', {})
    assert list(tmp_path.glob('*.log')) == []
