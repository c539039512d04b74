from __future__ import annotations

import json
import logging

from ovr_text_classifier.utils import logging as log_utils
from ovr_text_classifier.utils import get_logger, json_log, set_level


def test_json_log_payload():
    payload = json.loads(json_log('train.start', component='trainer', n_classes=3))
    assert payload['msg'] == 'train.start'
    assert payload['n_classes'] == 3
    assert 'ts' in payload


def test_json_log_handles_infinite_values():
    payload = json.loads(json_log('fit.degenerate_labels', intercept=float('-inf')))
    assert payload['intercept'] == float('-inf')


def test_set_level_updates_project_loggers(monkeypatch):
    monkeypatch.setattr(log_utils, '_level_override', None)
    existing = get_logger('ovr_text_classifier.tests.existing')
    other = logging.getLogger('unrelated.logger')
    other.setLevel(logging.WARNING)

    set_level(logging.DEBUG)

    assert existing.level == logging.DEBUG
    assert get_logger('ovr_text_classifier.tests.created_later').level == logging.DEBUG
    assert other.level == logging.WARNING
    set_level(logging.INFO)
