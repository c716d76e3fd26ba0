import json
import logging

import pytest

from matchscore.config import settings
from matchscore.logging_config import (
    ScoringLoggingContext,
    StructuredFormatter,
    TextFormatter,
    request_id_var,
    setup_logging,
    target_id_var,
    viewer_id_var,
)


def _record(msg="scored", **extra):
    record = logging.LogRecord(
        name="matchscore.composer", level=logging.INFO, pathname=__file__,
        lineno=10, msg=msg, args=(), exc_info=None, func="score",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_structured_formatter_includes_context_and_extra():
    with ScoringLoggingContext(request_id="req-1", viewer_id="viewer-uuid", target_id="target-uuid"):
        payload = json.loads(StructuredFormatter().format(_record(final_score=88)))
    assert payload["message"] == "scored"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["viewer_id"] == "viewer-uuid"
    assert payload["target_id"] == "target-uuid"
    assert payload["final_score"] == 88


def test_structured_formatter_omits_request_id_when_disabled(monkeypatch):
    monkeypatch.setattr(settings.logging, "include_request_id", False)
    with ScoringLoggingContext(request_id="req-1"):
        payload = json.loads(StructuredFormatter().format(_record()))
    assert "request_id" not in payload


def test_text_formatter_prefixes_context():
    with ScoringLoggingContext(request_id="req-2", viewer_id="v1"):
        line = TextFormatter().format(_record())
    assert line.startswith("[req_id=req-2 viewer=v1] ")
    assert line.endswith("| scored")


def test_context_restores_previous_values():
    with ScoringLoggingContext(request_id="outer", viewer_id="v-outer"):
        with ScoringLoggingContext(viewer_id="v-inner", target_id="t-inner") as inner:
            assert viewer_id_var.get() == "v-inner"
            assert request_id_var.get() == inner.request_id
            assert inner.request_id != "outer"
        assert request_id_var.get() == "outer"
        assert viewer_id_var.get() == "v-outer"
        assert target_id_var.get() is None
    assert request_id_var.get() is None


def test_setup_logging_installs_single_handler(restore_root_logger, monkeypatch):
    monkeypatch.setattr(settings.logging, "format", "text")
    monkeypatch.setattr(settings.logging, "level", "WARNING")
    setup_logging()
    root = restore_root_logger
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, TextFormatter)
    assert root.level == logging.WARNING


def test_setup_logging_json(restore_root_logger):
    setup_logging()
    assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)
