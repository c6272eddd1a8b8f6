from __future__ import annotations

import json
import logging
import os

from quiz_engine.core.answer_validator import validate_answer
from quiz_engine.utils.env import load_project_dotenv
from quiz_engine.utils.logging_setup import (
    FILE_HANDLER_NAME,
    resolve_log_path,
    setup_file_logging,
)
from quiz_engine.utils.observability import get_request_id_from_headers, log_event


def test_log_event_emits_single_json_line(caplog):
    logger = logging.getLogger("quiz_engine.tests.events")
    with caplog.at_level(logging.INFO, logger="quiz_engine.tests.events"):
        log_event(logger, "quiz_test_event", question_type="matching", skipped=None, tags={"a"})
    record = caplog.records[-1]
    payload = json.loads(record.getMessage())
    assert payload["event"] == "quiz_test_event"
    assert payload["question_type"] == "matching"
    assert "skipped" not in payload
    assert payload["tags"] == "{'a'}"


def test_log_event_never_raises():
    log_event(object(), "quiz_test_event", level="no_such_level", value=1)


def test_unknown_type_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="quiz_engine.core.answer_validator"):
        validate_answer("drag_drop", {"a": 1}, {"a": 1})
    events = [json.loads(r.getMessage())["event"] for r in caplog.records]
    assert "quiz_grade_unknown_type" in events


def test_request_id_from_headers():
    assert get_request_id_from_headers({"X-Request-Id": " abc "}) == "abc"
    assert get_request_id_from_headers({}) is None
    assert get_request_id_from_headers(None) is None


def test_setup_file_logging_shares_one_handler_and_is_idempotent(tmp_path):
    path = tmp_path / "logs" / "quiz.log"
    names = ["quiz_engine.tests.file_a", "quiz_engine.tests.file_b"]
    first = setup_file_logging(log_file_path=str(path), level=logging.INFO, logger_names=names)
    again = setup_file_logging(log_file_path=str(path), level=logging.INFO, logger_names=names)
    assert first is again
    try:
        for name in names:
            logger = logging.getLogger(name)
            assert [h.name for h in logger.handlers].count(FILE_HANDLER_NAME) == 1
            assert logger.propagate is False
        logging.getLogger(names[0]).info("hello")
        first.flush()
        assert "hello" in path.read_text(encoding="utf-8")
    finally:
        for name in names:
            logging.getLogger(name).removeHandler(first)
        first.close()


def test_resolve_log_path():
    assert resolve_log_path("") is None
    assert resolve_log_path("/var/log/quiz.log").is_absolute()
    rel = resolve_log_path("logs/quiz.log")
    assert rel.is_absolute() and rel.parts[-2:] == ("logs", "quiz.log")


def test_load_project_dotenv(tmp_path, monkeypatch):
    assert load_project_dotenv(tmp_path / "missing.env") is False

    env_file = tmp_path / ".env"
    env_file.write_text("QUIZ_ENGINE_TEST_FLAG=from_file\nQUIZ_ENGINE_TEST_KEEP=from_file\n")
    monkeypatch.delenv("QUIZ_ENGINE_TEST_FLAG", raising=False)
    monkeypatch.setenv("QUIZ_ENGINE_TEST_KEEP", "from_env")
    assert load_project_dotenv(env_file) is True
    assert os.environ["QUIZ_ENGINE_TEST_FLAG"] == "from_file"
    assert os.environ["QUIZ_ENGINE_TEST_KEEP"] == "from_env"
