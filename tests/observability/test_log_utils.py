"""Tests for logging setup and helpers."""

import logging
import sys

import pytest

from diagram_assist.configs import get_settings
from diagram_assist.core.merge_pipeline.models import Position, Shape
from diagram_assist.observability import (
    configure_logging,
    describe_record,
    get_logger,
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSafeLogValue:
    """Tests for safe_log_value."""

    def test_collections_are_summarised(self) -> None:
        """Lists and dicts are reduced to their size."""
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"

    def test_models_show_identifier(self) -> None:
        """Pydantic models are reduced to their type and id."""
        assert safe_log_value(Shape(id="s1", label="Order")) == "Shape(id=s1)"
        assert safe_log_value(Position()) == "Position"

    def test_newlines_escaped(self) -> None:
        """Multi-line text stays on one log line."""
        assert safe_log_value("a\nb") == "a\\nb"

    def test_long_strings_truncated(self) -> None:
        """Strings over the limit are cut and annotated."""
        value = safe_log_value("x" * 30, max_length=10)
        assert value == "xxxxxxxxxx... (truncated, 30 total)"

    def test_unprintable_value(self) -> None:
        """Values whose str() fails do not raise."""

        class Broken:
            def __str__(self) -> str:
                raise RuntimeError("no")

        assert safe_log_value(Broken()) == "<unable to log: RuntimeError>"


def test_describe_record():
    """Records are summarised by kind, id and keys."""
    record = {"element_type": "class", "element_data": {"id": "s1", "label": "A"}}
    assert describe_record(record) == "kind=class id=s1 keys=['element_data', 'element_type']"
    assert describe_record(42) == "<int>"


def test_log_with_context_attaches_extra(caplog):
    """Context values become record attributes."""
    logger = get_logger("diagram_assist.tests")
    with caplog.at_level(logging.INFO):
        log_with_context(logger, logging.INFO, "proposal received", elements=[1, 2])

    record = caplog.records[-1]
    assert record.getMessage() == "proposal received elements=list(2 items)"
    assert record.elements == "list(2 items)"


def test_log_exception_with_context(caplog):
    """Exceptions are logged with type and message."""
    logger = get_logger("diagram_assist.tests")
    with caplog.at_level(logging.ERROR):
        log_exception_with_context(logger, "apply failed", ValueError("bad"), proposal_id="p1")

    record = caplog.records[-1]
    assert record.error_type == "ValueError"
    assert record.error_msg == "bad"
    assert record.proposal_id == "p1"
    assert record.exc_info is not None


def test_configure_logging_installs_stdout_handler(restore_root_logger):
    """configure_logging leaves exactly one stdout handler at the given level."""
    configure_logging("debug")
    configure_logging("warning")

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stdout


def test_configure_logging_uses_settings(monkeypatch, restore_root_logger):
    """Without an explicit level, the configured effective level applies."""
    monkeypatch.setenv("DIAGRAM_ASSIST_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("DIAGRAM_ASSIST_DEBUG", raising=False)
    get_settings.cache_clear()
    try:
        configure_logging()
    finally:
        get_settings.cache_clear()

    assert restore_root_logger.level == logging.ERROR
