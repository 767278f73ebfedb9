"""
Tests for structured logging.
Tests PII masking, nested data, JSON formatting and logger configuration.
"""

import json
import logging
import sys

import pytest

from core.logging import (
    PII_PATTERNS,
    SENSITIVE_FIELD_PATTERNS,
    StructuredFormatter,
    get_logger,
    is_sensitive_field,
    mask_sensitive_data,
    setup_logging,
)
from schemas.criteria import FilterCriteria
from visibility.filters import filter_records


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def make_record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="visibility.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSensitiveFieldDetection:
    """Test sensitive field name detection."""

    @pytest.mark.parametrize("field_name,expected", [
        ("password", True),
        ("user_password", True),
        ("access_token", True),
        ("apiKey", True),
        ("client_secret", True),
        ("Authorization", True),
        ("session_id", True),
        ("search", False),
        ("status", False),
        ("job_title", False),
        ("created_from", False),
    ])
    def test_sensitive_field_patterns(self, field_name, expected):
        assert is_sensitive_field(field_name) is expected

    def test_patterns_defined(self):
        assert SENSITIVE_FIELD_PATTERNS
        assert PII_PATTERNS


class TestPIIMasking:
    """Test masking of PII inside free text."""

    def test_email_masking(self):
        assert mask_sensitive_data("alice@example.com") == "[EMAIL]"
        assert mask_sensitive_data("contact alice@example.com today") == "contact [EMAIL] today"

    @pytest.mark.parametrize("text", [
        "555-010-2000",
        "555.010.2000",
        "5550102000",
        "+1 555 010 2000",
    ])
    def test_phone_number_masking(self, text):
        masked = mask_sensitive_data(text)
        assert "[PHONE]" in masked
        assert "2000" not in masked

    def test_ssn_masking(self):
        assert mask_sensitive_data("SSN 123-45-6789") == "SSN [SSN]"

    def test_plain_text_unchanged(self):
        assert mask_sensitive_data("react developer") == "react developer"

    def test_non_string_scalars_unchanged(self):
        assert mask_sensitive_data(42) == 42
        assert mask_sensitive_data(None) is None


class TestDataStructureMasking:
    """Test recursive masking of containers."""

    def test_dict_masking(self):
        data = {"password": "hunter2", "search": "alice@example.com", "status": "all"}
        assert mask_sensitive_data(data) == {
            "password": "[REDACTED]",
            "search": "[EMAIL]",
            "status": "all",
        }

    def test_nested_structures(self):
        data = {"criteria": {"search": "555-010-2000"}, "ids": ["r1", "bob@example.com"]}
        masked = mask_sensitive_data(data)
        assert masked["criteria"]["search"] == "[PHONE]"
        assert masked["ids"] == ["r1", "[EMAIL]"]

    def test_tuples_and_sets_become_lists(self):
        assert mask_sensitive_data(("a", "b")) == ["a", "b"]
        assert mask_sensitive_data({"only"}) == ["only"]

    def test_max_depth_protection(self):
        data = "leaf"
        for _ in range(15):
            data = {"level": data}
        assert "[MAX_DEPTH_EXCEEDED]" in json.dumps(mask_sensitive_data(data))


class TestStructuredFormatter:
    """Test JSON log output."""

    def test_basic_fields(self):
        output = json.loads(StructuredFormatter().format(make_record("scope resolved")))
        assert output["message"] == "scope resolved"
        assert output["level"] == "INFO"
        assert output["logger"] == "visibility.test"
        assert "timestamp" in output

    def test_viewer_and_masked_criteria(self):
        record = make_record(viewer_id="r1", criteria={"search": "alice@example.com"})
        output = json.loads(StructuredFormatter().format(record))
        assert output["viewer_id"] == "r1"
        assert output["criteria"] == {"search": "[EMAIL]"}

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record("failed")
            record.exc_info = sys.exc_info()

        output = json.loads(StructuredFormatter().format(record))
        assert output["exception"]["type"] == "ValueError"
        assert output["exception"]["message"] == "boom"
        assert output["exception"]["traceback"]

    def test_filter_log_masks_search_term(self, candidates, caplog):
        criteria = FilterCriteria(search="alice@example.com")
        with caplog.at_level(logging.DEBUG, logger="visibility.filters"):
            filter_records(candidates, {"r1"}, set(), criteria)

        records = [r for r in caplog.records if r.name == "visibility.filters"]
        assert records
        output = json.loads(StructuredFormatter().format(records[-1]))
        assert output["criteria"]["search"] == "[EMAIL]"
        assert "alice@example.com" not in json.dumps(output)


class TestSetupLogging:
    """Test logger configuration."""

    def test_json_logs(self, restore_root_logger):
        setup_logging("DEBUG", json_logs=True)
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_plain_logs(self, restore_root_logger):
        setup_logging("warning", json_logs=False)
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_repeated_setup_does_not_stack_handlers(self, restore_root_logger):
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(restore_root_logger.handlers) == 1

    def test_get_logger(self):
        assert get_logger("visibility.scope") is logging.getLogger("visibility.scope")
