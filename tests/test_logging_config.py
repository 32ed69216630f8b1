"""
Tests for logging_config module.

This module tests the SensitiveFilter and SENSITIVE_PATTERNS to ensure
that the API token is properly masked in log messages.
"""

import logging
import sys

import pytest

from do_ddns.config import LoggingConfig
from do_ddns.logging_config import (
    LOGGER_NAME,
    SENSITIVE_PATTERNS,
    SensitiveFilter,
    setup_logging,
)


def apply_patterns(msg: str) -> str:
    """Apply all sensitive patterns to a message."""
    result = msg
    for pattern, replacement in SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


@pytest.fixture
def package_logger():
    """Restore the package logger after setup_logging() changed it."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestSensitivePatterns:
    """Tests for SENSITIVE_PATTERNS regex patterns."""

    @pytest.mark.parametrize(
        ("original", "expected"),
        [
            (
                "Authorization: Bearer dop_v1_abc123xyz789",
                "Authorization: Bearer ******",
            ),
            ("Bearer xy", "Bearer ******"),
            ("Authorization: Bearer ", "Authorization: Bearer ******"),
            ("authorization: bearer ABC123XYZ", "authorization: bearer ******"),
            (
                "headers={'Authorization': 'Bearer dop_v1_abc'}",
                "headers={'Authorization': 'Bearer ******'}",
            ),
        ],
    )
    def test_authorization_bearer(self, original: str, expected: str) -> None:
        """Test Authorization Bearer token masking."""
        assert apply_patterns(original) == expected

    @pytest.mark.parametrize(
        ("original", "expected"),
        [
            ("digital_ocean_token=dop_v1_abc", "digital_ocean_token=******"),
            ("digital_ocean_token = dop_v1_abc", "digital_ocean_token = ******"),
            (
                'Skipping line: "digital_ocean_token=abc"',
                'Skipping line: "digital_ocean_token=******"',
            ),
        ],
    )
    def test_env_token_line(self, original: str, expected: str) -> None:
        """Test masking of the .env token line."""
        assert apply_patterns(original) == expected

    @pytest.mark.parametrize(
        "message",
        [
            "Current public IP: 203.0.113.5",
            "GET https://api.digitalocean.com/v2/domains/example.com/records -> 200",
            "domain_name=example.com",
        ],
    )
    def test_unrelated_messages_unchanged(self, message: str) -> None:
        """Test that messages without secrets are not modified."""
        assert apply_patterns(message) == message


class TestSensitiveFilter:
    """Tests for SensitiveFilter."""

    def _record(self, msg, args):
        return logging.LogRecord(
            name="do_ddns.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg=msg,
            args=args,
            exc_info=None,
        )

    def test_masks_message(self):
        record = self._record("Authorization: Bearer secret-token", None)
        assert SensitiveFilter().filter(record) is True
        assert record.getMessage() == "Authorization: Bearer ******"

    def test_masks_tuple_args(self):
        record = self._record("Sent %s with %d retries", ("Bearer secret-token", 3))
        SensitiveFilter().filter(record)
        assert record.getMessage() == "Sent Bearer ****** with 3 retries"

    def test_masks_dict_args(self):
        record = self._record("Header: %(auth)s", ({"auth": "Bearer secret-token"},))
        SensitiveFilter().filter(record)
        assert record.getMessage() == "Header: Bearer ******"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self, package_logger):
        setup_logging(LoggingConfig(level="DEBUG"))

        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False
        assert len(package_logger.handlers) == 1
        handler = package_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout
        assert any(isinstance(f, SensitiveFilter) for f in handler.filters)

    def test_repeated_setup_replaces_handlers(self, package_logger):
        setup_logging(LoggingConfig())
        setup_logging(LoggingConfig())

        assert len(package_logger.handlers) == 1

    def test_file_handler(self, package_logger, tmp_path):
        log_path = tmp_path / "logs" / "do-ddns.log"
        setup_logging(
            LoggingConfig(level="INFO", file_enabled=True, file_path=str(log_path)),
        )

        logging.getLogger("do_ddns.test").info(
            "Sending %s", "Authorization: Bearer dop_v1_secret",
        )
        for handler in package_logger.handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        assert "Bearer ******" in content
        assert "dop_v1_secret" not in content
        assert "[do_ddns.test]" in content
