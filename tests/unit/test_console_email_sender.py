"""
Unit tests for ConsoleEmailSender adapter.

Tests verify the console email sender implements EmailDispatcher protocol
and logs verification codes in the correct format.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapters.smtp.console import ConsoleEmailSender


class TestConsoleEmailSenderProtocol:
    """Tests for EmailDispatcher protocol compliance."""

    def test_implements_email_dispatcher_protocol(self) -> None:
        """ConsoleEmailSender implements EmailDispatcher protocol."""
        from src.domain.ports import EmailDispatcher

        sender = ConsoleEmailSender()
        assert callable(sender.send_verification_code)

        def accepts_dispatcher(s: EmailDispatcher) -> None:
            pass

        accepts_dispatcher(sender)

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleEmailSender uses structural subtyping, not inheritance."""
        bases = ConsoleEmailSender.__bases__
        assert bases == (object,), f"Expected only object as base, got {bases}"


class TestSendVerificationCode:
    """Tests for send_verification_code method."""

    def test_logs_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send_verification_code("test@example.com", "Jane", 123456)

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO

    def test_log_format(self, caplog: pytest.LogCaptureFixture) -> None:
        """[VERIFICATION] To: ... Name: ... Code: ..."""
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send_verification_code("user@example.com", "Jane", 567890)

        assert "[VERIFICATION] To: user@example.com Name: Jane Code: 567890" in caplog.text

    def test_returns_none(self) -> None:
        """Method returns None (fire-and-forget)."""
        sender = ConsoleEmailSender()
        assert sender.send_verification_code("test@example.com", "Jane", 123456) is None

    def test_multiple_calls_are_independent(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send_verification_code("first@example.com", "First", 111111)
            sender.send_verification_code("second@example.com", "Second", 222222)

        assert len(caplog.records) == 2
        assert "first@example.com" in caplog.text
        assert "222222" in caplog.text


class TestThreadSafety:
    """Tests for thread-safe logging."""

    def test_concurrent_logging_is_thread_safe(self, caplog: pytest.LogCaptureFixture) -> None:
        """Multiple concurrent calls don't corrupt log output."""
        sender = ConsoleEmailSender()
        emails = [f"user{i}@example.com" for i in range(10)]
        codes = [100000 + i for i in range(10)]

        with caplog.at_level(logging.INFO), ThreadPoolExecutor(max_workers=5) as executor:
            futures = [
                executor.submit(sender.send_verification_code, email, "User", code)
                for email, code in zip(emails, codes, strict=True)
            ]
            for f in futures:
                f.result()

        assert len(caplog.records) == 10
        for email, code in zip(emails, codes, strict=True):
            assert f"To: {email} Name: User Code: {code}" in caplog.text
