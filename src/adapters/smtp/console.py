"""
Console email sender adapter - Implements EmailDispatcher protocol.

This module provides a console-based implementation of the domain's
email dispatcher port, logging verification codes for development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailDispatcher protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development only - prints verification codes to the log.
    """

    def send_verification_code(self, recipient: str, name: str, code: int) -> None:
        """
        Log verification code (simulates email delivery).

        The code is logged at INFO level to be visible in container logs.

        Args:
            recipient: Recipient email address (normalized by domain layer)
            name: Capitalized first name
            code: Numeric one-time code
        """
        logger.info("[VERIFICATION] To: %s Name: %s Code: %s", recipient, name, code)
