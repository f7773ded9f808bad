"""
SMTP email sender adapter - Implements EmailDispatcher protocol.

Sends the verification code as a plain-text email over SMTP with
STARTTLS. Any delivery failure is raised as DispatchError; there is no
retry.
"""

import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import DispatchError

logger = logging.getLogger(__name__)

SUBJECT = "Verify your account"


def render_verification_email(name: str, code: int) -> str:
    return (
        f"Hi {name},\n\n"
        f"Your verification code is {code}.\n"
        "It expires in a few minutes. If you did not sign up, ignore this email.\n"
    )


class SmtpEmailSender:
    """
    Implements EmailDispatcher protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender
        self._timeout = timeout

    def send_verification_code(self, recipient: str, name: str, code: int) -> None:
        """
        Send the verification email.

        Raises:
            DispatchError: If connecting, authenticating or sending fails
        """
        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = self._sender
        message["To"] = recipient
        message.set_content(render_verification_email(name, code))

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                server.starttls()
                if self._username:
                    server.login(self._username, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery to %s failed: %s", recipient, e)
            raise DispatchError("Verification email could not be sent") from e
