"""Email adapters - Verification code delivery."""

from .console import ConsoleEmailSender
from .smtp import SmtpEmailSender

__all__ = ["ConsoleEmailSender", "SmtpEmailSender"]
