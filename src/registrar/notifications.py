"""Notification sink that writes outgoing messages to the log."""

from __future__ import annotations

import logging

from registrar.logging import mask_email

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """NotificationService that logs messages instead of delivering them."""

    def send_email(self, email: str, subject: str, message: str) -> None:
        logger.info("email to=%s subject=%r body=%r", mask_email(email), subject, message)

    def send_sms(self, phone: str, message: str) -> None:
        masked = f"***{phone[-4:]}" if len(phone) > 4 else "***"
        logger.info("sms to=%s body=%r", masked, message)
