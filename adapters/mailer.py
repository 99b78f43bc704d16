"""Outgoing email via the Resend HTTP API."""
from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"
DEFAULT_SENDER = "GigStaffPro <onboarding@resend.dev>"
REQUEST_TIMEOUT = 10


class Mailer:
    def __init__(
        self,
        api_key: Optional[str],
        *,
        sender: str = DEFAULT_SENDER,
        url: str = RESEND_URL,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self.url = url
        self.timeout = timeout

    def send(self, to: str, subject: str, html: str) -> bool:
        """Send one message; ``True`` only when the API accepted it."""

        if not to or not subject or not html:
            logger.warning("Email not sent: missing recipient, subject or body")
            return False
        if not self.api_key:
            logger.info("Email not sent to %s: no API key configured", to)
            return False
        try:
            response = requests.post(
                self.url,
                json={"from": self.sender, "to": [to], "subject": subject, "html": html},
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Email to %s failed: %s", to, exc)
            return False
        if not response.ok:
            logger.warning("Email to %s rejected: HTTP %s", to, response.status_code)
            return False
        logger.info("Email sent to %s", to)
        return True
