from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryConfig:
    """Resolved delivery settings for a single request."""
    api_key: str
    to_email: str
    from_email: str
    api_url: str
    timeout: Optional[float] = None


@dataclass(frozen=True)
class OutboundEmail:
    """Email ready to be handed to the provider."""
    from_address: str
    to: List[str]
    reply_to: str
    subject: str
    text: str
    html: str

    def to_resend_payload(self) -> dict:
        return {
            "from": self.from_address,
            "to": list(self.to),
            "reply_to": self.reply_to,
            "subject": self.subject,
            "text": self.text,
            "html": self.html,
        }


@dataclass(frozen=True)
class SendResult:
    ok: bool
    status_code: Optional[int] = None
    error_text: str = field(default="")


class EmailSender(Protocol):
    def send(self, message: OutboundEmail) -> SendResult:
        ...


EmailSenderFactory = Callable[[DeliveryConfig], EmailSender]


class ResendEmailSender:
    """Sends emails through the Resend REST API.

    ``send`` never raises for provider or network failures; both come back
    as a failed ``SendResult`` so the caller can map them to a response.
    """
    def __init__(self, api_key: str, api_url: str, timeout: Optional[float] = None):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: DeliveryConfig) -> "ResendEmailSender":
        return cls(config.api_key, config.api_url, timeout=config.timeout)

    def send(self, message: OutboundEmail) -> SendResult:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.api_url,
                json=message.to_resend_payload(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("resend request could not be sent: %s", exc)
            return SendResult(ok=False, error_text=str(exc))

        if not 200 <= response.status_code < 300:
            logger.warning(
                "resend rejected email status=%s", response.status_code
            )
            return SendResult(
                ok=False, status_code=response.status_code, error_text=response.text
            )

        return SendResult(ok=True, status_code=response.status_code)
