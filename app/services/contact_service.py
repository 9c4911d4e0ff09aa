from __future__ import annotations

import html
import json
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from app.core.config import DeliverySettings
from app.schemas.contact import ContactPayload
from app.services.resend_client import DeliveryConfig, OutboundEmail

INVALID_JSON = "Invalid JSON body"
MISSING_FIELDS = "Missing required contact fields"
INVALID_EMAIL = "Invalid email format"
MISSING_CONFIG = (
    "Missing environment variables. Configure RESEND_API_KEY and CONTACT_TO_EMAIL."
)
PROVIDER_FAILED = "Resend request failed"

# Coarse shape check only; it intentionally accepts addresses a strict
# RFC 5322 parser would refuse.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

REQUIRED_FIELDS = ("name", "email", "organization", "message")


@dataclass(frozen=True)
class ParseResult:
    payload: Optional[ContactPayload] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def normalize_payload(data: Mapping[str, Any]) -> ContactPayload:
    return ContactPayload(
        name=_normalize(data.get("name")),
        email=_normalize(data.get("email")),
        organization=_normalize(data.get("organization")),
        message=_normalize(data.get("message")),
        botField=_normalize(data.get("botField")),
    )


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_contact_body(raw: bytes) -> ParseResult:
    """Decode a request body into a normalized payload.

    Anything that is not a JSON object (malformed text, bad UTF-8, an empty
    body, arrays, scalars, ``null``, ``NaN``/``Infinity``, nesting too deep
    for the decoder) is a parse failure.
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError):
        return ParseResult(error=INVALID_JSON)

    if not isinstance(data, dict):
        return ParseResult(error=INVALID_JSON)

    return ParseResult(payload=normalize_payload(data))


def is_spam(payload: ContactPayload) -> bool:
    return bool(payload.bot_field)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_payload(payload: ContactPayload) -> Optional[str]:
    """Return the client-facing error for an invalid payload, else None."""
    if any(not getattr(payload, name) for name in REQUIRED_FIELDS):
        return MISSING_FIELDS
    if not is_valid_email(payload.email):
        return INVALID_EMAIL
    return None


def resolve_delivery_config(delivery: DeliverySettings) -> Optional[DeliveryConfig]:
    api_key = delivery.api_key
    to_email = delivery.to_email
    if not api_key or not to_email:
        return None

    return DeliveryConfig(
        api_key=api_key,
        to_email=to_email,
        from_email=delivery.from_email,
        api_url=delivery.RESEND_API_URL,
        timeout=delivery.RESEND_TIMEOUT,
    )


class ContactService:
    """Builds the notification email for a validated contact submission."""

    def build_subject(self, payload: ContactPayload) -> str:
        return f"Nuevo contacto desde la web: {payload.organization}"

    def build_text(self, payload: ContactPayload) -> str:
        body_lines = [
            "Nuevo mensaje de contacto",
            f"Nombre: {payload.name}",
            f"Email: {payload.email}",
            f"Organización: {payload.organization}",
            "",
            "Mensaje:",
            payload.message,
        ]
        return "\n".join(body_lines)

    def build_html(self, payload: ContactPayload) -> str:
        message_html = (
            html.escape(payload.message).replace("\r\n", "\n").replace("\n", "<br>")
        )
        return (
            "<h2>Nuevo mensaje de contacto</h2>"
            f"<p><strong>Nombre:</strong> {html.escape(payload.name)}</p>"
            f"<p><strong>Email:</strong> {html.escape(payload.email)}</p>"
            f"<p><strong>Organización:</strong> {html.escape(payload.organization)}</p>"
            "<p><strong>Mensaje:</strong></p>"
            f"<p>{message_html}</p>"
        )

    def build_email_message(
        self, payload: ContactPayload, config: DeliveryConfig
    ) -> OutboundEmail:
        return OutboundEmail(
            from_address=config.from_email,
            to=[config.to_email],
            reply_to=payload.email,
            subject=self.build_subject(payload),
            text=self.build_text(payload),
            html=self.build_html(payload),
        )
