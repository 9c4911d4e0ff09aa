"""
Contact Relay Services Module.

Services:
    - ContactService: builds the notification email for a contact submission
    - ResendEmailSender: delivers emails through the Resend REST API
"""

from .contact_service import ContactService, ParseResult, parse_contact_body
from .resend_client import (
    DeliveryConfig,
    EmailSender,
    OutboundEmail,
    ResendEmailSender,
    SendResult,
)

__all__ = [
    "ContactService",
    "ParseResult",
    "parse_contact_body",
    "DeliveryConfig",
    "EmailSender",
    "OutboundEmail",
    "ResendEmailSender",
    "SendResult",
]
