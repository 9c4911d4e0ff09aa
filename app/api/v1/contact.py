"""
Public contact form endpoint.

Receives the website contact form and relays it by email through Resend.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.config import DeliverySettings
from app.core.errors import ALLOWED_METHODS_HEADER, METHOD_NOT_ALLOWED, error_response
from app.schemas.contact import ContactResponse
from app.services.contact_service import (
    MISSING_CONFIG,
    PROVIDER_FAILED,
    ContactService,
    is_spam,
    parse_contact_body,
    resolve_delivery_config,
    validate_payload,
)
from app.services.resend_client import EmailSenderFactory, ResendEmailSender

logger = logging.getLogger(__name__)

router = APIRouter()

DeliverySettingsProvider = Callable[[], DeliverySettings]

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_delivery_settings() -> DeliverySettingsProvider:
    """Return the provider that reads delivery settings from the environment.

    Calling it builds a fresh ``DeliverySettings``; nothing is cached between
    requests.
    """
    return DeliverySettings


def get_email_sender() -> EmailSenderFactory:
    return ResendEmailSender.from_config


def get_contact_service() -> ContactService:
    return ContactService()


def _ok_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=ContactResponse(ok=True).model_dump(exclude_none=True),
    )


@router.api_route(
    "/contact",
    methods=ROUTED_METHODS,
    response_model=ContactResponse,
    response_model_exclude_none=True,
    summary="Enviar formulario de contacto",
    description="Valida el formulario de contacto y lo reenvia por email via Resend.",
)
async def submit_contact(
    request: Request,
    load_delivery: DeliverySettingsProvider = Depends(get_delivery_settings),
    sender_factory: EmailSenderFactory = Depends(get_email_sender),
    service: ContactService = Depends(get_contact_service),
) -> JSONResponse:
    """Validate a contact submission and forward it to the configured inbox."""
    if request.method != "POST":
        return error_response(
            status.HTTP_405_METHOD_NOT_ALLOWED,
            METHOD_NOT_ALLOWED,
            headers=ALLOWED_METHODS_HEADER,
        )

    parsed = parse_contact_body(await request.body())
    if not parsed.ok:
        logger.info("Contact request rejected reason=invalid_json")
        return error_response(status.HTTP_400_BAD_REQUEST, parsed.error)

    payload = parsed.payload

    # Bots get the same answer as humans.
    if is_spam(payload):
        logger.info(
            "Contact request discarded by honeypot",
            extra={"event": "contact_spam_discarded"},
        )
        return _ok_response()

    validation_error = validate_payload(payload)
    if validation_error:
        logger.info("Contact request rejected reason=%s", validation_error)
        return error_response(status.HTTP_400_BAD_REQUEST, validation_error)

    config = resolve_delivery_config(load_delivery())
    if config is None:
        logger.error(
            "Contact delivery misconfigured: RESEND_API_KEY or CONTACT_TO_EMAIL missing",
            extra={"event": "contact_delivery_misconfigured"},
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, MISSING_CONFIG)

    message = service.build_email_message(payload, config)
    sender = sender_factory(config)
    result = await asyncio.to_thread(sender.send, message)

    email_domain = payload.email.split("@")[-1]
    if not result.ok:
        logger.warning(
            "Contact delivery failed status=%s email_domain=%s",
            result.status_code,
            email_domain,
            extra={
                "event": "contact_delivery_failed",
                "provider_status": result.status_code,
            },
        )
        return error_response(
            status.HTTP_502_BAD_GATEWAY, PROVIDER_FAILED, details=result.error_text
        )

    logger.info(
        "Contact request delivered email_domain=%s",
        email_domain,
        extra={"event": "contact_request_delivered"},
    )
    return _ok_response()
