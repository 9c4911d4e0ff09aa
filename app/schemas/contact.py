from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContactPayload(BaseModel):
    """Normalized contact-form submission.

    Every field is already coerced to ``str`` and trimmed; emptiness is
    checked by the service, not by the model.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    email: str = ""
    organization: str = ""
    message: str = ""
    bot_field: str = Field(default="", alias="botField")


class ContactResponse(BaseModel):
    ok: bool
    error: Optional[str] = None
    details: Optional[str] = None
