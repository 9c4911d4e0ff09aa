from typing import List, Optional

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FROM_EMAIL = "Contacto Web <onboarding@resend.dev>"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Contact Relay"
    VERSION: str = "1.0.0"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        validate_default=True,
        description="List of allowed CORS origins. Configure in .env",
    )

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "production":
            if v is None:
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, str) and v.strip() in ("", "[]"):
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, list) and len(v) == 0:
                return ["http://localhost:5173", "http://localhost:3000"]
        return v


class DeliverySettings(BaseSettings):
    """Email delivery configuration.

    Built fresh on every request so that secret rotation on the hosting
    platform takes effect without a cold start.
    """

    RESEND_API_KEY: Optional[SecretStr] = None
    CONTACT_TO_EMAIL: Optional[str] = None
    CONTACT_EMAIL: Optional[str] = None  # legacy name for CONTACT_TO_EMAIL
    CONTACT_FROM_EMAIL: Optional[str] = None

    RESEND_API_URL: str = "https://api.resend.com/emails"
    # No timeout unless the operator sets one; the platform enforces its own.
    RESEND_TIMEOUT: Optional[float] = None

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @property
    def api_key(self) -> Optional[str]:
        if self.RESEND_API_KEY is None:
            return None
        return self.RESEND_API_KEY.get_secret_value() or None

    @property
    def to_email(self) -> Optional[str]:
        return self.CONTACT_TO_EMAIL or self.CONTACT_EMAIL or None

    @property
    def from_email(self) -> str:
        return self.CONTACT_FROM_EMAIL or DEFAULT_FROM_EMAIL


settings = Settings()
