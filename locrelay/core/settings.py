"""
Core settings and environment variables for Location Relay.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import ClassVar, List, Optional, Tuple

from locrelay.core.errors import ConfigurationMissing


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.

    Required values are declared Optional so the object can always be built;
    use get_required() to read them.
    """

    REQUIRED: ClassVar[Tuple[str, ...]] = ("SENDGRID_API_KEY", "FROM_EMAIL", "TO_EMAIL")

    # Application
    APP_NAME: str = "Location Relay"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Access tokens (comma-separated)
    VALID_TOKENS: str = "ABC123"

    # Outbound email (SendGrid v3)
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    EMAIL_TIMEOUT_SECONDS: float = 10.0
    FROM_EMAIL: Optional[str] = None
    FROM_NAME: Optional[str] = None  # e.g. "Marcio Alta | Alta Investimentos"
    REPLY_TO: Optional[str] = None
    TO_EMAIL: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    def get_optional(self, name: str) -> Optional[str]:
        """Return a setting's value, or None when it is unset or blank."""
        value = getattr(self, name, None)
        if value is None:
            return None
        value = str(value)
        return value if value.strip() else None

    def get_required(self, name: str) -> str:
        """
        Return a setting's value.

        Raises:
            ConfigurationMissing: if the setting is unset or blank
        """
        value = self.get_optional(name)
        if value is None:
            raise ConfigurationMissing(name)
        return value

    def missing_required(self) -> List[str]:
        return [name for name in self.REQUIRED if self.get_optional(name) is None]

    def token_list(self) -> List[str]:
        return [t.strip() for t in self.VALID_TOKENS.split(",") if t.strip()]


# Global settings instance
settings = Settings()
