"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

APP_VERSION = "1.0.0"

# Personas with a dedicated key variable. Every other persona uses GOOGLE_API_KEY.
NISHIGAWAS_PERSONA = "nishigawas"


class Settings(BaseSettings):
    """Centralised settings, no hardcoded values anywhere else."""

    # Google AI
    google_api_key: Optional[str] = None
    gemini_api_key_nishigawas: Optional[str] = None
    persona_api_keys: dict[str, str] = Field(default_factory=dict)
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 1.0
    gemini_max_output_tokens: int = 2048
    # None leaves the upstream call without a client-side timeout.
    gemini_timeout_seconds: Optional[float] = None

    # Conversation logging (Google Apps Script web app)
    gas_webapp_url: Optional[str] = None

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # Derived
    @property
    def persona_keys(self) -> dict[str, Optional[str]]:
        """Return the persona -> API key table; PERSONA_API_KEYS entries win."""
        keys: dict[str, Optional[str]] = {NISHIGAWAS_PERSONA: self.gemini_api_key_nishigawas}
        keys.update(self.persona_api_keys)
        return keys

    def resolve_api_key(self, persona: str) -> Optional[str]:
        """
        Return the Gemini key for a persona, or None if it is not configured.

        Unknown personas use the default key. A known persona whose key is
        unset does not fall back to the default.
        """
        return self.persona_keys.get(persona, self.google_api_key) or None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
