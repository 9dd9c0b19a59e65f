from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from veoscope.exceptions import AuthenticationError


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    gemini_model: str = "gemini-2.5-pro"
    thinking_budget: int = 32768
    inline_limit_mb: int = 20
    file_poll_attempts: int = 60
    file_poll_interval: float = 2.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def require_gemini_api_key(self) -> str:
        if not self.gemini_api_key:
            raise AuthenticationError(
                "Gemini API key not configured. Get one at "
                "https://aistudio.google.com/apikey and set GEMINI_API_KEY in .env"
            )
        return self.gemini_api_key


@lru_cache
def get_settings() -> Settings:
    return Settings()
