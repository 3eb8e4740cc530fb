"""Application configuration."""

import os
from dataclasses import dataclass

import dotenv

dotenv.load_dotenv()


@dataclass
class AppSettings:
    """Main application settings with environment variable overrides."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Chat-completion provider
    base_url: str = "https://api.openai.com/v1"
    api_key: str = ""
    model: str = "gpt-3.5-turbo"
    max_tokens: int = 1000
    temperature: float = 0.7
    timeout: float = 30.0

    # Retry wrapper; 1 attempt means no retry
    retry_attempts: int = 3
    retry_delay: float = 1.0

    default_sport: str = "basketball"

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("Provider base URL is required")
        if not 100 <= self.max_tokens <= 4000:
            raise ValueError("Max tokens must be between 100 and 4000")
        if not 0 <= self.temperature <= 2:
            raise ValueError("Temperature must be between 0 and 2")

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            host=os.getenv("COACH_HOST", cls.host),
            port=int(os.getenv("COACH_PORT", cls.port)),
            log_level=os.getenv("COACH_LOG_LEVEL", cls.log_level),
            base_url=os.getenv("COACH_BASE_URL", cls.base_url),
            api_key=os.getenv("COACH_API_KEY", cls.api_key),
            model=os.getenv("COACH_MODEL", cls.model),
            max_tokens=int(os.getenv("COACH_MAX_TOKENS", cls.max_tokens)),
            temperature=float(os.getenv("COACH_TEMPERATURE", cls.temperature)),
            timeout=float(os.getenv("COACH_TIMEOUT", cls.timeout)),
            retry_attempts=int(os.getenv("COACH_RETRY_ATTEMPTS", cls.retry_attempts)),
            retry_delay=float(os.getenv("COACH_RETRY_DELAY", cls.retry_delay)),
            default_sport=os.getenv("COACH_DEFAULT_SPORT", cls.default_sport),
        )


settings = AppSettings.from_env()
