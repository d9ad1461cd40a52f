# tonelens/settings.py
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure .env is loaded if present
load_dotenv()


class Settings(BaseSettings):
    # Tone analyzer (IBM Watson compatible)
    TONE_ANALYZER_URL: Optional[str] = None  # e.g., https://api.eu-de.tone-analyzer.watson.cloud.ibm.com/instances/<id>
    TONE_ANALYZER_APIKEY: Optional[str] = None
    TONE_ANALYZER_VERSION: str = "2017-09-21"

    # Summarization / generation (DeepAI standard API)
    DEEPAI_APIKEY: Optional[str] = None
    DEEPAI_BASE_URL: str = "https://api.deepai.org/api"

    # Optional OpenAI-compatible fallback for summarize / generate
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None  # e.g., https://api.openai.com/v1
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Texts this short are never sent for analysis
    MIN_TEXT_LENGTH: int = 10

    REQUEST_TIMEOUT: float = 60.0
    MAX_RETRIES: int = 3

    # Server options
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
