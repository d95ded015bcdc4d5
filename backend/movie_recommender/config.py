import os
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env file if exists
env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Generative service (OpenAI chat completions)
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY") or None
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    openai_temperature: float = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))
    openai_timeout_seconds: float = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "15"))

    # Number of titles the model is asked for; strict mode rejects any other count
    expected_title_count: int = int(os.getenv("RECOMMENDATION_COUNT", "5"))
    strict_title_count: bool = _env_bool("STRICT_TITLE_COUNT", True)

    # Request log
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./movies.db")

    # CORS Settings
    cors_origins: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
