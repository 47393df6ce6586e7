import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

DEFAULT_BASE_URL = "https://swapi.dev/api"


class Settings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    max_workers: Optional[int] = Field(default=None, ge=1)


ENV_VARS = {
    "base_url": "SWAPI_BASE_URL",
    "timeout": "SWAPI_TIMEOUT",
    "max_attempts": "SWAPI_MAX_ATTEMPTS",
    "max_workers": "SWAPI_MAX_WORKERS",
}


def load_settings() -> Settings:
    """Load and validate API settings from the environment (and .env, if present).

    Raises:
        ValueError: if a variable is set to an invalid value
    """
    load_dotenv()

    raw = {}
    for field, var in ENV_VARS.items():
        value = os.getenv(var)
        if value is None or not value.strip():
            continue
        raw[field] = value.strip()

    try:
        settings = Settings(**raw)
    except ValidationError as e:
        bad = ", ".join(ENV_VARS[str(err["loc"][0])] for err in e.errors())
        raise ValueError(f"Invalid value for {bad}. Did you set the env?") from e

    return settings.model_copy(update={"base_url": settings.base_url.rstrip("/")})
