from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Scanner'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Remote ticket store (scanner API)
    SCANNER_API_BASE_URL: str = 'http://localhost:3000'
    SCANNER_KEY: SecretStr = SecretStr('')
    SCANNER_API_TIMEOUT: float = 10.0  # Request timeout (seconds)

    @field_validator('SCANNER_API_BASE_URL', mode='after')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        base = v.strip().rstrip('/')
        if not base:
            raise ValueError('SCANNER_API_BASE_URL must not be empty')
        return base

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your scanner front end URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    @property
    def scanner_key(self) -> str | None:
        key = self.SCANNER_KEY.get_secret_value().strip()
        return key or None


settings = Settings()  # type: ignore
