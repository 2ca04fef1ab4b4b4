from datetime import datetime, timezone
from enum import StrEnum
import json
from pathlib import Path
from typing import Annotated, List

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')

# 2023-11-25 01:00 UTC -> 2024-11-25 01:00 UTC
_DEFAULT_TERM_START_AT = int(datetime(2023, 11, 25, 1, 0, tzinfo=timezone.utc).timestamp())
_DEFAULT_TERM_END_AT = int(datetime(2024, 11, 25, 1, 0, tzinfo=timezone.utc).timestamp())


class AdmissionPolicy(StrEnum):
    PER_SLOT = 'per_slot'  # every covered slot must have capacity left
    ANY_SLOT = 'any_slot'  # at least one covered slot has capacity left


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Livestream Reservation Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'livestream'
    POSTGRES_PORT: int = 5432

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # asyncpg Connection Pool Configuration
    ASYNCPG_POOL_MIN_SIZE: int = 10
    ASYNCPG_POOL_MAX_SIZE: int = 50
    ASYNCPG_POOL_COMMAND_TIMEOUT: float = 30.0  # Per-statement timeout (seconds)
    ASYNCPG_POOL_TIMEOUT: float = 10.0  # Connection acquire timeout (seconds)
    ASYNCPG_POOL_MAX_INACTIVE_LIFETIME: float = 300.0
    ASYNCPG_POOL_MAX_QUERIES: int = 50000

    # Session / Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    SESSION_COOKIE_NAME: str = 'livestream_session'
    SESSION_EXPIRE_DAYS: int = 7

    # CORS
    # NoDecode: the dotenv value is a comma separated string, split below
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.startswith('['):
            return json.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Reservation calendar (epoch seconds)
    RESERVATION_TERM_START_AT: int = _DEFAULT_TERM_START_AT
    RESERVATION_TERM_END_AT: int = _DEFAULT_TERM_END_AT
    RESERVATION_SLOT_SECONDS: int = 3600
    RESERVATION_SLOT_CAPACITY: int = 5
    RESERVATION_LOCK_TIMEOUT_MS: int = 3000  # Max wait on slot row locks
    RESERVATION_ADMISSION_POLICY: AdmissionPolicy = AdmissionPolicy.PER_SLOT

    @model_validator(mode='after')
    def validate_reservation_term(self) -> 'Settings':
        if self.RESERVATION_TERM_START_AT >= self.RESERVATION_TERM_END_AT:
            raise ValueError('RESERVATION_TERM_START_AT must be before RESERVATION_TERM_END_AT')
        if self.RESERVATION_SLOT_SECONDS <= 0:
            raise ValueError('RESERVATION_SLOT_SECONDS must be positive')
        if self.RESERVATION_SLOT_CAPACITY < 0:
            raise ValueError('RESERVATION_SLOT_CAPACITY must not be negative')
        return self


settings = Settings()  # type: ignore
