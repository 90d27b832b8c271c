import json
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Marketplace'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    SERVICE_NAME: str = 'marketplace'
    DEPLOY_ENV: str = 'local_dev'
    LOG_DIR: Path = _PROJECT_ROOT / 'logs'

    # Security
    BCRYPT_ROUNDS: int = 12

    @field_validator('BCRYPT_ROUNDS')
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt only accepts log_rounds in [4, 31]
        if not 4 <= v <= 31:
            raise ValueError('BCRYPT_ROUNDS must be between 4 and 31')
        return v

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.startswith('['):
            return json.loads(v)
        if isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: str = 'postgres'
    POSTGRES_DB: str = 'marketplace'
    DATABASE_URL: str | None = None  # overrides the POSTGRES_* parts when set

    # Connection pool (ignored for sqlite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )


settings = Settings()  # type: ignore
