from pathlib import Path
from typing import List

from pydantic import field_validator
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

    PROJECT_NAME: str = 'Ticket Sale Contract'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_TO_FILE: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Ledger host
    CONTRACT_ADDRESS: str = '0x' + 'c0' * 20  # account holding the contract's value
    INITIAL_BLOCK_HEIGHT: int = 0

    @field_validator('INITIAL_BLOCK_HEIGHT')
    @classmethod
    def validate_initial_block_height(cls, v: int) -> int:
        if v < 0:
            raise ValueError('INITIAL_BLOCK_HEIGHT must not be negative')
        return v

    # Ticket sale
    MAX_CUSTOMER_IDENTIFIER_LENGTH: int = 256  # characters, must fit the uint16 byte-length prefix

    @field_validator('MAX_CUSTOMER_IDENTIFIER_LENGTH')
    @classmethod
    def validate_customer_identifier_length(cls, v: int) -> int:
        # utf-8 uses at most 4 bytes per character
        if not 0 <= v * 4 <= 0xFFFF:
            raise ValueError('MAX_CUSTOMER_IDENTIFIER_LENGTH must be between 0 and 16383')
        return v


settings = Settings()  # type: ignore
