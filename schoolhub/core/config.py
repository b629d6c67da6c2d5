# schoolhub/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    database_url: str
    redis_url: str
    jwt_secret_key: str

    jwt_algorithm: str = 'HS256'
    access_token_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = 12

    app_name: str = 'schoolhub'
    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    cache_enabled: bool = True
    cache_ttl_seconds: int = 300

    items_per_page: int = 10

    # Printed on generated documents
    school_name: str = 'SchoolHub School'
    school_address: str = ''
    school_fiscal_code: str = ''

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
