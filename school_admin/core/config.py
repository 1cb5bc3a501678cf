# school_admin/core/config.py
"""Application configuration using Pydantic."""
import os
import tempfile
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    database_url: str = 'sqlite+aiosqlite:///./school_admin.db'

    app_version: str = '1.0.0'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    # External roster service
    external_api_url: str = 'http://localhost:5000'
    external_api_timeout: float = 5.0
    external_fetch_limit: int = 10000

    # CSV upload
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    upload_dir: str = os.path.join(tempfile.gettempdir(), 'school-administration-system-uploads')

    # Startup
    db_connect_retries: int = 20
    db_connect_retry_delay: float = 3.0

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }


settings = Settings()
