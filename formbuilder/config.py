import os
import logging
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./formbuilder.db')
API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:8000')
ASSET_URL = os.getenv('ASSET_URL', API_BASE_URL)
STORAGE_ROOT = os.getenv('STORAGE_ROOT', './storage')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
