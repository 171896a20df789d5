import os

from .config import db_config_from_env

DB_CONFIG = db_config_from_env(default_password="caregiver")

STORE_TIMEOUT_SECONDS = 2

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
