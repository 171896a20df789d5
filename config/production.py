import os

from .config import db_config_from_env, env_flag

DB_CONFIG = db_config_from_env()

STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
