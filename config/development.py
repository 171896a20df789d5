import os

from .config import db_config_from_env, env_flag

DB_CONFIG = db_config_from_env(default_password="caregiver")

# Seconds before a store connection attempt is abandoned (reported as store unavailable)
STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
