from .config import BULK_MAX_WORKERS, QUERY_CACHE_TTL_SECONDS, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORAGE_BACKEND = "memory"

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

QUERY_CACHE_MAXSIZE = 64
