"""Settings shared by every environment, read from the process environment."""
import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "academy_db"),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Size of the thread pool used by "mark all present"
BULK_MAX_WORKERS = int(os.getenv("BULK_MAX_WORKERS", "8"))

# Query cache: entry cap and seconds before a cached read is reloaded
QUERY_CACHE_MAXSIZE = int(os.getenv("QUERY_CACHE_MAXSIZE", "256"))
QUERY_CACHE_TTL_SECONDS = float(os.getenv("QUERY_CACHE_TTL_SECONDS", "30"))
