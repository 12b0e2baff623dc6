import os
from dotenv import load_dotenv

# Load .env variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --------------------------
# Database Configuration
# --------------------------
DB_HOST = os.getenv("DB_HOST")
DB_NAME = os.getenv("DB_NAME")
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_PORT = int(os.getenv("DB_PORT", 5432))


def get_database_url():
    """I18N_DATABASE_URL if set, PostgreSQL when DB_HOST is set, else in-memory SQLite."""
    url = os.getenv("I18N_DATABASE_URL")
    if url:
        return url
    if DB_HOST:
        return f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    return "sqlite://"


# --------------------------
# i18n Configuration
# --------------------------
I18N_SUFFIX = "_i18n"
LANGUAGE_ID_LENGTH = 255

DEFAULT_LANGUAGE_FALLBACK = _env_flag("I18N_DEFAULT_LANGUAGE_FALLBACK", True)
I18N_DEFAULT_SCOPE = _env_flag("I18N_DEFAULT_SCOPE", True)
ADD_I18N_SCOPE = _env_flag("I18N_ADD_SCOPE", True)
INJECT_I18N_SCOPE = _env_flag("I18N_INJECT_SCOPE", True)
