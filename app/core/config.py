import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASS')}@{os.getenv('DB_HOST')}:{os.getenv('DB_PORT')}/{os.getenv('DB_NAME')}"


DATABASE_URL = database_url()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
AUTO_CREATE_DATABASE = _flag("AUTO_CREATE_DATABASE", True)
