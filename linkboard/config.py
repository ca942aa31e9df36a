import os
from dotenv import load_dotenv

# Load .env from the working directory, if present
load_dotenv()


def _database_url():
    url = os.getenv("DATABASE_URL", "sqlite:///site.db")
    # SQLAlchemy only understands the postgresql:// scheme
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False  # Avoids a warning
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8080"))

    # Logging level
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
