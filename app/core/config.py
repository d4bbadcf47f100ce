import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    JWT_SECRET_KEY: str = os.environ.get("JWT_SECRET_KEY", "")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "fhc_session"
    BCRYPT_ROUNDS: int = 10
    ALLOW_ADMIN_SIGNUP: bool = False
    AZURE_STORAGE_CONNECTION_STRING: str = os.environ.get(
        "AZURE_STORAGE_CONNECTION_STRING", ""
    )
    AZURE_STORAGE_UPLOAD_CONTAINER_NAME: str = "user-content"
    UPLOAD_ROOT_FOLDER: str = "fresh-harvest"
    MONGO_URI: str = os.environ.get("MONGO_URI", "")
    MONGO_DIRECT_URI: str = os.environ.get("MONGO_DIRECT_URI", "")
    MONGO_DB_NAME: str = "fresh-harvest-connect"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"


settings = Settings()
