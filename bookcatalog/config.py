from dotenv import load_dotenv
from pydantic import BaseModel
from typing import List
import os

# Carga el .env automáticamente
load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./bookcatalog.db")
    sql_echo: bool = os.getenv("SQL_ECHO", "false").lower() in {"1", "true", "yes"}
    jwt_secret: str = os.getenv("JWT_SECRET", "change-me")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = _split_csv(
        os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000")
    )


# Instancia global de settings
settings = Settings()
