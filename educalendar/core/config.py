from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT")

    admin_code: str = Field(..., alias="ADMIN_CODE")
    allowed_origins: str = Field("http://localhost:3000", alias="ALLOWED_ORIGINS")

    app_env: str = Field("production", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    store_backend: str = Field("firestore", alias="STORE_BACKEND")  # firestore | sql
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")

    firebase_project_id: Optional[str] = Field(None, alias="FIREBASE_PROJECT_ID")
    firebase_private_key_id: Optional[str] = Field(None, alias="FIREBASE_PRIVATE_KEY_ID")
    firebase_private_key: Optional[str] = Field(None, alias="FIREBASE_PRIVATE_KEY")
    firebase_client_email: Optional[str] = Field(None, alias="FIREBASE_CLIENT_EMAIL")
    firebase_client_id: Optional[str] = Field(None, alias="FIREBASE_CLIENT_ID")
    firebase_cert_url: Optional[str] = Field(None, alias="FIREBASE_CERT_URL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def allowed_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def debug(self) -> bool:
        return self.app_env.lower() == "development"

    def firebase_service_account(self) -> Dict[str, Optional[str]]:
        """Service-account mapping accepted by ``firebase_admin.credentials.Certificate``."""
        private_key = self.firebase_private_key.replace("\\n", "\n") if self.firebase_private_key else None
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            "private_key": private_key,
            "client_email": self.firebase_client_email,
            "client_id": self.firebase_client_id,
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
            "client_x509_cert_url": self.firebase_cert_url,
        }


@lru_cache()
def load_settings() -> Settings:
    """Read the environment once per process."""
    return Settings()
