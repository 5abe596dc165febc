# agrogestion/core/config.py
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Roles del sistema
class Roles:
    """Constantes para roles de usuario."""
    ADMIN = "admin"
    USER = "user"


class Settings(BaseSettings):
    """
    Configuración principal de la aplicación, cargada desde variables de entorno.
    """

    # --- Core ---
    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # --- Base de datos ---
    database_url: str = Field(
        "sqlite:///./agrogestion.db", alias="DATABASE_URL", description="URL de conexión a la base de datos"
    )

    # --- Seguridad / JWT ---
    secret_key: str = Field("tu-secreto-jwt", alias="JWT_SECRET", description="Clave secreta para firmar los JWT")
    algorithm: str = Field("HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(
        60 * 24, alias="ACCESS_TOKEN_EXPIRE_MINUTES", description="Duración de los tokens de acceso (1 día)"
    )

    # --- CORS ---
    backend_cors_origins: List[str] | str = Field("*", alias="BACKEND_CORS_ORIGINS")

    # --- Administrador inicial ---
    admin_email: str = Field("admin@agrogestion.com", alias="ADMIN_EMAIL")
    admin_password: str = Field("Admin123!", alias="ADMIN_PASSWORD")
    admin_name: str = Field("Administrador", alias="ADMIN_NAME")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        if isinstance(self.backend_cors_origins, list):
            return self.backend_cors_origins
        return [o.strip() for o in self.backend_cors_origins.split(",") if o.strip()]


settings = Settings()
