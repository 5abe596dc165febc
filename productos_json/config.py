from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    products_file: str = Field("products.json", alias="PRODUCTS_FILE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
