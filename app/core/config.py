# app/core/config.py
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    env: str = "dev"
    database_url: str
    log_level: str = "INFO"

    # NLU externo (opcional: sin key el bot responde solo con reglas)
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    nlu_model: str = "gpt-4o-mini"
    nlu_timeout_seconds: float = 8.0
    render_temperature: float = 0.2

    # Tenant
    bot_timezone: str = "America/Argentina/Cordoba"
    default_bot_id: str = "default"
    catalog_limit: int = 20

    # Busca primero en variables de entorno y luego en .env
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
