from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    app_name: str = "BZBookit Backend"
    api_prefix: str = "/api"

    # Supabase configuration
    supabase_url: str = "your_supabase_url_here"
    supabase_key: str = "your_supabase_key_here"
    supabase_service_role_key: Optional[str] = None # Admin scope, falls back to supabase_key

    # Appointment date/time are derived in this zone
    timezone: str = "UTC"

    cors_origins: List[str] = ["http://localhost:5173"]

    openai_api_key: str = "your_openai_api_key_here"
    openai_model: str = "gpt-4o-mini"

    log_level: str = "INFO"
    new_relic_license_key: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
