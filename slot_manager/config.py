#slot_manager\config.py

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlotManagerSettings(BaseSettings):
    """Slot manager configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SLOT_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Slot pool
    # Placeholder until the llama.cpp server reports its real slot count
    default_slots: int = Field(default=2, ge=0)
    settings_key: str = "llamacpp-slot-manager"

    # Settings store
    database_url: str = "sqlite:///slot_manager.db"
    echo_sql: bool = False
    save_debounce_seconds: float = Field(default=1.0, ge=0)

    # Downstream llama.cpp server
    llama_server_url: str = "http://127.0.0.1:8080"
    request_timeout: float = 10.0

    # Display
    default_avatar: str = "img/ai4.png"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    log_level: str = "INFO"


settings = SlotManagerSettings()
