from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # API Keys
    anthropic_api_key: str = ""

    # Advice generation
    advice_model: str = "claude-haiku-4-5-20251001"
    advice_max_tokens: int = 600
    advice_language: str = "Indonesian"

    # Ledger
    currency: str = "IDR"
    reminder_window_days: int = 7  # Upcoming-bill window

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
