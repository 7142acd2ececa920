from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Form defaults (applied when the caller leaves a field blank)
    default_amortization_years: int = 25
    default_term_years: int = 5
    default_invest_rate_pct: float = 7.0

    # App
    api_url: str = "http://localhost:8000"
    cors_origins: list[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
