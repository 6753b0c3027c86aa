from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    gemini_api_key: str
    gemini_model: str = "gemini-3-flash-preview"
    log_level: str = "INFO"
    request_timeout: float | None = None
    max_searches: int = 100
