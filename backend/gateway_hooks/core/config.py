from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    webhook_path: str = "/webhooks"
    max_body_bytes: int = 1_048_576  # 1 MiB
    # 200 matches the legacy handler.
    malformed_json_status: int = 200
    record_error_status: int = 422
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "GATEWAY_HOOKS_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
