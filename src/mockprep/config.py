from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "MockPrep"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 8788
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data/mockprep.db"
    data_dir: Path = Path("./data")
    resume_dir: Path = Path("./data/resumes")
    cors_origins: str = "http://127.0.0.1:8788"

    verification_debounce_sec: float = 1.5
    chatbot_inactivity_timeout_sec: float = 30.0
    chatbot_question_count: int = 5
    live_mock_question_count: int = 5
    live_mock_min_words: int = 20
    quiz_time_limit_sec: int = 60
    resume_max_bytes: int = 10 * 1024 * 1024

    scoring_strategy: str = "random"
    fixed_score: int = 75

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("scoring_strategy")
    @classmethod
    def validate_scoring_strategy(cls, value: str) -> str:
        allowed = {"random", "fixed"}
        if value not in allowed:
            raise ValueError(f"scoring_strategy must be one of {sorted(allowed)}")
        return value

    @field_validator("fixed_score")
    @classmethod
    def validate_fixed_score(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError("fixed_score must be between 0 and 100")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
