from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "grading"
    postgres_user: str = "grading"
    postgres_password: str = ""

    # Full SQLAlchemy URL, overrides the postgres_* fields when set
    database_url: Optional[str] = None

    # Judge0-compatible execution engine
    judge_url: str = "http://localhost:2358"
    judge_auth_token: Optional[str] = None
    judge_rapidapi_key: Optional[str] = None
    judge_rapidapi_host: Optional[str] = None
    judge_request_timeout_seconds: float = 10.0
    judge_poll_interval_seconds: float = 1.0
    judge_max_poll_attempts: int = 30
    judge_max_batch_size: int = 20

    cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"

    def get_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"postgresql://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated origins into list"""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def judge_poll_budget_seconds(self) -> float:
        """Upper bound a single fetch_results call may block for"""
        return self.judge_poll_interval_seconds * self.judge_max_poll_attempts


config = Settings()
