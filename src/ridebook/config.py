from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # mongodb://host:port/dbname, or memory:// for the in-process store
    host: str = "127.0.0.1"
    port: int = 3100
    debug: bool = False
    cors_origins: list[str] = []
    # Contention retry policy for counter transactions
    allocation_max_attempts: int = 5
    allocation_base_delay: float = 0.01  # seconds, first backoff ceiling
    allocation_max_delay: float = 0.5  # seconds, cap for any single backoff

    model_config = {
        "env_file": [".env"],
        "env_prefix": "RIDEBOOK_",
        "extra": "ignore",
    }
