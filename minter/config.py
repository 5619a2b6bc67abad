"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - RPC endpoint, wallet address and collection addresses come from env / .env
    - get_settings() is cached (lru_cache), one instance per process
    - collection_addresses is positional: index 0 is collection 0 (NFTCollection)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database (last-known-good balance snapshots)
    database_url: str = (
        "postgresql+asyncpg://minter:minter@db:5432/minter"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Chain
    rpc_url: str = "http://localhost:8545"
    collection_addresses: list[str] = []
    contract_abi_path: str | None = None
    wallet_address: str | None = None
    balance_operation: str = "balanceOf"

    # Block events
    enable_block_polling: bool = True
    block_poll_interval_seconds: float = 4.0

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
