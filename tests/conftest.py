"""Root conftest: shared test configuration."""

import os

# Tests never touch a real node or Postgres
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RPC_URL", "http://127.0.0.1:1")
os.environ.setdefault("ENABLE_BLOCK_POLLING", "false")
