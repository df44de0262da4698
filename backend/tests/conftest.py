"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or wait on artificial delays
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_CONNECT_RETRY_DELAY_MS", "0")
os.environ.setdefault("ZKP_VERIFICATION_DELAY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
