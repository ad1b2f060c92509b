"""Application settings and validation."""

import logging
import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    SEED_ON_STARTUP: bool
    ALLOW_DEV_CORS: bool
    LOG_LEVEL: str
    PORT: int

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'db_alumnos.db'}")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "true").lower() == "true"
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.PORT = int(os.getenv("PORT", "3000"))
        self._validate()

    def _validate(self):
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {self.LOG_LEVEL!r}")
        if self.PORT <= 0:
            raise RuntimeError("PORT must be a positive integer")


settings = Settings()
