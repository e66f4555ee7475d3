"""Backend settings (single source of truth).

This module loads `.env` (if present) and exposes typed-ish constants.
Keep it lightweight to avoid circular imports.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


APP_TITLE = "Contest Judge Backend"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Team contest backend: problems, judged submissions and a live leaderboard"


def _split_csv(value: str) -> List[str]:
    parts = [p.strip() for p in value.split(",")]
    return [p for p in parts if p]


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "y")


# CORS
_CORS_RAW = os.getenv("CORS_ALLOW_ORIGINS", "*").strip()
CORS_ALLOW_ORIGINS: List[str] = ["*"] if _CORS_RAW == "*" else _split_csv(_CORS_RAW)


# Auth/JWT
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 12)))

# Deterministic dev default so the app boots without configuration.
# Set SECRET_KEY in production.
SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-change-me")

# ADMIN_PASSWORD_HASH (argon2) wins over the plain ADMIN_PASSWORD when both are set.
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_PASSWORD_HASH: str = os.getenv("ADMIN_PASSWORD_HASH", "")


# Database
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./competition.db")
SEED_PROBLEMS_ON_STARTUP: bool = _env_bool("SEED_PROBLEMS_ON_STARTUP", "true")


# Grading
SUPPORTED_LANGUAGES: List[str] = _split_csv(os.getenv("SUPPORTED_LANGUAGES", "python"))
MIN_CODE_LENGTH: int = int(os.getenv("MIN_CODE_LENGTH", "50"))

# Sandbox / execution limits (also reported by /api/config)
EXEC_BACKEND: str = os.getenv("EXEC_BACKEND", "subprocess")
EXEC_TIMEOUT_SECONDS: int = int(os.getenv("EXEC_TIMEOUT_SECONDS", "5"))
EXEC_MEMORY_LIMIT_MB: int = int(os.getenv("EXEC_MEMORY_LIMIT_MB", "256"))
EXEC_NETWORK_ACCESS: bool = False
SANDBOX_IMAGE: str = os.getenv("SANDBOX_IMAGE", "python:3.12-slim")


# Contest views
# Only the first few test cases of a problem are shown to teams.
PROBLEM_PREVIEW_TESTCASES: int = 2
ACTIVITY_FEED_LIMIT: int = 50
# A team counts as active in /admin/stats if it submitted within this window.
ACTIVE_WINDOW_MINUTES: int = 5
