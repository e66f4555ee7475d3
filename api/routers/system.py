"""System/utility endpoints
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app.settings import (
	APP_TITLE,
	APP_VERSION,
	EXEC_BACKEND,
	EXEC_MEMORY_LIMIT_MB,
	EXEC_NETWORK_ACCESS,
	EXEC_TIMEOUT_SECONDS,
	MIN_CODE_LENGTH,
	SUPPORTED_LANGUAGES,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return {"status": "healthy", "service": APP_TITLE, "version": APP_VERSION}


@router.get("/api/config")
async def get_config():
	return {
		"execution_backend": EXEC_BACKEND,
		"memory_limit_mb": EXEC_MEMORY_LIMIT_MB,
		"timeout_seconds": EXEC_TIMEOUT_SECONDS,
		"network_access": EXEC_NETWORK_ACCESS,
		"supported_languages": SUPPORTED_LANGUAGES,
		"min_code_length": MIN_CODE_LENGTH,
	}


__all__ = ["router"]
