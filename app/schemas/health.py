"""
Schemas for the health check endpoint.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="'healthy', or 'degraded' if an enabled language serves a fallback dictionary")
    spellcheck_enabled: bool = Field(description="Whether dictionaries were loaded at startup")
    languages_ready: List[str] = Field(description="Enabled languages with a loaded dictionary")
    languages_degraded: List[str] = Field(description="Ready languages serving the bootstrap list or no dictionary")
    timestamp: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "spellcheck_enabled": True,
                "languages_ready": ["rw"],
                "languages_degraded": [],
                "timestamp": "2025-01-01T12:00:00Z"
            }
        }
