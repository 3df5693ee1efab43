"""
FastAPI application exposing the relay's liveness and session status.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ..core import SessionController


class StatusResponse(BaseModel):
    """Response model for the session status."""
    streaming: bool
    state: str
    source_url: str
    resolved_url: str
    resolved_expiry: int
    transcoder_pid: Optional[int] = None
    audio: Optional[Dict[str, Any]] = None
    now: int


def create_app(controller: SessionController) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        controller: Session controller to report on

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Live Voice Relay",
        description="Status endpoints for the live stream voice relay",
        version="1.0.0",
    )

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness endpoint."""
        return "✅ Live voice relay is running."

    @app.get("/status", response_model=StatusResponse)
    async def status():
        """
        Current session status.

        Returns:
            Source URL, resolved media URL, its expiry and the current time
        """
        return StatusResponse(**controller.get_status())

    return app
