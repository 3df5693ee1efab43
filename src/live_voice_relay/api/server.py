"""
API server runner for the relay status endpoints.
"""

import uvicorn
from fastapi import FastAPI


def build_api_server(app: FastAPI, host: str = "0.0.0.0", port: int = 10000) -> uvicorn.Server:
    """
    Build a uvicorn server for ``app`` without starting it.

    The caller awaits ``server.serve()`` and sets ``server.should_exit``
    to stop it.

    Args:
        app: FastAPI application to serve
        host: Host to bind to
        port: Port to bind to

    Returns:
        Configured uvicorn server
    """
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    return uvicorn.Server(config)
