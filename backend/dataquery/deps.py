# backend/dataquery/deps.py
from __future__ import annotations
import logging
from fastapi import HTTPException, Request, status

from dataquery.container import AppContainer
from dataquery.commands import Commands

logger = logging.getLogger("dataquery.deps")

def get_container(request: Request) -> AppContainer:
    """FastAPI dependency returning the container built during the lifespan."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        logger.warning("Container requested before startup finished")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Engine not ready")
    return container

def get_commands(request: Request) -> Commands:
    return get_container(request).commands
