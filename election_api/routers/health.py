"""Health check endpoint.

Returns service status including database connectivity.  Responds 200 when
the storage handle answers a probe query and 503 otherwise.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from election_api.db.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(storage: Storage = Depends(get_storage)) -> Any:
    """Return health status with a real database connectivity test."""
    connected = storage.is_open and storage.ping()

    payload: dict[str, str] = {
        "status": "ok" if connected else "degraded",
        "database": "connected" if connected else "disconnected",
    }

    if not connected:
        logger.warning("health_check_degraded", extra={"database_path": storage.database_path})
        return JSONResponse(status_code=503, content=payload)

    return payload
