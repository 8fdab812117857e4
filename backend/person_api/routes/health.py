"""
Person API: Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Checks that the store is loaded and its CSV file is still on disk,
       and reports which file that is.

Status levels:
    - healthy:   Store loaded and CSV file present (HTTP 200)
    - unhealthy: Store missing or CSV file gone (HTTP 503)
"""

import logging

from fastapi import APIRouter, Request, Response

from person_api import __version__
from person_api.schemas.person import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Storage unavailable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    store = getattr(request.app.state, "person_store", None)

    if store is None:
        storage_status = "not_loaded"
        person_count = 0
        csv_file = None
    else:
        storage_status = "available" if store.file_path.is_file() else "missing"
        person_count = len(store)
        csv_file = str(store.file_path)

    overall = "healthy" if storage_status == "available" else "unhealthy"
    if overall != "healthy":
        logger.warning("Health check: storage %s", storage_status)
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage_status,
        person_count=person_count,
        csv_file=csv_file,
    )
