from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from geofallback.api.deps import get_location_cache
from geofallback.schemas.common import OkResponse
from geofallback.services.location_cache import LOCATION_KEY, LocationCache

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description="200 once a fresh location fix is cached, 503 until then (or after it expires)",
)
async def readyz(cache: LocationCache = Depends(get_location_cache)):
    if cache.get(LOCATION_KEY) is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": {
                    "code": "location_pending",
                    "message": "No fresh location fix is cached yet",
                }
            },
        )
    return {"ok": True}
