# geofallback/api/routers/healthz.py
from fastapi import APIRouter

from geofallback.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Liveness probe",
    description="Always 200; does not touch the cache or the upstream.",
)
async def healthz():
    return {"ok": True}
