"""Account API routes."""

from fastapi import APIRouter, Depends

from registry.auth import get_current_user
from registry.schemas.files import StorageMetricsResponse
from registry.services.quota_service import QuotaService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("/me/metrics", response_model=StorageMetricsResponse)
async def get_storage_metrics(current_user: str = Depends(get_current_user)):
    """
    Storage usage of the calling account. Accounts with no uploads report zeros.
    """
    metrics = QuotaService().get_storage_metrics(current_user)
    return StorageMetricsResponse.from_metrics(metrics)
