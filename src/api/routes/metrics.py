from fastapi import APIRouter, Depends, status

from src.app.services.metrics import RequestMetrics
from src.depends import get_metrics

router = APIRouter(prefix="/v1", tags=["Metrics"])


@router.get("/metrics", status_code=status.HTTP_200_OK)
async def show_metrics(metrics: RequestMetrics = Depends(get_metrics)):
    """Snapshot of the in-process request counters"""
    return metrics.snapshot()
