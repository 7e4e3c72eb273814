"""History and dashboard routes."""

from fastapi import APIRouter, Depends, Query

from ...models.identity import Identity
from ...services import DashboardService, HistoryService
from ..deps import get_dashboard_service, get_history_service, get_identity

router = APIRouter(prefix="/api", tags=["history"])


@router.get("/history")
async def history(
    limit: int | None = Query(default=None),
    identity: Identity = Depends(get_identity),
    service: HistoryService = Depends(get_history_service),
):
    """All workouts, newest first, each with its exercises."""
    entries = await service.get_history(identity, limit=limit)
    return {"workouts": [entry.to_dict() for entry in entries]}


@router.get("/dashboard")
async def dashboard(
    identity: Identity = Depends(get_identity),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Recent workouts and summary counters."""
    result = await service.get_dashboard(identity)
    return result.to_dict()
