from fastapi import APIRouter, Depends
from app.api.deps import get_current_user, get_dashboard_service
from app.schemas.auth import Principal
from app.schemas.dashboard import BusinessSummary
from app.services.dashboard_service import DashboardService

router = APIRouter()

@router.get("/business", response_model=BusinessSummary)
async def business_dashboard(
    current_user: Principal = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Appointment totals, completed revenue and the next five confirmed
    appointments for the caller's business. Business owners only.
    """
    return await service.get_business_summary(current_user)
