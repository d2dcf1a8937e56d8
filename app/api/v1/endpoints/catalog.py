from fastapi import APIRouter, Depends
from typing import List
from app.api.deps import get_business_repository, get_service_repository
from app.repositories.businesses import BusinessRepository
from app.repositories.catalog import ServiceRepository
from app.schemas.catalog import BusinessResponse, ServiceResponse

businesses_router = APIRouter()
services_router = APIRouter()

@businesses_router.get("", response_model=List[BusinessResponse])
async def list_businesses(
    businesses: BusinessRepository = Depends(get_business_repository),
):
    """
    All businesses clients can book with.
    """
    return businesses.list_all()

@services_router.get("", response_model=List[ServiceResponse])
async def list_services(
    services: ServiceRepository = Depends(get_service_repository),
):
    """
    All offered services.
    """
    return services.list_all()
