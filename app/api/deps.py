from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from app.core.supabase_client import (
    get_supabase_admin_client,
    get_supabase_client,
    get_supabase_session_client,
)
from app.repositories.appointments import AppointmentRepository
from app.repositories.businesses import BusinessRepository
from app.repositories.catalog import ServiceRepository
from app.repositories.clients import ClientRepository
from app.schemas.auth import Principal
from app.services.appointment_service import AppointmentService
from app.services.auth_service import AuthService
from app.services.dashboard_service import DashboardService
from app.services.gatekeeper import Gatekeeper
from app.services.ownership import OwnershipResolver
from app.services.provisioning import ProfileProvisioner
from app.services.text_generation import TextGenerationService

# Missing credentials are reported by the Gatekeeper, not by HTTPBearer
security = HTTPBearer(auto_error=False)

# --- Collaborators ---

def get_gatekeeper(client: Client = Depends(get_supabase_client)) -> Gatekeeper:
    return Gatekeeper(client.auth)

def get_business_repository(client: Client = Depends(get_supabase_client)) -> BusinessRepository:
    return BusinessRepository(client)

def get_service_repository(client: Client = Depends(get_supabase_client)) -> ServiceRepository:
    return ServiceRepository(client)

def get_ownership_resolver(
    businesses: BusinessRepository = Depends(get_business_repository),
) -> OwnershipResolver:
    return OwnershipResolver(businesses)

# --- Authenticated principal ---

async def get_current_user(
    auth: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gatekeeper: Gatekeeper = Depends(get_gatekeeper),
) -> Principal:
    """
    Verifies the Supabase JWT and returns the caller's Principal.
    Nothing downstream runs if this raises.
    """
    token = auth.credentials if auth else None
    return gatekeeper.authenticate(token)

# --- Services ---

def get_appointment_service(
    client: Client = Depends(get_supabase_client),
    ownership: OwnershipResolver = Depends(get_ownership_resolver),
) -> AppointmentService:
    return AppointmentService(
        appointments=AppointmentRepository(client),
        provisioner=ProfileProvisioner(ClientRepository(client)),
        ownership=ownership,
    )

def get_dashboard_service(
    client: Client = Depends(get_supabase_client),
    ownership: OwnershipResolver = Depends(get_ownership_resolver),
) -> DashboardService:
    return DashboardService(AppointmentRepository(client), ownership)

def get_auth_service(
    session_client: Client = Depends(get_supabase_session_client),
    admin_client: Client = Depends(get_supabase_admin_client),
    businesses: BusinessRepository = Depends(get_business_repository),
    ownership: OwnershipResolver = Depends(get_ownership_resolver),
) -> AuthService:
    return AuthService(session_client.auth, admin_client.auth, businesses, ownership)

@lru_cache()
def get_text_generation_service() -> TextGenerationService:
    return TextGenerationService()
