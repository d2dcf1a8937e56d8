from fastapi import APIRouter
from app.api.v1.endpoints import ai, appointments, auth, catalog, dashboard, notifications

api_router = APIRouter()
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(catalog.businesses_router, prefix="/businesses", tags=["businesses"])
api_router.include_router(catalog.services_router, prefix="/services", tags=["services"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(ai.ai_router, prefix="/ai", tags=["ai"])
api_router.include_router(ai.chat_router, prefix="/chat", tags=["ai"])
