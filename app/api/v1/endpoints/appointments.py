from fastapi import APIRouter, Body, Depends, status
from typing import List, Optional
from app.api.deps import get_current_user, get_appointment_service
from app.schemas.appointment import (
    AppointmentCancel,
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    ClientAppointmentResponse,
)
from app.schemas.auth import Principal
from app.services.appointment_service import AppointmentService

router = APIRouter()

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment_in: AppointmentCreate,
    current_user: Principal = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    Book an appointment for the authenticated client. The status is always
    'Confirmed', whatever the body says.
    """
    return await service.create(
        current_user,
        service_id=appointment_in.serviceId,
        business_id=appointment_in.businessId,
        appointment_date=appointment_in.appointmentDate,
        notes=appointment_in.notes,
    )

@router.get("/me", response_model=List[ClientAppointmentResponse])
async def list_my_appointments(
    current_user: Principal = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    All appointments booked by the authenticated client, with service and business names.
    """
    return await service.list_for_user(current_user)

@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    appointment_patch: AppointmentUpdate,
    current_user: Principal = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    Move an appointment and/or change its notes. Only the booking client may do this.
    """
    return await service.update(
        current_user,
        appointment_id,
        appointment_date=appointment_patch.appointmentDate,
        notes=appointment_patch.notes,
    )

@router.delete("/{appointment_id}", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: str,
    cancel_in: Optional[AppointmentCancel] = Body(None),
    current_user: Principal = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    Cancel (soft delete) an appointment. Allowed for the booking client and
    for the owner of the appointment's business.
    """
    reason = cancel_in.cancellationReason if cancel_in else None
    return await service.cancel(current_user, appointment_id, cancellation_reason=reason)
