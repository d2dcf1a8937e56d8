from pydantic import BaseModel, ConfigDict
from typing import Optional, Any
import enum

from app.schemas.auth import Identifier

class AppointmentStatus(str, enum.Enum):
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value})

class AppointmentCreate(BaseModel):
    # Presence is checked by the lifecycle service, not the parser
    serviceId: Optional[Identifier] = None
    businessId: Optional[Identifier] = None
    appointmentDate: Optional[str] = None
    notes: Optional[str] = None

class AppointmentUpdate(BaseModel):
    appointmentDate: Optional[str] = None
    notes: Optional[str] = None

class AppointmentCancel(BaseModel):
    cancellationReason: Optional[str] = None

class AppointmentResponse(BaseModel):
    apptid: Identifier
    clientid: Optional[str] = None
    serviceid: Optional[Identifier] = None
    business_id: Optional[Identifier] = None
    date: str
    time: str
    notes: Optional[str] = None
    status: AppointmentStatus
    cancellation_reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, extra="allow")

class ClientAppointmentResponse(BaseModel):
    apptid: Identifier
    date: str
    time: str
    notes: Optional[str] = None
    status: AppointmentStatus
    cancellation_reason: Optional[str] = None
    service: Optional[Any] = None # Nested {name, price, businesses: {name}}

    model_config = ConfigDict(from_attributes=True)
