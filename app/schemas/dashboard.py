from decimal import Decimal
from pydantic import BaseModel, field_serializer
from typing import List, Optional, Any

from app.schemas.appointment import AppointmentStatus
from app.schemas.auth import Identifier

class UpcomingAppointment(BaseModel):
    apptid: Identifier
    date: str
    time: str
    status: AppointmentStatus
    client: Optional[Any] = None # {name}
    service: Optional[Any] = None # {name}

class BusinessSummary(BaseModel):
    totalAppointments: int = 0
    totalRevenue: Decimal = Decimal("0")
    upcomingAppointments: List[UpcomingAppointment] = []

    @field_serializer("totalRevenue")
    def serialize_revenue(self, value: Decimal) -> float:
        return float(value)
