import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import (
    ConflictError,
    Forbidden,
    NotFound,
    PersistenceError,
    ValidationError,
    handle_unexpected,
)
from app.core.timeutils import split_timestamp
from app.repositories.appointments import AppointmentRepository
from app.schemas.appointment import TERMINAL_STATUSES, AppointmentStatus
from app.schemas.auth import Principal
from app.services.ownership import OwnershipResolver
from app.services.provisioning import ProfileProvisioner

logger = logging.getLogger(__name__)


class AppointmentService:
    """
    Create / list / update / cancel for client appointments.

    Create writes twice, in order: the client profile upsert, then the
    appointment insert. The pair is not transactional; each write is safe
    to repeat, and a profile left behind by a failed insert is kept.
    """

    def __init__(
        self,
        appointments: AppointmentRepository,
        provisioner: ProfileProvisioner,
        ownership: OwnershipResolver,
    ):
        self.appointments = appointments
        self.provisioner = provisioner
        self.ownership = ownership

    def _fetch(self, appt_id: Any) -> Dict[str, Any]:
        try:
            existing = self.appointments.get(appt_id)
        except PersistenceError as e:
            # Malformed ids come back as storage errors
            logger.info(f"Lookup of appointment {appt_id} failed: {e.message}")
            existing = None
        if not existing:
            raise NotFound("Appointment not found.")
        return existing

    @handle_unexpected("create appointment")
    async def create(
        self,
        principal: Principal,
        service_id: Any,
        business_id: Any,
        appointment_date: Optional[str],
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not service_id or not business_id or not appointment_date:
            raise ValidationError("Missing required appointment details (service, owner, date).")

        date, time = split_timestamp(appointment_date)

        self.provisioner.ensure_profile(principal)

        row = {
            "clientid": principal.id,
            "serviceid": service_id,
            "business_id": business_id,
            "date": date,
            "time": time,
            "notes": notes,
            "status": AppointmentStatus.CONFIRMED.value,
        }
        created = self.appointments.insert(row)
        logger.info(f"Appointment {created.get('apptid')} booked by {principal.id} for business {business_id}")
        return created

    @handle_unexpected("list appointments")
    async def list_for_user(self, principal: Principal) -> List[Dict[str, Any]]:
        return self.appointments.list_for_client(principal.id)

    @handle_unexpected("update appointment")
    async def update(
        self,
        principal: Principal,
        appt_id: Any,
        appointment_date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not appointment_date and not notes:
            raise ValidationError("No fields to update provided.")

        existing = self._fetch(appt_id)
        if existing.get("clientid") != principal.id:
            logger.warning(f"User {principal.id} denied update of appointment {appt_id}")
            raise Forbidden("You are not authorized to update this appointment.")

        changes: Dict[str, Any] = {}
        if appointment_date:
            changes["date"], changes["time"] = split_timestamp(appointment_date)
        if notes:
            changes["notes"] = notes

        return self.appointments.update(appt_id, changes)

    def can_cancel(self, principal: Principal, appointment: Dict[str, Any]) -> bool:
        if appointment.get("clientid") == principal.id:
            return True
        return principal.is_business_owner and self.ownership.is_owner(
            principal, appointment.get("business_id")
        )

    @handle_unexpected("cancel appointment")
    async def cancel(
        self,
        principal: Principal,
        appt_id: Any,
        cancellation_reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        existing = self._fetch(appt_id)

        if not self.can_cancel(principal, existing):
            logger.warning(f"User {principal.id} denied cancellation of appointment {appt_id}")
            raise Forbidden("You are not authorized to cancel this appointment.")

        status = existing.get("status")
        if status in TERMINAL_STATUSES:
            if status == AppointmentStatus.CANCELLED.value:
                return existing
            raise ConflictError("Completed appointments cannot be cancelled.")

        changes = {
            "status": AppointmentStatus.CANCELLED.value,
            "cancellation_reason": cancellation_reason,
        }
        try:
            cancelled = self.appointments.update(appt_id, changes)
        except PersistenceError as e:
            raise PersistenceError("Failed to cancel appointment.", status_code=500) from e

        logger.info(f"Appointment {appt_id} cancelled by {principal.id}")
        return cancelled
