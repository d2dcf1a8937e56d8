import logging
from typing import Any, Dict, List, Optional

from postgrest.types import CountMethod

from app.core.exceptions import PersistenceError
from app.repositories.base import SupabaseRepository
from app.schemas.appointment import AppointmentStatus

logger = logging.getLogger(__name__)

CLIENT_LISTING_COLUMNS = (
    "apptid, date, time, notes, status, cancellation_reason, "
    "service:service!inner(name, price, businesses!inner(name))"
)
UPCOMING_COLUMNS = "apptid, date, time, status, client:clientid(name), service:serviceid(name)"


class AppointmentRepository(SupabaseRepository):
    """
    Appointment rows: `apptid, clientid, serviceid, business_id, date, time,
    notes, status, cancellation_reason`. Rows are never deleted.
    """

    table_name = "appointment"

    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        res = self._execute(self._table().insert(row))
        if not res.data:
            raise PersistenceError("Appointment was not returned after insert.")
        return res.data[0]

    def get(self, appt_id: Any) -> Optional[Dict[str, Any]]:
        res = self._execute(self._table().select("*").eq("apptid", appt_id).limit(1))
        return res.data[0] if res.data else None

    def update(self, appt_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        res = self._execute(self._table().update(changes).eq("apptid", appt_id))
        if not res.data:
            raise PersistenceError(f"Appointment {appt_id} was not updated.")
        return res.data[0]

    def list_for_client(self, client_id: str) -> List[Dict[str, Any]]:
        res = self._execute(
            self._table().select(CLIENT_LISTING_COLUMNS).eq("clientid", client_id)
        )
        return res.data or []

    # --- Dashboard reads ---

    def count_for_business(self, business_id: Any) -> int:
        res = self._execute(
            self._table()
            .select("apptid", count=CountMethod.exact, head=True)
            .eq("business_id", business_id)
        )
        return res.count or 0

    def completed_prices(self, business_id: Any) -> List[Any]:
        """Service price of every Completed appointment; None where unknown."""
        res = self._execute(
            self._table()
            .select("service:serviceid(price)")
            .eq("business_id", business_id)
            .eq("status", AppointmentStatus.COMPLETED.value)
        )
        return [(row.get("service") or {}).get("price") for row in res.data or []]

    def upcoming_for_business(self, business_id: Any, limit: int = 5) -> List[Dict[str, Any]]:
        res = self._execute(
            self._table()
            .select(UPCOMING_COLUMNS)
            .eq("business_id", business_id)
            .eq("status", AppointmentStatus.CONFIRMED.value)
            .order("date")
            .order("time")
            .limit(limit)
        )
        return res.data or []
