import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, List

from app.core.exceptions import Forbidden, NotFound, handle_unexpected
from app.repositories.appointments import AppointmentRepository
from app.schemas.appointment import AppointmentStatus
from app.schemas.auth import Principal
from app.schemas.dashboard import BusinessSummary
from app.services.ownership import OwnershipResolver

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5


def sum_prices(prices: Iterable[Any]) -> Decimal:
    """Adds service prices; missing or unparseable prices count as 0."""
    total = Decimal("0")
    for price in prices:
        if price is None:
            continue
        try:
            total += Decimal(str(price))
        except InvalidOperation:
            logger.warning(f"Ignoring non-numeric service price {price!r}")
    return total


class DashboardService:
    """Business-owner summary built from three independent reads."""

    def __init__(self, appointments: AppointmentRepository, ownership: OwnershipResolver):
        self.appointments = appointments
        self.ownership = ownership

    async def _read(self, label: str, business_id: Any, fn: Callable[[Any], Any], default: Any) -> Any:
        # Every sub-query falls back to its empty value on failure
        try:
            return await asyncio.to_thread(fn, business_id)
        except Exception as e:
            logger.error(f"Dashboard query '{label}' failed for business {business_id}: {e}")
            return default

    @handle_unexpected("business dashboard")
    async def get_business_summary(self, principal: Principal) -> BusinessSummary:
        if not principal.is_business_owner:
            raise Forbidden("Forbidden: Access is restricted to business owners.")

        business_id = self.ownership.resolve_business_id(principal)
        if business_id is None:
            logger.error(f"Dashboard: no business found for owner {principal.id}")
            raise NotFound("Could not find an associated business for this user.")

        total, prices, upcoming = await asyncio.gather(
            self._read("total", business_id, self.appointments.count_for_business, 0),
            self._read("revenue", business_id, self.appointments.completed_prices, []),
            self._read(
                "upcoming",
                business_id,
                lambda bid: self.appointments.upcoming_for_business(bid, limit=UPCOMING_LIMIT),
                [],
            ),
        )

        return BusinessSummary(
            totalAppointments=total or 0,
            totalRevenue=sum_prices(prices),
            upcomingAppointments=self._order_upcoming(upcoming),
        )

    @staticmethod
    def _order_upcoming(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        confirmed = [r for r in rows if r.get("status") == AppointmentStatus.CONFIRMED.value]
        confirmed.sort(key=lambda r: (r.get("date") or "", r.get("time") or ""))
        return confirmed[:UPCOMING_LIMIT]
