import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import PersistenceError
from app.repositories.businesses import BusinessRepository
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """
    Answers whether a principal controls a business. A failed lookup counts
    as "owns nothing".
    """

    def __init__(self, businesses: BusinessRepository):
        self.businesses = businesses

    def _owned(self, principal: Principal, business_id: Any = None) -> List[Dict[str, Any]]:
        try:
            return self.businesses.find_owned(principal.id, business_id)
        except PersistenceError as e:
            logger.error(f"Ownership lookup failed for {principal.id}: {e.message}")
            return []

    def is_owner(self, principal: Principal, business_id: Any) -> bool:
        if business_id is None:
            return False
        return bool(self._owned(principal, business_id))

    def resolve_business_id(self, principal: Principal) -> Optional[Any]:
        """
        The one business owned by `principal`. None when there is no match
        or the match is ambiguous.
        """
        rows = self._owned(principal)
        if len(rows) != 1:
            if rows:
                logger.warning(f"Owner {principal.id} has {len(rows)} businesses; none selected")
            return None
        return rows[0]["id"]
