from typing import Any, Dict, List, Optional

from app.repositories.base import SupabaseRepository


class BusinessRepository(SupabaseRepository):
    table_name = "businesses"

    def find_owned(self, owner_id: str, business_id: Optional[Any] = None) -> List[Dict[str, Any]]:
        """Businesses owned by `owner_id`, optionally narrowed to one id."""
        query = self._table().select("id").eq("owner_id", owner_id)
        if business_id is not None:
            query = query.eq("id", business_id)
        res = self._execute(query)
        return res.data or []

    def list_all(self) -> List[Dict[str, Any]]:
        res = self._execute(self._table().select("id, name"))
        return res.data or []

    def create(self, owner_id: str, name: str, email: Optional[str]) -> Dict[str, Any]:
        res = self._execute(
            self._table().insert({"owner_id": owner_id, "name": name, "email": email})
        )
        return res.data[0] if res.data else {}
