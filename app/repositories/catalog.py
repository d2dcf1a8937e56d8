from typing import Any, Dict, List

from app.repositories.base import SupabaseRepository


class ServiceRepository(SupabaseRepository):
    """Offered services. `serviceid` is exposed as `id`."""

    table_name = "service"

    def list_all(self) -> List[Dict[str, Any]]:
        res = self._execute(self._table().select("id:serviceid, name, price"))
        return res.data or []
