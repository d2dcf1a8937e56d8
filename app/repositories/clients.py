from typing import Optional

from app.repositories.base import SupabaseRepository


class ClientRepository(SupabaseRepository):
    """Client profiles, keyed by `clientid` (the identity provider's user id)."""

    table_name = "client"

    def insert_if_absent(self, client_id: str, email: Optional[str], name: str) -> None:
        row = {"clientid": client_id, "email": email, "name": name}
        self._execute(
            self._table().upsert(row, on_conflict="clientid", ignore_duplicates=True)
        )
