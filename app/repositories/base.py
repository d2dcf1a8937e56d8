"""Shared plumbing for the Supabase-backed repositories."""

import logging
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from app.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class SupabaseRepository:
    """Base repository holding the shared client and one table name."""

    table_name: str = ""

    def __init__(self, client: Client):
        self.client = client

    def _table(self):
        return self.client.table(self.table_name)

    def _execute(self, query) -> Any:
        """Runs a built query, turning storage errors into `PersistenceError`."""
        try:
            return query.execute()
        except APIError as e:
            message = e.message or "Storage request failed."
            logger.error(f"Supabase error on '{self.table_name}': {message}")
            raise PersistenceError(message) from e
