import logging

from app.core.exceptions import PersistenceError
from app.repositories.clients import ClientRepository
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_NAME = "New User"


class ProfileProvisioner:
    """Just-in-time creation of the client profile an appointment points at."""

    def __init__(self, clients: ClientRepository):
        self.clients = clients

    def ensure_profile(self, principal: Principal) -> None:
        """Insert-if-absent; an existing profile is left as it is."""
        try:
            self.clients.insert_if_absent(
                client_id=principal.id,
                email=principal.email,
                name=principal.name or DEFAULT_CLIENT_NAME,
            )
        except PersistenceError as e:
            logger.error(f"Could not ensure client profile for {principal.id}: {e.message}")
            raise PersistenceError(
                "Failed to ensure user profile exists before booking.", status_code=500
            ) from e
