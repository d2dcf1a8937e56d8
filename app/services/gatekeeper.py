import logging
from typing import Any, Optional

from app.core.exceptions import Unauthorized
from app.schemas.auth import Principal, Role

logger = logging.getLogger(__name__)


def parse_role(raw: Any) -> Role:
    """
    Closes the provider's free-form role metadata over `Role`.
    Unknown or missing values degrade to `Role.CLIENT`.
    """
    if raw is None or raw == "":
        return Role.CLIENT
    try:
        return Role(raw)
    except ValueError:
        logger.warning(f"Unrecognized role metadata {raw!r}; treating as client")
        return Role.CLIENT


def principal_from_user(user: Any) -> Principal:
    """Builds a `Principal` from a Supabase auth user record."""
    app_metadata = getattr(user, "app_metadata", None) or {}
    user_metadata = getattr(user, "user_metadata", None) or {}
    return Principal(
        id=str(user.id),
        email=getattr(user, "email", None),
        role=parse_role(app_metadata.get("role")),
        business_id=app_metadata.get("business_id"),
        name=user_metadata.get("name") or None,
    )


class Gatekeeper:
    """Verifies bearer tokens against Supabase Auth."""

    def __init__(self, auth_client: Any):
        # Anything exposing get_user(jwt) -> response with `.user`
        self.auth = auth_client

    def authenticate(self, token: Optional[str]) -> Principal:
        if not token:
            raise Unauthorized("Not authorized, no token")

        try:
            res = self.auth.get_user(token)
        except Exception as e:
            logger.info(f"Token verification failed: {e}")
            raise Unauthorized("Not authorized, token failed") from e

        user = getattr(res, "user", None) if res is not None else None
        if not user:
            raise Unauthorized("Not authorized, token failed")

        return principal_from_user(user)
