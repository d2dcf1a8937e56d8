import logging
from typing import Any, Optional

from app.core.exceptions import (
    PersistenceError,
    Unauthorized,
    ValidationError,
    handle_unexpected,
)
from app.repositories.businesses import BusinessRepository
from app.schemas.auth import (
    CurrentUserResponse,
    LoginResponse,
    Principal,
    Role,
    SignupResponse,
)
from app.services.gatekeeper import parse_role
from app.services.ownership import OwnershipResolver

logger = logging.getLogger(__name__)


class AuthService:
    """
    Password login and signup against Supabase Auth.

    `auth_client` performs the session-creating calls and `admin_auth`
    (service-role scope) reads full user metadata.
    """

    def __init__(
        self,
        auth_client: Any,
        admin_auth: Any,
        businesses: BusinessRepository,
        ownership: OwnershipResolver,
    ):
        self.auth = auth_client
        self.admin_auth = admin_auth
        self.businesses = businesses
        self.ownership = ownership

    def _business_id_for(self, principal: Principal) -> Optional[Any]:
        if not principal.is_business_owner:
            return None
        if principal.business_id is not None:
            return principal.business_id
        return self.ownership.resolve_business_id(principal)

    @handle_unexpected("login")
    async def login(self, email: Optional[str], password: Optional[str]) -> LoginResponse:
        if not email or not password:
            raise Unauthorized("Invalid email or password.")
        try:
            session_data = self.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.info(f"Sign-in rejected for {email}: {e}")
            raise Unauthorized("Invalid email or password.") from e

        if not session_data or not session_data.session:
            raise Unauthorized("Invalid email or password.")

        user = session_data.user
        try:
            record = self.admin_auth.admin.get_user_by_id(user.id)
        except Exception as e:
            logger.error(f"Failed to retrieve user metadata with admin client: {e}")
            record = None
        if not record or not record.user:
            raise PersistenceError("Failed to retrieve user metadata.", status_code=500)

        app_metadata = record.user.app_metadata or {}
        principal = Principal(
            id=str(user.id),
            email=user.email,
            role=parse_role(app_metadata.get("role")),
            business_id=app_metadata.get("business_id"),
        )
        return LoginResponse(
            id=principal.id,
            email=principal.email,
            role=principal.role,
            businessId=self._business_id_for(principal),
            token=session_data.session.access_token,
        )

    @handle_unexpected("signup")
    async def signup(
        self,
        email: Optional[str],
        password: Optional[str],
        name: str = "",
        role: str = Role.CLIENT.value,
    ) -> SignupResponse:
        if not email or not password:
            raise ValidationError("Email and password are required.")
        try:
            signup_role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role!r}.")

        try:
            auth_data = self.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"name": name, "role": signup_role.value}},
            })
        except Exception as e:
            logger.info(f"Signup rejected for {email}: {e}")
            raise ValidationError(str(e)) from e

        if not auth_data or not auth_data.user:
            raise PersistenceError("User not returned after signup.", status_code=500)

        if signup_role is Role.BUSINESS_OWNER:
            try:
                self.businesses.create(
                    owner_id=str(auth_data.user.id),
                    name=f"{name}'s Business",
                    email=auth_data.user.email,
                )
            except PersistenceError as e:
                logger.critical(
                    f"Failed to create business profile for new user {auth_data.user.id}: {e.message}"
                )
                raise PersistenceError(
                    "User account created, but failed to set up business profile. Please contact support.",
                    status_code=500,
                ) from e

        return SignupResponse(
            message="Account created successfully! Please check your email to confirm your account."
        )

    @handle_unexpected("current user")
    async def current_user(self, principal: Principal) -> CurrentUserResponse:
        return CurrentUserResponse(
            id=principal.id,
            email=principal.email,
            role=principal.role,
            businessId=self._business_id_for(principal),
        )
