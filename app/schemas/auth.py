from pydantic import BaseModel, ConfigDict
from typing import Optional, Union
import enum

Identifier = Union[int, str]

class Role(str, enum.Enum):
    CLIENT = "client"
    BUSINESS_OWNER = "business_owner"

class Principal(BaseModel):
    """The verified caller of a request. Never mutated once built."""
    id: str
    email: Optional[str] = None
    role: Role = Role.CLIENT
    business_id: Optional[Identifier] = None
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_business_owner(self) -> bool:
        return self.role is Role.BUSINESS_OWNER

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class SignupRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: str = ""
    role: str = Role.CLIENT.value

class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: Role
    businessId: Optional[Identifier] = None

class LoginResponse(CurrentUserResponse):
    token: str

class SignupResponse(BaseModel):
    message: str
