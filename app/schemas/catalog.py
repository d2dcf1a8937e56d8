from pydantic import BaseModel, ConfigDict
from typing import Optional

from app.schemas.auth import Identifier

class BusinessResponse(BaseModel):
    id: Identifier
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class ServiceResponse(BaseModel):
    id: Identifier
    name: str
    price: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)
