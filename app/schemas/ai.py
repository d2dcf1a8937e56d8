from pydantic import BaseModel
from typing import List, Optional

class DescriptionRequest(BaseModel):
    prompt: Optional[str] = None

class DescriptionResponse(BaseModel):
    description: str

class ChatTurn(BaseModel):
    role: str
    content: str = ""

class ChatRequest(BaseModel):
    history: Optional[List[ChatTurn]] = None
    message: Optional[str] = None

class ChatResponse(BaseModel):
    reply: str
