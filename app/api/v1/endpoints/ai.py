from fastapi import APIRouter, Depends
from app.api.deps import get_current_user, get_text_generation_service
from app.schemas.ai import ChatRequest, ChatResponse, DescriptionRequest, DescriptionResponse
from app.schemas.auth import Principal
from app.services.text_generation import TextGenerationService

ai_router = APIRouter()
chat_router = APIRouter()

@ai_router.post("/generate-description", response_model=DescriptionResponse)
async def generate_description(
    request_in: DescriptionRequest,
    current_user: Principal = Depends(get_current_user),
    service: TextGenerationService = Depends(get_text_generation_service),
):
    text = await service.generate_description(request_in.prompt)
    return {"description": text}

@chat_router.post("", response_model=ChatResponse)
async def chat(
    request_in: ChatRequest,
    current_user: Principal = Depends(get_current_user),
    service: TextGenerationService = Depends(get_text_generation_service),
):
    """
    Stateless chat turn; the client sends the prior history with every call.
    """
    reply = await service.chat(request_in.message, request_in.history)
    return {"reply": reply}
