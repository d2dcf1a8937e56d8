from fastapi import APIRouter, Depends
from typing import List
from app.api.deps import get_current_user
from app.schemas.auth import Principal

router = APIRouter()

@router.get("/me", response_model=List[dict])
async def list_my_notifications(
    current_user: Principal = Depends(get_current_user),
):
    # No notification store exists yet
    return []
