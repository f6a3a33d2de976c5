from fastapi import APIRouter, Depends

from src.api.dependencies import get_drone_service
from src.api.schemas.models import BaseResponse, MediaCreate, MediaDto
from src.services.drone_service import DroneService

router = APIRouter()

@router.post("/", response_model=BaseResponse[MediaDto])
async def register_media(
    media: MediaCreate,
    drone_service: DroneService = Depends(get_drone_service)
):
    """Register a medication image so load requests can reference it by id."""
    return drone_service.register_media(media)

@router.get("/{media_id}", response_model=BaseResponse[MediaDto])
async def get_media(media_id: int, drone_service: DroneService = Depends(get_drone_service)):
    """Get media details."""
    return drone_service.get_media(media_id)
