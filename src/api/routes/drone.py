from fastapi import APIRouter, Depends
from typing import List

from ..dependencies import get_drone_service
from ..schemas.models import (
    BaseResponse, BatteryAuditDto, BatteryLevelResponse, DroneDto,
    FetchLoadedMedicationsResponse, LoadDroneRequest, RegisterDroneRequest
)
from src.services.drone_service import DroneService

router = APIRouter()

@router.post("/", response_model=BaseResponse[DroneDto])
async def register_drone(
    request: RegisterDroneRequest,
    drone_service: DroneService = Depends(get_drone_service)
):
    """Register a new drone in the IDLE state."""
    return drone_service.register_drone(request)

@router.get("/", response_model=BaseResponse[List[DroneDto]])
async def get_all_drones(
    skip: int = 0,
    limit: int = 100,
    drone_service: DroneService = Depends(get_drone_service)
):
    """Get all registered drones."""
    return drone_service.get_drones(skip=skip, limit=limit)

@router.get("/available", response_model=BaseResponse[List[DroneDto]])
async def get_available_drones(drone_service: DroneService = Depends(get_drone_service)):
    """Get drones that can be loaded."""
    return drone_service.get_available_drones()

@router.get("/{drone_id}", response_model=BaseResponse[DroneDto])
async def get_drone(drone_id: int, drone_service: DroneService = Depends(get_drone_service)):
    """Get specific drone details."""
    return drone_service.get_drone(drone_id)

@router.post("/{drone_id}/load", response_model=BaseResponse[DroneDto])
async def load_drone(
    drone_id: int,
    request: LoadDroneRequest,
    drone_service: DroneService = Depends(get_drone_service)
):
    """Load a medication onto a drone, within its weight limit."""
    return drone_service.load_drone(drone_id, request)

@router.get("/{drone_id}/medications", response_model=BaseResponse[FetchLoadedMedicationsResponse])
async def get_loaded_medications(
    drone_id: int,
    drone_service: DroneService = Depends(get_drone_service)
):
    """Get the medications currently loaded on a drone."""
    return drone_service.get_loaded_medication(drone_id)

@router.get("/{drone_id}/battery", response_model=BaseResponse[BatteryLevelResponse])
async def get_battery_level(drone_id: int, drone_service: DroneService = Depends(get_drone_service)):
    """Get a drone's battery level."""
    return drone_service.get_battery_level(drone_id)

@router.get("/{drone_id}/battery-audits", response_model=BaseResponse[List[BatteryAuditDto]])
async def get_battery_audits(drone_id: int, drone_service: DroneService = Depends(get_drone_service)):
    """Get the battery audit trail for a drone, newest first."""
    return drone_service.get_battery_audits(drone_id)
