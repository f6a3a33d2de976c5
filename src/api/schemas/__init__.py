from .models import (
    BaseResponse, Violation,
    RegisterDroneRequest, LoadDroneRequest,
    DroneDto, MedicationDto, FetchLoadedMedicationsResponse,
    BatteryLevelResponse, BatteryAuditDto,
    MediaCreate, MediaDto
)
from .enums import DroneState, DroneModel, MAX_WEIGHT_LIMIT

__all__ = [
    'BaseResponse', 'Violation',
    'RegisterDroneRequest', 'LoadDroneRequest',
    'DroneDto', 'MedicationDto', 'FetchLoadedMedicationsResponse',
    'BatteryLevelResponse', 'BatteryAuditDto',
    'MediaCreate', 'MediaDto',
    'DroneState', 'DroneModel', 'MAX_WEIGHT_LIMIT'
]