from .drone_service import DroneService
from .battery_audit import BatteryAuditService
from .validation import RequestValidator
from .exceptions import (
    DronesApiError,
    DroneAlreadyExists,
    DroneNotFound,
    DroneOverLoad,
    MediaNotFound,
    ValidationFailed
)

__all__ = [
    'DroneService',
    'BatteryAuditService',
    'RequestValidator',
    'DronesApiError',
    'DroneAlreadyExists',
    'DroneNotFound',
    'DroneOverLoad',
    'MediaNotFound',
    'ValidationFailed'
]