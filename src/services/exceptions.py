from typing import List, Optional

from src.api.schemas.models import Violation


class DronesApiError(Exception):
    """Base error for business rule failures. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DroneAlreadyExists(DronesApiError):
    status_code = 409

    def __init__(self, serial_number: str):
        super().__init__(f"drone with serial number {serial_number} already exists")
        self.serial_number = serial_number


class DroneNotFound(DronesApiError):
    status_code = 404

    def __init__(self, drone_id: int, serial_number: Optional[str] = None):
        if serial_number is None:
            message = f"drone with id {drone_id} not found"
        else:
            message = f"drone with id {drone_id} and serial number {serial_number} not found"
        super().__init__(message)
        self.drone_id = drone_id
        self.serial_number = serial_number


class DroneOverLoad(DronesApiError):
    status_code = 400

    def __init__(self, drone_id: int, weight_limit: float, requested_weight: float):
        super().__init__(
            f"drone with id {drone_id} cannot carry {requested_weight:g}, "
            f"weight limit is {weight_limit:g}"
        )
        self.drone_id = drone_id
        self.weight_limit = weight_limit
        self.requested_weight = requested_weight


class MediaNotFound(DronesApiError):
    status_code = 404

    def __init__(self, media_id: int):
        super().__init__(f"media with id {media_id} not found")
        self.media_id = media_id


class ValidationFailed(DronesApiError):
    """One or more field violations."""

    status_code = 400

    def __init__(self, violations: List[Violation]):
        super().__init__("request validation failed")
        self.violations = violations
