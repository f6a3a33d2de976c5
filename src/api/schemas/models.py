from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from typing import Annotated, Generic, List, Optional, TypeVar
from datetime import datetime
from .enums import DroneModel, DroneState, MAX_WEIGHT_LIMIT

T = TypeVar("T")

NAME_PATTERN = r"^[A-Za-z0-9_-]+$"
CODE_PATTERN = r"^[A-Z0-9_]+$"

# Surrounding whitespace is dropped, so a blank serial number counts as missing
SerialNumber = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class CamelModel(BaseModel):
    """Snake case in Python, camel case on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


# Envelope
class BaseResponse(CamelModel, Generic[T]):
    response_code: int
    response_message: str
    data: Optional[T] = None


class Violation(CamelModel):
    field: str
    message: str


# Drone Models
class RegisterDroneRequest(CamelModel):
    serial_number: SerialNumber
    model: str
    weight_limit: float = Field(..., le=MAX_WEIGHT_LIMIT)
    battery_capacity: int = Field(..., ge=0, le=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "serialNumber": "DRN-0001",
                "model": "LIGHTWEIGHT",
                "weightLimit": 120.0,
                "batteryCapacity": 80
            }
        }
    )

    @field_validator("model")
    @classmethod
    def check_model_name(cls, value: str) -> str:
        try:
            return DroneModel.from_name(value).value
        except ValueError:
            raise PydanticCustomError(
                "drone_model",
                "Drone model must be one of {choices}",
                {"choices": ", ".join(m.value for m in DroneModel)}
            )


class LoadDroneRequest(CamelModel):
    drone_serial_number: SerialNumber
    medication_name: str = Field(..., pattern=NAME_PATTERN)
    medication_code: str = Field(..., pattern=CODE_PATTERN)
    medication_weight: float = Field(..., gt=0)
    medication_image_id: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "droneSerialNumber": "DRN-0001",
                "medicationName": "Paracetamol-500",
                "medicationCode": "PCM_500",
                "medicationWeight": 25.0,
                "medicationImageId": 1
            }
        }
    )


class MedicationDto(CamelModel):
    id: int
    name: str
    code: str
    weight: float
    image_url: Optional[str] = None


class DroneDto(CamelModel):
    id: int
    serial_number: str
    model: DroneModel
    weight_limit: float
    battery_level: float
    state: DroneState
    medications: List[MedicationDto] = []


class FetchLoadedMedicationsResponse(CamelModel):
    drone_id: int
    drone_serial_number: str
    medications: List[MedicationDto]


# Battery Models
class BatteryLevelResponse(CamelModel):
    drone_id: int
    serial_number: str
    battery_level: float


class BatteryAuditDto(CamelModel):
    id: int
    drone_id: int
    serial_number: str
    battery_level: float
    created_at: datetime


# Media Models
class MediaCreate(CamelModel):
    url: str = Field(..., min_length=1, max_length=2048)
    file_name: Optional[str] = Field(None, max_length=255)
    content_type: Optional[str] = Field(None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "https://cdn.example.com/medications/pcm_500.png",
                "fileName": "pcm_500.png",
                "contentType": "image/png"
            }
        }
    )


class MediaDto(CamelModel):
    id: int
    url: str
    file_name: Optional[str] = None
    content_type: Optional[str] = None
    created_at: datetime
