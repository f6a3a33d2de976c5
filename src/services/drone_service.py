from typing import List, Optional
import logging
import math

from src.api.schemas.enums import DroneModel, DroneState
from src.api.schemas.models import (
    BaseResponse, BatteryAuditDto, BatteryLevelResponse, DroneDto,
    FetchLoadedMedicationsResponse, LoadDroneRequest, MediaCreate, MediaDto,
    MedicationDto, RegisterDroneRequest
)
from src.database.models import Drone, Media, Medication
from .exceptions import DroneAlreadyExists, DroneNotFound, DroneOverLoad, MediaNotFound
from .interfaces import BatteryAuditRecorder, DroneStore, MediaStore, MedicationStore

logger = logging.getLogger(__name__)

SUCCESS = 200

class DroneService:
    """
    Drone registration, loading and medication queries.

    Collaborators are passed in so they can be swapped for in-memory
    fakes. Every operation returns a ``BaseResponse`` envelope and raises a
    ``DronesApiError`` subclass on a rule violation, before any write.
    """

    def __init__(
        self,
        drone_store: DroneStore,
        medication_store: MedicationStore,
        media_store: MediaStore,
        battery_audit: BatteryAuditRecorder,
        loading_min_battery: float = 25.0
    ):
        self.drone_store = drone_store
        self.medication_store = medication_store
        self.media_store = media_store
        self.battery_audit = battery_audit
        self.loading_min_battery = loading_min_battery

    def register_drone(self, request: RegisterDroneRequest) -> BaseResponse[DroneDto]:
        if self.drone_store.exists_by_serial_number(request.serial_number):
            logger.warning(f"Rejected duplicate drone registration {request.serial_number}")
            raise DroneAlreadyExists(request.serial_number)

        model = DroneModel.from_name(request.model)
        if request.weight_limit > model.max_weight:
            logger.warning(
                f"Drone {request.serial_number} weight limit {request.weight_limit:g} "
                f"exceeds the {model.value} category maximum of {model.max_weight:g}"
            )

        drone = Drone(
            serial_number=request.serial_number,
            model=model,
            weight_limit=request.weight_limit,
            battery_level=request.battery_capacity,
            state=DroneState.IDLE
        )
        drone = self.drone_store.save(drone)
        logger.info(f"Registered drone {drone.serial_number} with id {drone.id}")

        return BaseResponse[DroneDto](
            response_code=SUCCESS,
            response_message="drone registered successfully",
            data=DroneDto.model_validate(drone)
        )

    def load_drone(self, drone_id: int, request: LoadDroneRequest) -> BaseResponse[DroneDto]:
        serial_number = request.drone_serial_number
        drone = None
        if self.drone_store.exists_by_serial_number_and_id(serial_number, drone_id):
            drone = self.drone_store.find_by_id(drone_id)
        if drone is None:
            raise DroneNotFound(drone_id, serial_number)

        requested_weight = drone.current_load + request.medication_weight
        # Sums of fractional weights may overshoot the limit by a rounding error
        if requested_weight > drone.weight_limit and not math.isclose(requested_weight, drone.weight_limit):
            logger.warning(
                f"Rejected load of {request.medication_weight:g} on drone {drone.serial_number}: "
                f"{drone.current_load:g} already on board, limit {drone.weight_limit:g}"
            )
            raise DroneOverLoad(drone.id, drone.weight_limit, requested_weight)

        medication = Medication(
            name=request.medication_name,
            code=request.medication_code,
            weight=request.medication_weight,
            image_url=self._resolve_image_url(request.medication_image_id),
            drone=drone
        )
        # Written together with the state change in one commit
        self.medication_store.save(medication, commit=False)

        drone.state = DroneState.LOADED
        drone = self.drone_store.save(drone)
        logger.info(
            f"Loaded {medication.code} ({medication.weight:g}) on drone {drone.serial_number}, "
            f"remaining capacity {drone.remaining_capacity():g}"
        )

        self.battery_audit.record(drone)

        return BaseResponse[DroneDto](
            response_code=SUCCESS,
            response_message="drone loaded successfully",
            data=DroneDto.model_validate(drone)
        )

    def get_loaded_medication(self, drone_id: int) -> BaseResponse[FetchLoadedMedicationsResponse]:
        drone = self.drone_store.find_with_medications_by_id(drone_id)
        if drone is None:
            raise DroneNotFound(drone_id)

        return BaseResponse[FetchLoadedMedicationsResponse](
            response_code=SUCCESS,
            response_message=f"fetched medications records successfully for drone with id {drone_id}",
            data=FetchLoadedMedicationsResponse(
                drone_id=drone.id,
                drone_serial_number=drone.serial_number,
                medications=[MedicationDto.model_validate(m) for m in drone.medications]
            )
        )

    def get_drones(self, skip: int = 0, limit: int = 100) -> BaseResponse[List[DroneDto]]:
        drones = self.drone_store.find_all(skip=skip, limit=limit)
        return BaseResponse[List[DroneDto]](
            response_code=SUCCESS,
            response_message="fetched drones successfully",
            data=[DroneDto.model_validate(d) for d in drones]
        )

    def get_drone(self, drone_id: int) -> BaseResponse[DroneDto]:
        return BaseResponse[DroneDto](
            response_code=SUCCESS,
            response_message="fetched drone successfully",
            data=DroneDto.model_validate(self._get_drone(drone_id))
        )

    def get_available_drones(self) -> BaseResponse[List[DroneDto]]:
        """Drones that can take a load: IDLE or LOADING, with enough battery."""
        drones = self.drone_store.find_available_for_loading(self.loading_min_battery)
        return BaseResponse[List[DroneDto]](
            response_code=SUCCESS,
            response_message="fetched available drones successfully",
            data=[DroneDto.model_validate(d) for d in drones]
        )

    def get_battery_level(self, drone_id: int) -> BaseResponse[BatteryLevelResponse]:
        drone = self._get_drone(drone_id)
        return BaseResponse[BatteryLevelResponse](
            response_code=SUCCESS,
            response_message=f"fetched battery level successfully for drone with id {drone_id}",
            data=BatteryLevelResponse(
                drone_id=drone.id,
                serial_number=drone.serial_number,
                battery_level=drone.battery_level
            )
        )

    def get_battery_audits(self, drone_id: int) -> BaseResponse[List[BatteryAuditDto]]:
        self._get_drone(drone_id)
        audits = self.battery_audit.find_by_drone_id(drone_id)
        return BaseResponse[List[BatteryAuditDto]](
            response_code=SUCCESS,
            response_message=f"fetched battery audits successfully for drone with id {drone_id}",
            data=[BatteryAuditDto.model_validate(a) for a in audits]
        )

    def register_media(self, request: MediaCreate) -> BaseResponse[MediaDto]:
        media = self.media_store.save(
            Media(url=request.url, file_name=request.file_name, content_type=request.content_type)
        )
        logger.info(f"Registered media {media.id}")
        return BaseResponse[MediaDto](
            response_code=SUCCESS,
            response_message="media registered successfully",
            data=MediaDto.model_validate(media)
        )

    def get_media(self, media_id: int) -> BaseResponse[MediaDto]:
        media = self.media_store.find_by_id(media_id)
        if media is None:
            raise MediaNotFound(media_id)
        return BaseResponse[MediaDto](
            response_code=SUCCESS,
            response_message="fetched media successfully",
            data=MediaDto.model_validate(media)
        )

    def _get_drone(self, drone_id: int) -> Drone:
        drone = self.drone_store.find_by_id(drone_id)
        if drone is None:
            raise DroneNotFound(drone_id)
        return drone

    def _resolve_image_url(self, image_id: Optional[int]) -> Optional[str]:
        """URL of the referenced image, or None when it is missing or unknown."""
        if image_id is None:
            return None
        media = self.media_store.find_by_id(image_id)
        if media is None:
            logger.warning(f"Medication image {image_id} not found, loading without image")
            return None
        return media.url
