from typing import List
import logging

from src.database.models import BatteryLevelAudit, Drone
from src.database.repositories import BatteryAuditRepository
from .interfaces import DroneStore

logger = logging.getLogger(__name__)

class BatteryAuditService:
    """Records battery level snapshots for drones."""

    def __init__(
        self,
        audit_repository: BatteryAuditRepository,
        drone_store: DroneStore,
        low_battery_threshold: float = 25.0
    ):
        self.audit_repository = audit_repository
        self.drone_store = drone_store
        self.low_battery_threshold = low_battery_threshold

    def record(self, drone: Drone) -> BatteryLevelAudit:
        """Persist the drone's current battery level."""
        audit = BatteryLevelAudit(
            drone_id=drone.id,
            serial_number=drone.serial_number,
            battery_level=drone.battery_level
        )
        audit = self.audit_repository.save(audit)

        if drone.battery_level < self.low_battery_threshold:
            logger.warning(
                f"Drone {drone.serial_number} battery at {drone.battery_level:.1f}% "
                f"(below {self.low_battery_threshold:.1f}%)"
            )
        else:
            logger.info(f"Drone {drone.serial_number} battery at {drone.battery_level:.1f}%")
        return audit

    def find_by_drone_id(self, drone_id: int) -> List[BatteryLevelAudit]:
        return self.audit_repository.find_by_drone_id(drone_id)

    def audit_fleet(self) -> int:
        """Record one entry per registered drone. Returns the number of entries written."""
        drones = self.drone_store.find_all(limit=None)
        for drone in drones:
            self.record(drone)
        logger.info(f"Battery audit recorded for {len(drones)} drones")
        return len(drones)
