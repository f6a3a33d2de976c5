from typing import List, Optional, Protocol

from src.database.models import BatteryLevelAudit, Drone, Media, Medication


class DroneStore(Protocol):
    def exists_by_serial_number(self, serial_number: str) -> bool: ...

    def exists_by_serial_number_and_id(self, serial_number: str, drone_id: int) -> bool: ...

    def find_by_id(self, drone_id: int) -> Optional[Drone]: ...

    def find_with_medications_by_id(self, drone_id: int) -> Optional[Drone]: ...

    def find_all(self, skip: int = 0, limit: Optional[int] = 100) -> List[Drone]: ...

    def find_available_for_loading(self, min_battery: float) -> List[Drone]: ...

    def save(self, drone: Drone) -> Drone: ...


class MedicationStore(Protocol):
    def save(self, medication: Medication, commit: bool = True) -> Medication: ...


class MediaStore(Protocol):
    def find_by_id(self, media_id: int) -> Optional[Media]: ...

    def save(self, media: Media) -> Media: ...


class BatteryAuditRecorder(Protocol):
    def record(self, drone: Drone) -> BatteryLevelAudit: ...

    def find_by_drone_id(self, drone_id: int) -> List[BatteryLevelAudit]: ...
