from typing import Generic, List, Optional, Type, TypeVar
from sqlalchemy import desc, exists
from sqlalchemy.orm import Session, selectinload
import logging
from src.api.schemas.enums import DroneState
from .connection import Base
from .models import BatteryLevelAudit, Drone, Media, Medication

logger = logging.getLogger(__name__)

# Define type variable for database models
DBModel = TypeVar("DBModel", bound=Base) # type: ignore

class BaseRepository(Generic[DBModel]):
    """Session-bound persistence for one model, with error handling and logging."""

    model: Type[DBModel]

    def __init__(self, db: Session):
        self.db = db

    def save(self, item: DBModel, commit: bool = True) -> DBModel:
        """
        Insert or update a record.

        With ``commit=False`` the record is only flushed, so it is written by
        the next commit on the session or discarded by its rollback. The
        session is rolled back and the error re-raised if the write fails.
        """
        try:
            self.db.add(item)
            if not commit:
                self.db.flush()
                return item
            self.db.commit()
            self.db.refresh(item)
            logger.info(f"Saved {self.model.__name__} record {item.id}")
            return item
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error saving {self.model.__name__}: {str(e)}")
            raise

    def find_by_id(self, id: int) -> Optional[DBModel]:
        return self.db.get(self.model, id)

    def find_all(self, skip: int = 0, limit: Optional[int] = 100) -> List[DBModel]:
        """Records ordered by id. ``limit=None`` returns every record."""
        return (
            self.db.query(self.model)
            .order_by(self.model.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

class DroneRepository(BaseRepository[Drone]):
    model = Drone

    def exists_by_serial_number(self, serial_number: str) -> bool:
        return self.db.query(
            exists().where(Drone.serial_number == serial_number)
        ).scalar()

    def exists_by_serial_number_and_id(self, serial_number: str, drone_id: int) -> bool:
        return self.db.query(
            exists().where(
                Drone.serial_number == serial_number,
                Drone.id == drone_id
            )
        ).scalar()

    def find_with_medications_by_id(self, drone_id: int) -> Optional[Drone]:
        """Fetch a drone with its medications eagerly loaded."""
        return (
            self.db.query(Drone)
            .options(selectinload(Drone.medications))
            .filter(Drone.id == drone_id)
            .first()
        )

    def find_available_for_loading(self, min_battery: float) -> List[Drone]:
        return (
            self.db.query(Drone)
            .filter(
                Drone.state.in_([DroneState.IDLE, DroneState.LOADING]),
                Drone.battery_level >= min_battery
            )
            .order_by(Drone.id)
            .all()
        )

class MedicationRepository(BaseRepository[Medication]):
    model = Medication

class MediaRepository(BaseRepository[Media]):
    model = Media

class BatteryAuditRepository(BaseRepository[BatteryLevelAudit]):
    model = BatteryLevelAudit

    def find_by_drone_id(self, drone_id: int) -> List[BatteryLevelAudit]:
        """Audit entries for a drone, newest first."""
        return (
            self.db.query(BatteryLevelAudit)
            .filter(BatteryLevelAudit.drone_id == drone_id)
            .order_by(desc(BatteryLevelAudit.created_at), desc(BatteryLevelAudit.id))
            .all()
        )
