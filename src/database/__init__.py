from .connection import Base, SessionLocal, engine, get_db, init_db, check_db_connection
from .models import Drone, Medication, Media, BatteryLevelAudit
from .repositories import (
    BaseRepository,
    DroneRepository,
    MedicationRepository,
    MediaRepository,
    BatteryAuditRepository
)

__all__ = [
    'Base',
    'SessionLocal',
    'engine',
    'get_db',
    'init_db',
    'check_db_connection',
    'Drone',
    'Medication',
    'Media',
    'BatteryLevelAudit',
    'BaseRepository',
    'DroneRepository',
    'MedicationRepository',
    'MediaRepository',
    'BatteryAuditRepository'
]