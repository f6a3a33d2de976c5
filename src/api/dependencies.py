from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session
from src.database.connection import SessionLocal
from src.database.repositories import (
    BatteryAuditRepository, DroneRepository, MediaRepository, MedicationRepository
)
from src.services.battery_audit import BatteryAuditService
from src.services.drone_service import DroneService
import os
from dotenv import load_dotenv

load_dotenv()

# Drones below this battery level are not offered for loading
LOADING_MIN_BATTERY = float(os.getenv("LOADING_MIN_BATTERY", "25"))
# Seconds between fleet battery audits, 0 disables them
BATTERY_AUDIT_INTERVAL = float(os.getenv("BATTERY_AUDIT_INTERVAL", "300"))

def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def build_battery_audit_service(db: Session) -> BatteryAuditService:
    return BatteryAuditService(
        audit_repository=BatteryAuditRepository(db),
        drone_store=DroneRepository(db),
        low_battery_threshold=LOADING_MIN_BATTERY
    )

def get_drone_service(db: Session = Depends(get_db)) -> DroneService:
    return DroneService(
        drone_store=DroneRepository(db),
        medication_store=MedicationRepository(db),
        media_store=MediaRepository(db),
        battery_audit=build_battery_audit_service(db),
        loading_min_battery=LOADING_MIN_BATTERY
    )