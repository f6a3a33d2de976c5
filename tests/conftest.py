import os

# Must be set before src.database.connection creates its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BATTERY_AUDIT_INTERVAL"] = "0"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.api.schemas.enums import DroneModel, DroneState
from src.database.connection import SessionLocal, init_db
from src.database.models import BatteryLevelAudit, Drone, Medication


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------

class FakeDroneStore:
    def __init__(self):
        self.drones = {}
        self.saved = []

    def add(self, drone):
        """Seed a drone without recording a save."""
        self.drones[drone.id] = drone
        return drone

    def exists_by_serial_number(self, serial_number):
        return any(d.serial_number == serial_number for d in self.drones.values())

    def exists_by_serial_number_and_id(self, serial_number, drone_id):
        drone = self.drones.get(drone_id)
        return drone is not None and drone.serial_number == serial_number

    def find_by_id(self, drone_id):
        return self.drones.get(drone_id)

    def find_with_medications_by_id(self, drone_id):
        return self.drones.get(drone_id)

    def find_all(self, skip=0, limit=100):
        drones = [self.drones[k] for k in sorted(self.drones)]
        return drones[skip:] if limit is None else drones[skip:skip + limit]

    def find_available_for_loading(self, min_battery):
        return [
            d for d in self.find_all(limit=None)
            if d.state in (DroneState.IDLE, DroneState.LOADING) and d.battery_level >= min_battery
        ]

    def save(self, drone):
        if drone.id is None:
            drone.id = max(self.drones, default=0) + 1
        self.drones[drone.id] = drone
        self.saved.append(drone)
        return drone


class FakeMedicationStore:
    def __init__(self):
        self.saved = []
        self.committed = []

    def save(self, medication, commit=True):
        self.committed.append(commit)
        if medication.id is None:
            medication.id = 100 + len(self.saved)
        self.saved.append(medication)
        return medication


class FakeMediaStore:
    def __init__(self):
        self.media = {}

    def find_by_id(self, media_id):
        return self.media.get(media_id)

    def save(self, media):
        if media.id is None:
            media.id = len(self.media) + 1
        if media.created_at is None:
            media.created_at = datetime.utcnow()
        self.media[media.id] = media
        return media


class FakeBatteryAudit:
    def __init__(self):
        self.audits = []

    def record(self, drone):
        audit = BatteryLevelAudit(
            id=len(self.audits) + 1,
            drone_id=drone.id,
            serial_number=drone.serial_number,
            battery_level=drone.battery_level,
            created_at=datetime.utcnow()
        )
        self.audits.append(audit)
        return audit

    def find_by_drone_id(self, drone_id):
        return [a for a in reversed(self.audits) if a.drone_id == drone_id]


def make_drone(
    id=1,
    serial_number="loremipsum",
    model=DroneModel.HEAVYWEIGHT,
    weight_limit=400.0,
    battery_level=100.0,
    state=DroneState.IDLE,
    medication_weights=()
):
    drone = Drone(
        id=id,
        serial_number=serial_number,
        model=model,
        weight_limit=weight_limit,
        battery_level=battery_level,
        state=state
    )
    for i, weight in enumerate(medication_weights, start=1):
        Medication(id=i, name=f"med-{i}", code=f"MED_{i}", weight=weight, drone=drone)
    return drone


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def drone_store():
    return FakeDroneStore()


@pytest.fixture()
def medication_store():
    return FakeMedicationStore()


@pytest.fixture()
def media_store():
    return FakeMediaStore()


@pytest.fixture()
def battery_audit():
    return FakeBatteryAudit()


@pytest.fixture()
def database():
    """Fresh schema in the in-memory database."""
    init_db(drop_all=True)
    yield


@pytest.fixture()
def db(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(database):
    return TestClient(app)


@pytest.fixture()
def drone_factory():
    return make_drone
