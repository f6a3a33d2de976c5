"""Tests for the battery audit service."""

import asyncio
import logging

from src.api import main
from src.api.schemas.enums import DroneModel, DroneState
from src.database.models import Drone
from src.database.repositories import BatteryAuditRepository, DroneRepository
from src.services.battery_audit import BatteryAuditService


def seed(db, serial_number, battery_level):
    return DroneRepository(db).save(Drone(
        serial_number=serial_number,
        model=DroneModel.MIDDLEWEIGHT,
        weight_limit=250.0,
        battery_level=battery_level,
        state=DroneState.IDLE
    ))


def audit_service(db):
    return BatteryAuditService(
        audit_repository=BatteryAuditRepository(db),
        drone_store=DroneRepository(db),
        low_battery_threshold=25.0
    )


def test_record_persists_battery_level(db):
    drone = seed(db, "DRN-1", 77.0)

    audit = audit_service(db).record(drone)

    assert audit.id is not None
    assert audit.drone_id == drone.id
    assert audit.serial_number == "DRN-1"
    assert audit.battery_level == 77.0
    assert audit.created_at is not None


def test_low_battery_is_logged_as_warning(db, caplog):
    drone = seed(db, "DRN-1", 12.0)

    with caplog.at_level(logging.INFO):
        audit_service(db).record(drone)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "DRN-1" in warnings[0].getMessage()


def test_audit_fleet_records_every_drone(db):
    seed(db, "DRN-1", 90.0)
    seed(db, "DRN-2", 40.0)
    service = audit_service(db)

    assert service.audit_fleet() == 2
    assert service.audit_fleet() == 2

    first = DroneRepository(db).find_all()[0]
    assert len(service.find_by_drone_id(first.id)) == 2


def test_audit_fleet_with_no_drones(db):
    assert audit_service(db).audit_fleet() == 0


def test_run_battery_audit_sweeps_in_its_own_session(db):
    drone = seed(db, "DRN-1", 55.0)
    seed(db, "DRN-2", 20.0)

    assert main.run_battery_audit() == 2

    audits = BatteryAuditRepository(db).find_by_drone_id(drone.id)
    assert [a.battery_level for a in audits] == [55.0]


def test_audit_loop_survives_a_failed_sweep(monkeypatch, caplog):
    sweeps = []

    def sweep():
        sweeps.append(len(sweeps) + 1)
        if len(sweeps) == 1:
            raise RuntimeError("database unavailable")
        return 0

    monkeypatch.setattr(main, "BATTERY_AUDIT_INTERVAL", 0)
    monkeypatch.setattr(main, "run_battery_audit", sweep)

    async def run_two_sweeps():
        task = asyncio.create_task(main.audit_battery_levels())
        while len(sweeps) < 2:
            await asyncio.sleep(0.01)
        task.cancel()

    asyncio.run(asyncio.wait_for(run_two_sweeps(), timeout=5))

    assert len(sweeps) >= 2
    assert "Battery audit failed" in caplog.text
