from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship, validates
from datetime import datetime
from src.api.schemas.enums import DroneModel, DroneState
from .connection import Base
import logging

logger = logging.getLogger(__name__)

class Drone(Base):
    __tablename__ = "drones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    serial_number = Column(String(100), nullable=False, unique=True, index=True)
    model = Column(Enum(DroneModel), nullable=False)
    weight_limit = Column(Float, nullable=False)
    battery_level = Column(Float, nullable=False, default=100.0)
    state = Column(Enum(DroneState), nullable=False, default=DroneState.IDLE)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    last_updated = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    medications = relationship(
        "Medication",
        back_populates="drone",
        cascade="all, delete-orphan",
        order_by="Medication.id"
    )
    battery_audits = relationship("BatteryLevelAudit", back_populates="drone", cascade="all, delete-orphan")

    @validates('state')
    def validate_state(self, key, value):
        """Validate drone state."""
        try:
            return DroneState(value)
        except ValueError:
            raise ValueError(f"Invalid drone state: {value}")

    @validates('battery_level')
    def validate_battery_level(self, key, value):
        """Validate battery percentage."""
        if not 0 <= float(value) <= 100:
            raise ValueError(f"{key} must be between 0 and 100")
        return float(value)

    @property
    def current_load(self) -> float:
        """Total weight of the medications on board."""
        return sum(medication.weight for medication in self.medications)

    def remaining_capacity(self) -> float:
        return self.weight_limit - self.current_load

class Medication(Base):
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    drone_id = Column(Integer, ForeignKey("drones.id", ondelete="CASCADE"))
    name = Column(String, nullable=False)
    code = Column(String, nullable=False)
    weight = Column(Float, nullable=False)
    image_url = Column(String)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    drone = relationship("Drone", back_populates="medications")

    @validates('weight')
    def validate_weight(self, key, value):
        """Validate medication weight."""
        if value <= 0:
            raise ValueError("Medication weight must be positive")
        return value

class Media(Base):
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String(2048), nullable=False)
    file_name = Column(String(255))
    content_type = Column(String(100))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

class BatteryLevelAudit(Base):
    __tablename__ = "battery_level_audits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    drone_id = Column(Integer, ForeignKey("drones.id", ondelete="CASCADE"), nullable=False)
    serial_number = Column(String(100), nullable=False)
    battery_level = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    drone = relationship("Drone", back_populates="battery_audits")
