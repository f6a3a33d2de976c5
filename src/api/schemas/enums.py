from enum import Enum
from typing import Optional


class DroneState(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    RETURNING = "RETURNING"


class DroneModel(str, Enum):
    """Drone weight category. Each category carries its maximum payload in grams."""

    LIGHTWEIGHT = "LIGHTWEIGHT"
    MIDDLEWEIGHT = "MIDDLEWEIGHT"
    CRUISERWEIGHT = "CRUISERWEIGHT"
    HEAVYWEIGHT = "HEAVYWEIGHT"

    @property
    def max_weight(self) -> float:
        return MODEL_MAX_WEIGHT[self]

    @classmethod
    def from_name(cls, name: Optional[str]) -> "DroneModel":
        """Map a textual model name (any case) to its category."""
        if name is None:
            raise ValueError("Drone model is required")
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid drone model: {name}")


MODEL_MAX_WEIGHT = {
    DroneModel.LIGHTWEIGHT: 125.0,
    DroneModel.MIDDLEWEIGHT: 250.0,
    DroneModel.CRUISERWEIGHT: 375.0,
    DroneModel.HEAVYWEIGHT: 500.0,
}

# Upper bound of the heaviest category
MAX_WEIGHT_LIMIT = MODEL_MAX_WEIGHT[DroneModel.HEAVYWEIGHT]
