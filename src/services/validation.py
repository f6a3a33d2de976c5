"""
Request validation rules.

The constraints themselves live on the pydantic request schemas
(``RegisterDroneRequest``, ``LoadDroneRequest``). This module turns the
errors pydantic reports into violations carrying fixed, client-facing
messages, so the same wording is produced whether a request is checked
directly through ``RequestValidator`` or rejected by FastAPI at the boundary.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel, to_snake
import logging

from src.api.schemas.models import Violation
from .exceptions import ValidationFailed

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

SERIAL_NUMBER_TOO_LONG = "Serial number must be at most 100 characters"
WEIGHT_LIMIT_TOO_HIGH = "Weight limit must be at most 500"
BATTERY_OUT_OF_RANGE = "Battery capacity must be between 0 and 100"
MEDICATION_NAME_INVALID = "medication name must only contain letters, numbers, '-', or '_'"
MEDICATION_CODE_INVALID = "medication code must only contain upper case letters, numbers, or '_'"

NUMBER_ERRORS = ("float_parsing", "float_type")
WHOLE_NUMBER_ERRORS = ("int_parsing", "int_type", "int_from_float")

# (field, pydantic error type) -> message
RULE_MESSAGES: Dict[Tuple[str, str], str] = {
    ("serial_number", "missing"): "Serial number is required",
    ("serial_number", "string_too_short"): "Serial number is required",
    ("serial_number", "string_too_long"): SERIAL_NUMBER_TOO_LONG,
    ("model", "missing"): "Drone model is required",
    ("weight_limit", "missing"): "Weight limit is required",
    ("weight_limit", "less_than_equal"): WEIGHT_LIMIT_TOO_HIGH,
    ("battery_capacity", "missing"): "Battery capacity is required",
    ("battery_capacity", "less_than_equal"): BATTERY_OUT_OF_RANGE,
    ("battery_capacity", "greater_than_equal"): BATTERY_OUT_OF_RANGE,
    ("drone_serial_number", "missing"): "Drone serial number is required",
    ("drone_serial_number", "string_too_short"): "Drone serial number is required",
    ("drone_serial_number", "string_too_long"): SERIAL_NUMBER_TOO_LONG,
    ("medication_name", "missing"): "medication name is required",
    ("medication_name", "string_pattern_mismatch"): MEDICATION_NAME_INVALID,
    ("medication_code", "missing"): "medication code is required",
    ("medication_code", "string_pattern_mismatch"): MEDICATION_CODE_INVALID,
    ("medication_weight", "missing"): "medication weight is required",
    ("medication_weight", "greater_than"): "medication weight must be greater than 0",
}
RULE_MESSAGES.update({("weight_limit", t): "Weight limit must be a number" for t in NUMBER_ERRORS})
RULE_MESSAGES.update({("medication_weight", t): "medication weight must be a number" for t in NUMBER_ERRORS})
RULE_MESSAGES.update({("battery_capacity", t): "Battery capacity must be a whole number" for t in WHOLE_NUMBER_ERRORS})
RULE_MESSAGES.update({("medication_image_id", t): "medication image id must be a whole number" for t in WHOLE_NUMBER_ERRORS})


def _field_name(loc: Tuple[Any, ...]) -> Optional[str]:
    names = [part for part in loc if isinstance(part, str) and part != "body"]
    return to_snake(names[-1]) if names else None


def _error_type(error: Mapping[str, Any]) -> str:
    # An explicit null is reported the same way as an absent field
    if error["type"].endswith("_type") and error.get("input", ...) is None:
        return "missing"
    return error["type"]


class RequestValidator:
    """
    Maps schema errors to violations.

    Build one where it is needed; it holds no state beyond its message table.
    """

    def __init__(self, messages: Optional[Mapping[Tuple[str, str], str]] = None):
        self.messages = dict(RULE_MESSAGES)
        if messages:
            self.messages.update(messages)

    def violations(self, errors: Iterable[Mapping[str, Any]]) -> List[Violation]:
        """Translate pydantic error dicts into violations, in field order."""
        violations = []
        for error in errors:
            field = _field_name(tuple(error.get("loc", ())))
            message = self.messages.get((field, _error_type(error)), error["msg"])
            violations.append(Violation(field=to_camel(field) if field else "body", message=message))
        return violations

    def validate(self, schema: Type[M], payload: Mapping[str, Any]) -> List[Violation]:
        """Return the violations for ``payload``; an empty list means it is valid."""
        try:
            schema.model_validate(payload)
        except ValidationError as e:
            return self.violations(e.errors())
        return []

    def validate_or_raise(self, schema: Type[M], payload: Mapping[str, Any]) -> M:
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            violations = self.violations(e.errors())
            logger.warning(
                f"{schema.__name__} rejected: "
                + "; ".join(v.message for v in violations)
            )
            raise ValidationFailed(violations)
