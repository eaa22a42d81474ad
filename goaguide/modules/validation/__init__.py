"""
modules/validation package — data quality guards before scheduling.
"""
from goaguide.modules.validation.ingestion_validator import (
    ValidationResult,
    filter_valid,
    validate_candidate,
    validate_trip,
)

__all__ = [
    "ValidationResult",
    "filter_valid",
    "validate_candidate",
    "validate_trip",
]
