"""
modules/validation/ingestion_validator.py
------------------------------------------
Data-quality guards applied to trip parameters and candidate pools before
they reach the scheduler.

  Candidate (POI / event):
    ✓ Non-empty name (or title)
    ✓ Latitude in [-90, 90], longitude in [-180, 180] when a location is given
    ✓ Coordinates are not both exactly 0.0 (likely missing)
    ✓ Rating in [0, 5] if present

  Trip parameters:
    ✓ budget_per_person > 0
    ✓ party_size >= 1
    ✓ duration_days >= 1
    ✓ archetype is one of the known trip archetypes

Usage:
    from goaguide.modules.validation import validate_trip, filter_valid

    result = validate_trip({"budget_per_person": 5000, "party_size": 2, ...})
    if not result.valid:
        print(result.errors)

    clean = filter_valid(pois, validate_candidate)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

from goaguide.schemas.trip import TripArchetype

T = TypeVar("T")

logger = logging.getLogger(__name__)


# ── Result dataclass ───────────────────────────────────────────────────────────

@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: Human-readable list of failure reasons.
        record: The input record dict (for logging purposes).
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    record: dict = field(default_factory=dict, repr=False)

    def __bool__(self) -> bool:
        return self.valid


# ── Candidate validation ───────────────────────────────────────────────────────

def validate_candidate(record: dict[str, Any]) -> ValidationResult:
    """Validate a POI or event record (see CandidateActivity.to_dict)."""
    errors: list[str] = []

    # ── Name ───────────────────────────────────────────────────────────────
    name = record.get("name") or record.get("title") or ""
    if not str(name).strip():
        errors.append("name must not be empty or NULL")

    # ── Coordinates ────────────────────────────────────────────────────────
    location = record.get("location")
    if location is not None:
        try:
            lat = float(location["lat"])
            lon = float(location["lon"])
        except (KeyError, TypeError, ValueError):
            errors.append(f"location must carry numeric lat/lon (got {location!r})")
            return ValidationResult(valid=False, errors=errors, record=record)

        if not (-90.0 <= lat <= 90.0):
            errors.append(f"lat={lat} is outside valid range [-90, 90]")
        if not (-180.0 <= lon <= 180.0):
            errors.append(f"lon={lon} is outside valid range [-180, 180]")
        if lat == 0.0 and lon == 0.0:
            errors.append("lat=0.0 and lon=0.0: likely a missing/default value")

    # ── Rating ─────────────────────────────────────────────────────────────
    rating = record.get("rating")
    if rating is not None:
        try:
            r = float(rating)
            if not (0.0 <= r <= 5.0):
                errors.append(f"rating={r} is outside valid range [0, 5]")
        except (TypeError, ValueError):
            errors.append(f"rating={rating!r} must be numeric")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)


# ── Trip validation ────────────────────────────────────────────────────────────

def validate_trip(record: dict[str, Any]) -> ValidationResult:
    errors: list[str] = []

    budget = record.get("budget_per_person")
    try:
        if float(budget) <= 0:
            errors.append(f"budget_per_person={budget} must be > 0")
    except (TypeError, ValueError):
        errors.append(f"budget_per_person={budget!r} must be numeric")

    for key in ("party_size", "duration_days"):
        value = record.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{key}={value!r} must be an integer")
        elif value < 1:
            errors.append(f"{key}={value} must be >= 1")

    archetype = record.get("archetype")
    valid_archetypes = {a.value for a in TripArchetype}
    if getattr(archetype, "value", archetype) not in valid_archetypes:
        errors.append(f"archetype={archetype!r} must be one of {sorted(valid_archetypes)}")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)


# ── Batch filter helper ────────────────────────────────────────────────────────

def filter_valid(
    items: Iterable[T],
    validator: Callable[[dict], ValidationResult],
    to_dict: Callable[[T], dict] | None = None,
) -> list[T]:
    """
    Apply a validator to every item, return only the valid ones.

    Items are dicts or objects with a ``to_dict()`` method unless
    *to_dict* is given.  Rejections are logged at WARNING.
    """
    items = list(items)
    valid_items: list[T] = []
    for item in items:
        if to_dict is not None:
            record_dict = to_dict(item)
        else:
            record_dict = item if isinstance(item, dict) else item.to_dict()
        result = validator(record_dict)
        if result.valid:
            valid_items.append(item)
        else:
            name = record_dict.get("name") or record_dict.get("title") or record_dict.get("id", "?")
            logger.warning("Rejected candidate %r: %s", name, "; ".join(result.errors))

    rejected = len(items) - len(valid_items)
    if rejected:
        logger.warning("%d/%d records rejected; %d passed.", rejected, len(items), len(valid_items))
    return valid_items
