"""
Strava activity normalization.

Maps a raw Strava activity into our fixed activity schema:
- sport type -> category (plus display prefix for strength sessions)
- calories via a fallback chain
- pace (runs) or speed (everything else)

All functions are pure.
"""

from datetime import timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from macroclaw.shared.constants import (
    ActivityCategory,
    STRAVA_TO_CATEGORY,
    STRENGTH_SPORT_TYPES,
    STRENGTH_NAME_PREFIX,
    FALLBACK_KCAL_PER_MINUTE,
    MPS_TO_KMH,
)
from macroclaw.features.activities.schemas import ActivityInsert
from .schemas import RawActivity


def round_half_up(value: float, ndigits: int = 0):
    """Round halves away from zero (150.5 -> 151), unlike built-in round()."""
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def classify(sport_type: str, name: str = "") -> tuple[ActivityCategory, str]:
    """
    Classify a Strava sport type.

    Args:
        sport_type: Strava sport_type tag ("TrailRun", "GravelRide", ...)
        name: Activity name as entered on Strava

    Returns:
        (category, display name). Strength sessions keep category OTHER
        but get a name prefix so they stand out in the dashboard.
    """
    category = STRAVA_TO_CATEGORY.get(sport_type, ActivityCategory.OTHER)
    if sport_type in STRENGTH_SPORT_TYPES:
        name = f"{STRENGTH_NAME_PREFIX}{name}"
    return category, name


def estimate_calories(raw: RawActivity) -> int:
    """
    Calories for an activity.

    1. Strava's own estimate, if reported
    2. kilojoules (power meters); 1 kJ of work ~ 1 kcal burned at typical
       cycling efficiency, an approximation
    3. 8 kcal per minute of moving time
    """
    if raw.calories:
        return round_half_up(raw.calories)
    if raw.kilojoules:
        return round_half_up(raw.kilojoules)
    return round_half_up(raw.moving_time / 60 * FALLBACK_KCAL_PER_MINUTE)


def derive_timing(
    raw: RawActivity,
    category: ActivityCategory
) -> tuple[Optional[int], Optional[float]]:
    """
    Pace for runs, speed for everything else.

    Returns:
        (pace_seconds_per_km, speed_kmh). Runs never get speed and other
        categories never get pace. Runs and swims without speed data get
        neither; other categories report 0.0 km/h.
    """
    if category == ActivityCategory.RUN:
        if raw.average_speed <= 0:
            return None, None
        return round_half_up(1000 / raw.average_speed), None
    if category == ActivityCategory.SWIM and raw.average_speed <= 0:
        return None, None
    return None, round_half_up(raw.average_speed * MPS_TO_KMH, 1)


def normalize(raw: RawActivity, user_id: str) -> ActivityInsert:
    """Build the activity row for a raw Strava activity."""
    category, name = classify(raw.sport_type, raw.name)
    pace, speed = derive_timing(raw, category)

    # Zero elevation gain is stored as "no data"
    elevation = raw.total_elevation_gain
    if not elevation or elevation <= 0:
        elevation = None

    # Stored as naive UTC
    started_at = raw.start_date
    if started_at.tzinfo is not None:
        started_at = started_at.astimezone(timezone.utc).replace(tzinfo=None)

    heart_rate = round_half_up(raw.average_heartrate) if raw.average_heartrate else None

    return ActivityInsert(
        user_id=user_id,
        strava_activity_id=str(raw.id),
        type=category,
        name=name,
        started_at=started_at,
        duration_seconds=raw.moving_time,
        distance_meters=raw.distance,
        calories=estimate_calories(raw),
        elevation_meters=elevation,
        avg_heart_rate=heart_rate,
        pace_seconds_per_km=pace,
        speed_kmh=speed,
    )
