"""
Unified constants for activity categories.

This module provides a single source of truth for activity type naming
across the entire application.
"""

from enum import Enum


class ActivityCategory(str, Enum):
    """
    Our internal activity categories.

    Stored in activities.type and used for filtering in the dashboard.
    """
    RUN = "Run"
    RIDE = "Ride"
    SWIM = "Swim"
    OTHER = "Other"


class StravaSportType(str, Enum):
    """
    Sport types from Strava API that we classify explicitly.

    These are Strava's naming conventions, not ours.
    Anything not listed here is classified as ActivityCategory.OTHER.
    """
    RUN = "Run"
    TRAIL_RUN = "TrailRun"
    VIRTUAL_RUN = "VirtualRun"
    RIDE = "Ride"
    VIRTUAL_RIDE = "VirtualRide"
    MOUNTAIN_BIKE_RIDE = "MountainBikeRide"
    GRAVEL_RIDE = "GravelRide"
    SWIM = "Swim"
    OPEN_WATER_SWIM = "OpenWaterSwim"
    WEIGHT_TRAINING = "WeightTraining"


# Mapping: Strava sport type -> our ActivityCategory
STRAVA_TO_CATEGORY: dict[str, ActivityCategory] = {
    StravaSportType.RUN.value: ActivityCategory.RUN,
    StravaSportType.TRAIL_RUN.value: ActivityCategory.RUN,
    StravaSportType.VIRTUAL_RUN.value: ActivityCategory.RUN,
    StravaSportType.RIDE.value: ActivityCategory.RIDE,
    StravaSportType.VIRTUAL_RIDE.value: ActivityCategory.RIDE,
    StravaSportType.MOUNTAIN_BIKE_RIDE.value: ActivityCategory.RIDE,
    StravaSportType.GRAVEL_RIDE.value: ActivityCategory.RIDE,
    StravaSportType.SWIM.value: ActivityCategory.SWIM,
    StravaSportType.OPEN_WATER_SWIM.value: ActivityCategory.SWIM,
    StravaSportType.WEIGHT_TRAINING.value: ActivityCategory.OTHER,
}

# Sport types that land in OTHER but get a name prefix so the dashboard
# can tell strength sessions apart from the rest of OTHER.
STRENGTH_SPORT_TYPES: frozenset[str] = frozenset({
    StravaSportType.WEIGHT_TRAINING.value,
})
STRENGTH_NAME_PREFIX = "Macroclaw Strength: "

# Calorie fallback when Strava reports neither calories nor kilojoules
FALLBACK_KCAL_PER_MINUTE = 8

# m/s -> km/h
MPS_TO_KMH = 3.6
