"""
Tests for Strava activity normalization.

Classification table, calorie fallback chain, pace/speed derivation
and elevation handling.
"""

from datetime import datetime

import pytest

from macroclaw.features.strava import (
    RawActivity,
    classify,
    derive_timing,
    estimate_calories,
    normalize,
)
from macroclaw.shared.constants import ActivityCategory, STRENGTH_NAME_PREFIX

from conftest import USER_ID, make_raw_activity


def raw(**overrides) -> RawActivity:
    return RawActivity.model_validate(make_raw_activity(**overrides))


# =============================================================================
# Classification
# =============================================================================

class TestClassify:
    """Tests for sport type -> category mapping."""

    @pytest.mark.parametrize("sport_type", ["Run", "TrailRun", "VirtualRun"])
    def test_running_variants(self, sport_type):
        assert classify(sport_type, "x")[0] == ActivityCategory.RUN

    @pytest.mark.parametrize(
        "sport_type", ["Ride", "VirtualRide", "MountainBikeRide", "GravelRide"]
    )
    def test_cycling_variants(self, sport_type):
        assert classify(sport_type, "x")[0] == ActivityCategory.RIDE

    @pytest.mark.parametrize("sport_type", ["Swim", "OpenWaterSwim"])
    def test_swimming_variants(self, sport_type):
        assert classify(sport_type, "x")[0] == ActivityCategory.SWIM

    @pytest.mark.parametrize("sport_type", ["Hike", "Yoga", "Rowing", "Workout", ""])
    def test_everything_else_is_other(self, sport_type):
        category, name = classify(sport_type, "Session")
        assert category == ActivityCategory.OTHER
        assert name == "Session"

    def test_weight_training_gets_strength_prefix(self):
        category, name = classify("WeightTraining", "Leg day")
        assert category == ActivityCategory.OTHER
        assert name == f"{STRENGTH_NAME_PREFIX}Leg day"
        assert name.startswith("Macroclaw Strength: ")

    def test_names_untouched_for_known_sports(self):
        assert classify("TrailRun", "Hills")[1] == "Hills"


# =============================================================================
# Calories
# =============================================================================

class TestEstimateCalories:
    """Tests for the calorie fallback chain."""

    def test_reported_calories_win(self):
        assert estimate_calories(raw(calories=450, kilojoules=600)) == 450

    def test_kilojoules_when_no_calories(self):
        assert estimate_calories(raw(calories=None, kilojoules=600)) == 600

    def test_moving_time_fallback(self):
        """1800 s / 60 * 8 kcal/min = 240."""
        activity = raw(calories=None, kilojoules=None, moving_time=1800)
        assert estimate_calories(activity) == 240

    def test_result_is_integer(self):
        calories = estimate_calories(raw(calories=450.7))
        assert calories == 451
        assert isinstance(calories, int)

    def test_zero_calories_treated_as_missing(self):
        assert estimate_calories(raw(calories=0, kilojoules=300)) == 300

    def test_half_kilojoule_rounds_up(self):
        assert estimate_calories(raw(calories=None, kilojoules=600.5)) == 601

    def test_half_calorie_rounds_up(self):
        assert estimate_calories(raw(calories=450.5)) == 451


# =============================================================================
# Pace / speed
# =============================================================================

class TestDeriveTiming:
    """Tests for pace (runs) and speed (everything else)."""

    def test_run_gets_pace_only(self):
        pace, speed = derive_timing(raw(average_speed=2.5), ActivityCategory.RUN)
        assert pace == 400  # 1000 / 2.5
        assert speed is None

    def test_ride_gets_speed_only(self):
        pace, speed = derive_timing(raw(average_speed=8.33), ActivityCategory.RIDE)
        assert pace is None
        assert speed == 30.0  # 8.33 * 3.6 = 29.988

    def test_speed_rounded_to_one_decimal(self):
        _, speed = derive_timing(raw(average_speed=5.123), ActivityCategory.OTHER)
        assert speed == 18.4

    def test_run_without_speed_has_no_pace(self):
        assert derive_timing(raw(average_speed=0), ActivityCategory.RUN) == (None, None)

    def test_swim_without_speed_has_neither(self):
        assert derive_timing(raw(average_speed=0), ActivityCategory.SWIM) == (None, None)

    def test_other_without_speed_reports_zero(self):
        assert derive_timing(raw(average_speed=0), ActivityCategory.OTHER) == (None, 0.0)

    def test_ride_without_speed_reports_zero(self):
        assert derive_timing(raw(average_speed=0), ActivityCategory.RIDE) == (None, 0.0)

    def test_pace_half_second_rounds_up(self):
        # 1000 / 16 = 62.5
        pace, _ = derive_timing(raw(average_speed=16), ActivityCategory.RUN)
        assert pace == 63


# =============================================================================
# Full normalization
# =============================================================================

class TestNormalize:
    """Tests for the composed raw -> row mapping."""

    def test_trail_run(self):
        row = normalize(raw(sport_type="TrailRun", average_speed=2.5), USER_ID)
        assert row.type == ActivityCategory.RUN
        assert row.pace_seconds_per_km == 400
        assert row.speed_kmh is None

    def test_gravel_ride(self):
        row = normalize(raw(sport_type="GravelRide", average_speed=7.5), USER_ID)
        assert row.type == ActivityCategory.RIDE
        assert row.speed_kmh == 27.0
        assert row.pace_seconds_per_km is None

    def test_open_water_swim_without_speed(self):
        row = normalize(raw(sport_type="OpenWaterSwim", average_speed=0), USER_ID)
        assert row.type == ActivityCategory.SWIM
        assert row.pace_seconds_per_km is None
        assert row.speed_kmh is None

    def test_pool_swim_with_speed(self):
        row = normalize(raw(sport_type="Swim", average_speed=1.0), USER_ID)
        assert row.pace_seconds_per_km is None
        assert row.speed_kmh == 3.6

    def test_weight_training(self):
        row = normalize(
            raw(sport_type="WeightTraining", name="Push", average_speed=0), USER_ID
        )
        assert row.type == ActivityCategory.OTHER
        assert row.name == "Macroclaw Strength: Push"
        assert row.pace_seconds_per_km is None
        assert row.speed_kmh == 0.0

    def test_zero_elevation_is_absent(self):
        assert normalize(raw(total_elevation_gain=0), USER_ID).elevation_meters is None

    def test_missing_elevation_is_absent(self):
        assert normalize(raw(total_elevation_gain=None), USER_ID).elevation_meters is None

    def test_positive_elevation_kept(self):
        assert normalize(raw(total_elevation_gain=42), USER_ID).elevation_meters == 42

    def test_direct_fields(self):
        row = normalize(raw(id=987654321, moving_time=2400, distance=8000.5), USER_ID)
        assert row.user_id == USER_ID
        assert row.strava_activity_id == "987654321"
        assert row.duration_seconds == 2400
        assert row.distance_meters == 8000.5
        assert row.started_at == datetime(2026, 10, 18, 6, 30)

    def test_heart_rate_rounded_or_none(self):
        assert normalize(raw(average_heartrate=151.6), USER_ID).avg_heart_rate == 152
        assert normalize(raw(average_heartrate=None), USER_ID).avg_heart_rate is None

    def test_half_heart_rate_rounds_up(self):
        assert normalize(raw(average_heartrate=150.5), USER_ID).avg_heart_rate == 151

    def test_legacy_type_field_used_without_sport_type(self):
        data = make_raw_activity(type="Ride")
        del data["sport_type"]
        row = normalize(RawActivity.model_validate(data), USER_ID)
        assert row.type == ActivityCategory.RIDE
