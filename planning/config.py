"""
Configuration constants for the planning system.

This module contains all configuration values and constants used throughout
the simulation and matching engines. Centralizing these makes it easy to
adjust behavior as admission policies change, without touching engine code.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# =============================================================================
# FILE PATHS
# =============================================================================

# Reference tables ship inside the package so an installed copy finds them
PACKAGE_DIR = Path(__file__).parent
REFERENCE_DIR = PACKAGE_DIR / "reference"
EXAMPLE_SNAPSHOT = REFERENCE_DIR / "example_snapshot.json"


# =============================================================================
# RECORD STORE
# =============================================================================

# The record store is the remote database holding profiles, enrollments,
# academic records, CCA records, goals and simulation history.
RECORD_STORE_URL = os.environ.get("PLANNER_RECORD_STORE_URL", "")
RECORD_STORE_KEY = os.environ.get("PLANNER_RECORD_STORE_KEY", "")
RECORD_STORE_TIMEOUT = 15  # seconds per request

LOG_LEVEL = os.environ.get("PLANNER_LOG_LEVEL", "WARNING")


# =============================================================================
# GRADE DEFAULTS
# =============================================================================

# Mid-scale point used whenever a subject has no grade (C5)
DEFAULT_GRADE_POINT = 5

# Grade reported for a subject we cannot predict from
DEFAULT_PREDICTED_GRADE = "B4"

# A subject added in a subject-change simulation starts here
NEW_SUBJECT_GRADE = "B3"
NEW_SUBJECT_HOURS = 3

# L1R5 = 1 language + 5 relevant subjects
L1R5_SUBJECT_COUNT = 6

# Only these records feed the poly/ITE eligibility average, except on the
# ITE -> Poly route where every record counts
SECONDARY_EXAM_TYPE = "Secondary School"


# =============================================================================
# SIMULATION THRESHOLDS
# =============================================================================

@dataclass(frozen=True)
class SimulationThresholds:
    """
    Tunable breakpoints for the outcome simulator.

    Study-hour breakpoints are per subject per week:
        delta > strong_increase_hours    -> one full grade better
        delta > moderate_increase_hours  -> half a grade better (rounded)
        delta < decrease_hours           -> one grade worse

    Confidence values are percentages reported alongside each result.
    """
    strong_increase_hours: float = 5
    moderate_increase_hours: float = 2
    decrease_hours: float = -3

    # Predicted point above this is a subject to prioritise (worse than B4)
    weak_grade_point: int = 4
    # Predicted L1R5 above this triggers the "focus on weaker subjects" note
    l1r5_focus_threshold: int = 15

    # Pathway analysis
    default_target_score: int = 12
    achievable_gap: float = 6
    # None keeps the raw formula; set e.g. 100 to clamp reported probability
    probability_ceiling: Optional[float] = None

    # LEAPS 2.0: VIA hours convert one-for-one up to this many bonus points
    max_leaps_bonus: float = 3

    # Confidence
    base_confidence: int = 75
    history_confidence_step: int = 2
    history_confidence_cap: int = 15
    subject_change_confidence: int = 70
    pathway_confidence: int = 80
    leaps_confidence: int = 85


# =============================================================================
# MATCHER THRESHOLDS
# =============================================================================

@dataclass(frozen=True)
class MatcherThresholds:
    """
    Filter policy for course recommendations.

    Scores are match percentages (0-100) and the filters are strict
    (score must be ABOVE the minimum). The average grade gate separates the
    polytechnic track from the ITE track; the two overlap at averages 5-6 so
    a borderline student sees both.
    """
    poly_min_score: float = 30
    ite_min_score: float = 20
    poly_max_average: float = 6
    ite_min_average: float = 5
    browse_min_score: float = 0
    top_n: int = 10


DEFAULT_SIMULATION_THRESHOLDS = SimulationThresholds()
DEFAULT_MATCHER_THRESHOLDS = MatcherThresholds()
