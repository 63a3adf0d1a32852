"""
Simulation, matching and roadmap engines.

Every engine here is pure logic: reference tables come in through the
constructor, results go out as dataclasses, and nothing is printed.
"""

from .simulation import (
    SimulationEngine,
    run_simulation,
    average_grade_point,
    predict_grade_change,
    l1r5,
)
from .matcher import CourseMatcher
from .career import CareerPredictionEngine
from .roadmap import RoadmapEngine

__all__ = [
    "SimulationEngine",
    "run_simulation",
    "average_grade_point",
    "predict_grade_change",
    "l1r5",
    "CourseMatcher",
    "CareerPredictionEngine",
    "RoadmapEngine",
]
