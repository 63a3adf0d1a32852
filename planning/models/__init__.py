"""
Data models for the planning system.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between the engines, the data layer and the UI.
"""

from .grades import GradeScale, DEFAULT_GRADE_SCALE
from .records import (
    SubjectRecord,
    AcademicRecord,
    CCARecord,
    SubjectChange,
    StudyHabits,
    TargetGoal,
    Goal,
    Pathway,
    StudentSnapshot,
    SimulationInput,
)
from .simulation import (
    SimulationType,
    Priority,
    Recommendation,
    SubjectPrediction,
    SimulationResult,
)
from .course import CourseRequirement, MatchResult, PathwayRecommendations
from .career import Demand, CareerJob, CareerPath, CareerMatch
from .roadmap import RoadmapStep

__all__ = [
    # Grade scale
    "GradeScale",
    "DEFAULT_GRADE_SCALE",
    # Student records
    "SubjectRecord",
    "AcademicRecord",
    "CCARecord",
    "SubjectChange",
    "StudyHabits",
    "TargetGoal",
    "Goal",
    "Pathway",
    "StudentSnapshot",
    "SimulationInput",
    # Simulation
    "SimulationType",
    "Priority",
    "Recommendation",
    "SubjectPrediction",
    "SimulationResult",
    # Courses
    "CourseRequirement",
    "MatchResult",
    "PathwayRecommendations",
    # Careers
    "Demand",
    "CareerJob",
    "CareerPath",
    "CareerMatch",
    # Roadmap
    "RoadmapStep",
]
