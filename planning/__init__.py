"""
Student Pathway Planner Package
===============================

Grade simulation, course matching and roadmap planning for Singapore
secondary school students heading to JC, polytechnic or ITE.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                         ALGORITHM LAYER                                  │
│        (Pure logic - returns data structures, NO UI/printing)           │
│                                                                         │
│  ┌────────────────────┐  ┌────────────────┐  ┌──────────────────────┐  │
│  │ReferenceDataLoader │  │ SnapshotParser │  │  SimulationEngine    │  │
│  │  (I/O)             │  │ (parsing)      │  │  (what-if grades)    │  │
│  └────────────────────┘  └────────────────┘  └──────────────────────┘  │
│                                                                         │
│  ┌────────────────┐  ┌────────────────────────┐  ┌──────────────────┐  │
│  │ CourseMatcher  │  │ CareerPredictionEngine │  │  RoadmapEngine   │  │
│  └────────────────┘  └────────────────────────┘  └──────────────────┘  │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ Returns dataclasses
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│  ┌─────────────────────────────────────────────────────────────────┐   │
│  │                    TerminalDisplay                               │   │
│  └─────────────────────────────────────────────────────────────────┘   │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                        StudentPlanner                                    │
│   (Orchestrator - connects algorithm, presentation and record store)    │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

planning/
├── __init__.py          # This file - main exports
├── config.py            # Paths, defaults and threshold dataclasses
├── planner.py           # StudentPlanner orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Data classes and enums
│   ├── grades.py        # GradeScale
│   ├── records.py       # SubjectRecord, AcademicRecord, StudentSnapshot, ...
│   ├── simulation.py    # SimulationResult, Recommendation, ...
│   ├── course.py        # CourseRequirement, MatchResult, ...
│   ├── career.py        # CareerJob, CareerPath, CareerMatch
│   └── roadmap.py       # RoadmapStep
│
├── data/                # Data loading and parsing
│   ├── loader.py        # ReferenceDataLoader
│   ├── parser.py        # SnapshotParser
│   └── record_store.py  # RecordStoreClient
│
├── engines/
│   ├── simulation.py    # SimulationEngine, L1R5 primitives
│   ├── matcher.py       # CourseMatcher
│   ├── career.py        # CareerPredictionEngine
│   └── roadmap.py       # RoadmapEngine
│
├── reference/           # JSON reference tables
└── ui/
    └── terminal.py      # TerminalDisplay

USAGE
-----

    from planning import SimulationEngine, SimulationInput, StudyHabits

    result = SimulationEngine().run(SimulationInput(
        simulation_type="o-level-prediction",
        current_subjects=snapshot.subjects,
        study_habits=StudyHabits(hours_per_week=20),
    ))
    print(result.predicted_outcomes["predicted_l1r5"])

Running from command line:

    python -m planning --snapshot snapshot.json --mode simulate-olevel --hours 20

"""

# Version
__version__ = "1.0.0"

# Main exports
from .planner import StudentPlanner
from .cli import main

# Model exports (for programmatic use)
from .models import (
    GradeScale,
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
    SimulationType,
    Priority,
    Recommendation,
    SimulationResult,
    CourseRequirement,
    MatchResult,
    PathwayRecommendations,
    CareerMatch,
    RoadmapStep,
)

# Engine exports
from .engines import (
    SimulationEngine,
    run_simulation,
    CourseMatcher,
    CareerPredictionEngine,
    RoadmapEngine,
)

# Data exports
from .data import ReferenceDataLoader, SnapshotParser, RecordStoreClient, RecordStoreError

# UI exports
from .ui import TerminalDisplay

# Configuration exports
from .config import SimulationThresholds, MatcherThresholds

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "StudentPlanner",
    "main",
    # Models
    "GradeScale",
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
    "SimulationType",
    "Priority",
    "Recommendation",
    "SimulationResult",
    "CourseRequirement",
    "MatchResult",
    "PathwayRecommendations",
    "CareerMatch",
    "RoadmapStep",
    # Engines
    "SimulationEngine",
    "run_simulation",
    "CourseMatcher",
    "CareerPredictionEngine",
    "RoadmapEngine",
    # Data
    "ReferenceDataLoader",
    "SnapshotParser",
    "RecordStoreClient",
    "RecordStoreError",
    # UI
    "TerminalDisplay",
    # Config
    "SimulationThresholds",
    "MatcherThresholds",
]
