"""
Simulation result models.

Contains the SimulationResult returned by every simulator run and the
Recommendation entries it carries.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


class SimulationType(Enum):
    """
    The four what-if simulations the engine knows.

    O_LEVEL_PREDICTION: Predict L1R5 from a change in total study hours
    SUBJECT_CHANGE: Re-score L1R5 after adding/removing subjects
    PATHWAY_ANALYSIS: Gap between current L1R5 and a course cut-off
    LEAPS_IMPACT: Project LEAPS 2.0 co-curricular points
    """
    O_LEVEL_PREDICTION = "o-level-prediction"
    SUBJECT_CHANGE = "subject-change"
    PATHWAY_ANALYSIS = "pathway-analysis"
    LEAPS_IMPACT = "leaps-impact"

    @classmethod
    def parse(cls, value) -> Optional["SimulationType"]:
        """Return the enum member for a value, or None if unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Recommendation:
    """
    A single piece of advice attached to a simulation result.

    type is a short heading shown to the student ("Study Focus",
    "Action Plan", ...); message is the advice itself.
    """
    type: str
    message: str
    priority: Priority

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message, "priority": self.priority.value}


@dataclass
class SubjectPrediction:
    """Per-subject row of an o-level prediction."""
    subject: str
    current: str
    predicted: str


@dataclass
class SimulationResult:
    """
    Output of one simulator run.

    Constructed fresh per call and handed straight to the caller; it has no
    lifecycle of its own. predicted_outcomes keys depend on the simulation
    type (see SimulationEngine).
    """
    predicted_outcomes: dict = field(default_factory=dict)
    confidence_score: int = 0
    recommendations: list = field(default_factory=list)

    @classmethod
    def empty(cls) -> "SimulationResult":
        """The no-op result returned for unsupported simulation types."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.predicted_outcomes and not self.recommendations

    def to_dict(self) -> dict:
        """JSON-ready form, keyed the way the record store keeps it."""
        outcomes = {}
        for key, value in self.predicted_outcomes.items():
            if isinstance(value, list):
                value = [asdict(v) if isinstance(v, SubjectPrediction) else v for v in value]
            outcomes[key] = value
        return {
            "predicted_outcomes": outcomes,
            "confidence_score": self.confidence_score,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    def to_record(self, student_id: str, simulation_type: str,
                  scenario_description: str = "", input_parameters: Optional[dict] = None) -> dict:
        """Row for the simulation history table."""
        record = {
            "student_id": student_id,
            "simulation_type": simulation_type,
            "scenario_description": scenario_description,
            "input_parameters": input_parameters or {},
        }
        record.update(self.to_dict())
        return record
