"""
Grade scale model.

The Singapore-Cambridge O-Level scale maps nine letter grades onto points
1 (best) to 9 (worst). Engines only do arithmetic on points, so every
conversion goes through a GradeScale instance handed to them.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..config import DEFAULT_GRADE_POINT


@dataclass(frozen=True)
class GradeScale:
    """
    Bidirectional label <-> point mapping.

    Attributes:
        points: Label to point mapping, e.g. {"A1": 1, ..., "F9": 9}
        score_equivalents: Label to percentage mapping used when a grade
            must be read as a score (career heuristics). Includes the plain
            letter grades (A, B, ...) used by some academic records.
    """
    points: Dict[str, int]
    score_equivalents: Dict[str, float] = field(default_factory=dict)

    @property
    def labels(self) -> list:
        """Labels ordered best to worst."""
        return sorted(self.points, key=self.points.get)

    def point_of(self, label: Optional[str]) -> Optional[int]:
        if not label:
            return None
        return self.points.get(label)

    def label_of(self, point) -> Optional[str]:
        for label, value in self.points.items():
            if value == point:
                return label
        return None

    def point_or_default(self, label: Optional[str], default: int = DEFAULT_GRADE_POINT) -> int:
        """Point value of a label, or the mid-scale default when absent/unknown."""
        point = self.point_of(label)
        return default if point is None else point

    def score_of(self, label: Optional[str]) -> Optional[float]:
        if not label:
            return None
        return self.score_equivalents.get(label)

    @classmethod
    def from_dict(cls, data: dict) -> "GradeScale":
        return cls(
            points={k: int(v) for k, v in data.get("points", {}).items()},
            score_equivalents={k: float(v) for k, v in data.get("score_equivalents", {}).items()},
        )


# Built-in copy of the reference table, for callers that don't load one
DEFAULT_GRADE_SCALE = GradeScale(
    points={
        "A1": 1, "A2": 2, "B3": 3, "B4": 4,
        "C5": 5, "C6": 6, "D7": 7, "E8": 8, "F9": 9,
    },
    score_equivalents={
        "A1": 90, "A2": 85, "B3": 80, "B4": 75, "C5": 70, "C6": 65,
        "D7": 60, "E8": 55, "F9": 50,
        "A": 85, "B": 75, "C": 65, "D": 55, "F": 40,
    },
)
