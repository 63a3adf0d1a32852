"""
Career prediction models.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Demand(Enum):
    """Job market demand tier."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


@dataclass(frozen=True)
class CareerJob:
    """A job title reachable from a course, with market data."""
    title: str
    salary: str          # e.g. "$3,500 - $5,500" (monthly, SGD)
    demand: Demand
    growth: str          # e.g. "+15%"

    @property
    def growth_percent(self) -> int:
        match = re.search(r"[+-]?\d+", self.growth)
        return int(match.group()) if match else 0

    @classmethod
    def from_dict(cls, data: dict) -> "CareerJob":
        return cls(
            title=data["title"],
            salary=data.get("salary", ""),
            demand=Demand(data.get("demand", "Low")),
            growth=data.get("growth", ""),
        )


@dataclass(frozen=True)
class CareerPath:
    """All jobs listed for one course."""
    course: str
    jobs: tuple

    @classmethod
    def from_dict(cls, data: dict) -> "CareerPath":
        return cls(
            course=data["course"],
            jobs=tuple(CareerJob.from_dict(j) for j in data.get("jobs", [])),
        )


@dataclass
class CareerMatch:
    """
    A predicted career with a 0-100 match score.

    source is "course" when it came from the course table and "heuristic"
    when it was derived from subject-group scores.
    """
    title: str
    match: int
    description: str
    skills: List[str] = field(default_factory=list)
    salary: str = ""
    source: str = "course"
