"""
Course requirement and match models.

CourseRequirement is static reference data; MatchResult and
PathwayRecommendations are derived on every call and never cached.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class CourseRequirement:
    """
    A polytechnic diploma or ITE course and the O-Level subjects it expects.

    Attributes:
        name: Course name (e.g., "Computer Engineering")
        category: Broad field (Business, IT, Engineering, ...)
        required_subjects: Unique subject names, in table order
        institution_tags: Short codes of the institutions offering it
            (e.g., ("SP",)); empty for ITE courses
        code: Joint Admissions Exercise course code (e.g., "S43")
    """
    name: str
    category: str
    required_subjects: Tuple[str, ...]
    institution_tags: Tuple[str, ...] = ()
    code: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CourseRequirement":
        subjects = []
        for subject in data.get("subjects", []):
            if subject not in subjects:
                subjects.append(subject)
        return cls(
            name=data["name"],
            category=data.get("category", ""),
            required_subjects=tuple(subjects),
            institution_tags=tuple(data.get("poly", [])),
            code=data.get("code", ""),
        )


@dataclass
class MatchResult:
    """
    How well a student's subjects cover one course.

    score_percent = 100 * |matching| / |required|
    """
    course: CourseRequirement
    matching_subjects: frozenset
    missing_subjects: frozenset
    score_percent: float

    def ordered_matching(self) -> List[str]:
        """Matching subjects in the course's own order, for display."""
        return [s for s in self.course.required_subjects if s in self.matching_subjects]

    def ordered_missing(self) -> List[str]:
        return [s for s in self.course.required_subjects if s in self.missing_subjects]


@dataclass
class PathwayRecommendations:
    """
    Polytechnic and ITE candidates from the pathway-selection flow.

    Either list may be empty because the student's average grade point
    falls outside that track's gate, not only because nothing matched.
    """
    poly: List[MatchResult] = field(default_factory=list)
    ite: List[MatchResult] = field(default_factory=list)
    average_grade_point: float = 0.0
    poly_eligible: bool = False
    ite_eligible: bool = False
