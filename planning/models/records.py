"""
Student record models.

Typed versions of the rows the record store keeps for a student. The
engines only read a few fields of each; the rest are carried through so a
snapshot survives a parse/display round unchanged.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SubjectRecord:
    """
    A subject the student is currently enrolled in.

    Attributes:
        subject_name: e.g. "Additional Mathematics"
        grade_estimate: Current estimated grade label (A1..F9) or None
            for a new/ungraded subject
        study_hours_per_week: Self-reported weekly study hours
        subject_type: Free text from the store ("Core", "Elective", ...)
        is_active: Inactive enrollments are dropped by the parser
    """
    subject_name: str
    grade_estimate: Optional[str] = None
    study_hours_per_week: float = 0
    subject_type: str = ""
    is_active: bool = True


@dataclass
class AcademicRecord:
    """A historical exam result. Append-only from the engine's view."""
    subject_name: str
    grade: Optional[str] = None
    score: Optional[float] = None
    exam_type: str = ""
    year: Optional[int] = None
    term: Optional[int] = None


@dataclass
class CCARecord:
    """
    A co-curricular activity record.

    Only leaps_points feeds the simulator; the other fields are
    descriptive and shown in reports.
    """
    leaps_points: float = 0
    cca_name: str = ""
    cca_category: str = ""
    role: str = ""
    participation_level: str = ""
    achievements: str = ""
    start_year: Optional[int] = None
    end_year: Optional[int] = None


@dataclass
class SubjectChange:
    """One hypothetical edit to the subject list. Either side may be empty."""
    add: Optional[str] = None
    remove: Optional[str] = None


@dataclass
class StudyHabits:
    """
    Hypothetical study habits for a simulation.

    hours_per_week means TOTAL weekly study hours for o-level prediction and
    weekly VIA hours for the LEAPS projection.
    """
    hours_per_week: Optional[float] = None
    subject_changes: List[SubjectChange] = field(default_factory=list)


@dataclass
class TargetGoal:
    """Institution/course the student is aiming for, with the L1R5 cut-off."""
    institution: str = ""
    course: str = ""
    required_score: Optional[str] = None


@dataclass
class Goal:
    """A goal row as stored (goal type, institution, target score, year)."""
    goal_type: str
    target_institution: str
    target_score: Optional[str] = None
    target_year: Optional[int] = None
    status: str = "active"

    def as_target(self, course: str = "") -> TargetGoal:
        return TargetGoal(
            institution=self.target_institution,
            course=course,
            required_score=self.target_score,
        )


@dataclass
class Pathway:
    """
    The post-secondary pathway the student has chosen.

    Students who went ITE -> Polytechnic keep their ITE course in
    ite_course_name while course_name holds the polytechnic diploma.
    """
    pathway_type: Optional[str] = None   # "JC", "Polytechnic", "ITE"
    institution_name: str = ""
    course_name: Optional[str] = None
    ite_course_name: Optional[str] = None

    @property
    def course_names(self) -> List[str]:
        """Courses to look careers up for, ITE course first."""
        return [name for name in (self.ite_course_name, self.course_name) if name]

    @property
    def is_ite_to_poly(self) -> bool:
        return bool(self.ite_course_name)


@dataclass
class StudentSnapshot:
    """Everything the engines may need about one student, read at one time."""
    student: dict = field(default_factory=dict)
    subjects: List[SubjectRecord] = field(default_factory=list)
    academic_history: List[AcademicRecord] = field(default_factory=list)
    cca_records: List[CCARecord] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    pathway: Optional[Pathway] = None

    @property
    def current_level(self) -> str:
        return self.student.get("current_level", "")

    @property
    def subject_names(self) -> List[str]:
        """Distinct subject names from academic history, in first-seen order."""
        names = []
        for record in self.academic_history:
            if record.subject_name not in names:
                names.append(record.subject_name)
        return names

    def active_goal(self) -> Optional[Goal]:
        for goal in self.goals:
            if goal.status == "active":
                return goal
        return None


@dataclass
class SimulationInput:
    """The snapshot plus hypothetical handed to the simulator."""
    simulation_type: str
    current_subjects: List[SubjectRecord] = field(default_factory=list)
    academic_history: List[AcademicRecord] = field(default_factory=list)
    cca_records: List[CCARecord] = field(default_factory=list)
    study_habits: Optional[StudyHabits] = None
    target_goal: Optional[TargetGoal] = None
