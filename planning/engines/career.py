"""
Career Prediction Engine.

Suggests careers in two ways:

1. COURSE LOOKUP: if the student has chosen a course that appears in the
   career table, list that course's jobs, scored by market demand.
2. SUBJECT HEURISTIC: otherwise, derive subject-group scores (math,
   science, language, computing) from academic records and test them
   against fixed career archetypes.

The archetype weights and thresholds below are the business rules that
distinguish suggestions, so they are kept exactly as published.
"""

import logging
from typing import Dict, List, Sequence

from ..models import (
    DEFAULT_GRADE_SCALE,
    AcademicRecord,
    CareerMatch,
    CareerPath,
    Demand,
    GradeScale,
)
from .simulation import round_half_up

logger = logging.getLogger(__name__)


class CareerPredictionEngine:
    """
    Predicts careers from a chosen course or from subject performance.

    USAGE:
    ------
    engine = CareerPredictionEngine(loader.career_paths, loader.grade_scale)
    careers = engine.predict(pathway.course_names, snapshot.academic_history)
    """

    # Match score for a job found through the course table
    DEMAND_MATCH = {
        Demand.VERY_HIGH: 95,
        Demand.HIGH: 85,
        Demand.MEDIUM: 70,
    }
    DEFAULT_DEMAND_MATCH = 60

    # Subject-group score used when a group has no graded records
    DEFAULT_GROUP_SCORE = 70
    DEFAULT_COMPUTING_SCORE = 0

    MAX_RESULTS = 5

    def __init__(self, career_paths: Sequence[CareerPath], scale: GradeScale = DEFAULT_GRADE_SCALE):
        self.career_paths = list(career_paths)
        self.scale = scale

    def predict(self, course_names: Sequence[str], academic_records: Sequence[AcademicRecord],
                limit: int = MAX_RESULTS) -> List[CareerMatch]:
        """
        Top career matches, best first.

        Args:
            course_names: Courses the student is in or heading to (an
                ITE -> Poly student passes both)
            academic_records: Graded records for the heuristic fallback
            limit: Maximum number of careers to return
        """
        careers = self.from_courses(course_names)
        if not careers:
            logger.debug("No career table entry for %s, using subject heuristic", list(course_names))
            careers = self.from_subject_scores(self.subject_averages(academic_records))

        careers.sort(key=lambda c: c.match, reverse=True)
        return careers[:limit]

    def from_courses(self, course_names: Sequence[str]) -> List[CareerMatch]:
        """Jobs listed for the given courses, each title once."""
        by_course = {path.course: path for path in self.career_paths}
        careers: List[CareerMatch] = []
        seen = set()

        for name in course_names:
            path = by_course.get(name)
            if path is None:
                continue
            for job in path.jobs:
                if job.title in seen:
                    continue
                seen.add(job.title)
                careers.append(CareerMatch(
                    title=job.title,
                    match=self.DEMAND_MATCH.get(job.demand, self.DEFAULT_DEMAND_MATCH),
                    description=f"Growth: {job.growth}",
                    salary=job.salary,
                    source="course",
                ))
        return careers

    def subject_averages(self, academic_records: Sequence[AcademicRecord]) -> Dict[str, float]:
        """Average percent score per subject; ungraded records are skipped."""
        scores: Dict[str, List[float]] = {}
        for record in academic_records:
            score = self.scale.score_of(record.grade)
            if score is None:
                continue
            scores.setdefault(record.subject_name, []).append(score)
        return {subject: sum(values) / len(values) for subject, values in scores.items()}

    def from_subject_scores(self, averages: Dict[str, float]) -> List[CareerMatch]:
        """
        Rule-based careers from subject-group scores.

        ARCHETYPES:
        -----------
        Software Engineer        computing > 75 or math > 80
        Data Scientist           science > 75 and math > 75
        Engineer                 math > 75 or science > 75
        Healthcare Professional  science > 70
        Business Analyst         always
        """
        math_score = averages.get("Mathematics") or self.DEFAULT_GROUP_SCORE
        science_score = (
            averages.get("Physics")
            or averages.get("Chemistry")
            or averages.get("Biology")
            or averages.get("Science")
            or self.DEFAULT_GROUP_SCORE
        )
        language_score = (
            averages.get("English Language")
            or averages.get("English")
            or self.DEFAULT_GROUP_SCORE
        )
        computing_score = (
            averages.get("Computer Applications")
            or averages.get("Computing")
            or self.DEFAULT_COMPUTING_SCORE
        )

        careers: List[CareerMatch] = []

        if computing_score > 75 or math_score > 80:
            careers.append(CareerMatch(
                title="Software Engineer",
                match=round_half_up(computing_score * 0.4 + math_score * 0.4 + science_score * 0.2),
                description="Design and develop software applications",
                skills=["Programming", "Problem Solving"],
                salary="$4,500 - $7,000",
                source="heuristic",
            ))

        if science_score > 75 and math_score > 75:
            careers.append(CareerMatch(
                title="Data Scientist",
                match=round_half_up(math_score * 0.5 + science_score * 0.3 + computing_score * 0.2),
                description="Analyze complex data for insights",
                skills=["Statistics", "Programming"],
                salary="$5,000 - $8,000",
                source="heuristic",
            ))

        if math_score > 75 or science_score > 75:
            careers.append(CareerMatch(
                title="Engineer",
                match=round_half_up(math_score * 0.5 + science_score * 0.5),
                description="Apply scientific principles to solve problems",
                skills=["Mathematics", "Physics"],
                salary="$4,000 - $6,500",
                source="heuristic",
            ))

        if science_score > 70:
            careers.append(CareerMatch(
                title="Healthcare Professional",
                match=round_half_up(science_score * 0.6 + math_score * 0.2 + language_score * 0.2),
                description="Provide medical care and support",
                skills=["Biology", "Chemistry"],
                salary="$3,800 - $6,000",
                source="heuristic",
            ))

        careers.append(CareerMatch(
            title="Business Analyst",
            match=round_half_up(math_score * 0.3 + language_score * 0.4 + science_score * 0.3),
            description="Help businesses make data-driven decisions",
            skills=["Analysis", "Communication"],
            salary="$4,200 - $6,800",
            source="heuristic",
        ))

        return careers
