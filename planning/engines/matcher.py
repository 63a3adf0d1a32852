"""
Course Matching Engine.

Scores polytechnic and ITE courses against the subjects a student has
taken. Each course lists the O-Level subjects it expects; a student's
score for the course is the share of those subjects they have.

SCORING FORMULA:
----------------
score = 100 * |required ∩ taken| / |required|

The denominator floors at 1 so a course with an empty subject list scores
0 instead of dividing by zero.

RANKING:
--------
Courses are ranked by score, highest first. Ties keep reference-table
order (Python's sort is stable); there is no secondary key.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_MATCHER_THRESHOLDS, MatcherThresholds
from ..models import (
    DEFAULT_GRADE_SCALE,
    CourseRequirement,
    GradeScale,
    MatchResult,
    PathwayRecommendations,
)

logger = logging.getLogger(__name__)


class CourseMatcher:
    """
    Matches a student's subjects against course requirement tables.

    USAGE:
    ------
    matcher = CourseMatcher()
    ranked = matcher.rank(loader.poly_courses, ["Mathematics", "Physics"])

    for result in ranked:
        print(f"{result.course.name}: {result.score_percent:.0f}%")

    Thresholds (minimum scores, average-grade gates, list length) come from
    MatcherThresholds so they can be tuned without code changes.
    """

    def __init__(self, thresholds: MatcherThresholds = DEFAULT_MATCHER_THRESHOLDS,
                 scale: GradeScale = DEFAULT_GRADE_SCALE):
        self.thresholds = thresholds
        self.scale = scale

    def match(self, course: CourseRequirement, student_subjects: Iterable[str]) -> MatchResult:
        """Score one course against the student's subjects."""
        taken = set(student_subjects)
        required = set(course.required_subjects)

        matching = required & taken
        missing = required - taken
        score = 100 * len(matching) / max(1, len(required))

        return MatchResult(
            course=course,
            matching_subjects=frozenset(matching),
            missing_subjects=frozenset(missing),
            score_percent=score,
        )

    def rank(self, courses: Sequence[CourseRequirement], student_subjects: Iterable[str],
             min_score: float = 0, limit: Optional[int] = None) -> List[MatchResult]:
        """
        Score every course, keep those strictly above min_score, best first.

        Args:
            courses: Reference table to scan (order breaks ties)
            student_subjects: Names of subjects the student has taken
            min_score: Exclusive lower bound on score_percent
            limit: Maximum results to return (None = all)
        """
        taken = set(student_subjects)
        results = [self.match(course, taken) for course in courses]
        results = [r for r in results if r.score_percent > min_score]
        results.sort(key=lambda r: r.score_percent, reverse=True)

        if limit is not None:
            results = results[:limit]
        return results

    def browse(self, poly_courses: Sequence[CourseRequirement],
               ite_courses: Sequence[CourseRequirement],
               student_subjects: Iterable[str]) -> PathwayRecommendations:
        """
        Every course with any overlap, no grade gate and no limit.

        This is the open-ended "what could my subjects lead to?" view, as
        opposed to recommend_pathways() which applies admission-style
        filters.
        """
        taken = set(student_subjects)
        min_score = self.thresholds.browse_min_score
        return PathwayRecommendations(
            poly=self.rank(poly_courses, taken, min_score=min_score),
            ite=self.rank(ite_courses, taken, min_score=min_score),
            poly_eligible=True,
            ite_eligible=True,
        )

    def recommend_pathways(self, poly_courses: Sequence[CourseRequirement],
                           ite_courses: Sequence[CourseRequirement],
                           subject_grades: Sequence[Tuple[str, Optional[str]]]) -> PathwayRecommendations:
        """
        Polytechnic and ITE recommendations for the pathway-selection step.

        ELIGIBILITY GATE:
        -----------------
        The student's average grade point decides which tracks are shown:
            average <= poly_max_average (6)  -> polytechnic courses
            average >= ite_min_average (5)   -> ITE courses
        Averages between 5 and 6 see both.

        Args:
            subject_grades: (subject_name, grade_label) pairs from the
                student's academic records; ungraded entries count as C5

        Returns:
            PathwayRecommendations; both lists are empty when the student
            has no subjects on record.
        """
        t = self.thresholds
        if not subject_grades:
            return PathwayRecommendations(average_grade_point=0.0)

        subject_names = [name for name, _ in subject_grades]
        points = [self.scale.point_or_default(grade) for _, grade in subject_grades]
        average = sum(points) / len(points)

        poly_eligible = average <= t.poly_max_average
        ite_eligible = average >= t.ite_min_average
        logger.debug(
            "Average grade point %.2f (poly eligible=%s, ITE eligible=%s)",
            average, poly_eligible, ite_eligible,
        )

        poly = []
        if poly_eligible:
            poly = self.rank(poly_courses, subject_names, min_score=t.poly_min_score, limit=t.top_n)

        ite = []
        if ite_eligible:
            ite = self.rank(ite_courses, subject_names, min_score=t.ite_min_score, limit=t.top_n)

        return PathwayRecommendations(
            poly=poly,
            ite=ite,
            average_grade_point=average,
            poly_eligible=poly_eligible,
            ite_eligible=ite_eligible,
        )
