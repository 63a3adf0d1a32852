"""
Unit Tests for CourseMatcher

Scoring, ranking and the grade-gated pathway recommendations.
"""

import dataclasses

import pytest

from planning.config import DEFAULT_MATCHER_THRESHOLDS
from planning.engines import CourseMatcher
from planning.models import CourseRequirement


def course(name, *subjects, tags=()):
    return CourseRequirement(name=name, category="Test", required_subjects=tuple(subjects),
                             institution_tags=tuple(tags))


@pytest.fixture
def matcher():
    return CourseMatcher()


class TestMatch:
    """Tests for scoring a single course."""

    def test_match_when_half_covered_then_fifty_percent(self, matcher):
        result = matcher.match(course("Engineering", "Mathematics", "Physics"), ["Mathematics"])

        assert result.score_percent == 50
        assert result.matching_subjects == frozenset({"Mathematics"})
        assert result.missing_subjects == frozenset({"Physics"})

    def test_match_when_no_requirements_then_zero(self, matcher):
        """An empty requirement list scores 0 instead of dividing by zero."""
        result = matcher.match(course("Open"), ["Mathematics"])
        assert result.score_percent == 0

    def test_ordered_subjects_when_displayed_then_course_order(self, matcher):
        result = matcher.match(
            course("IT", "Mathematics", "Computer Applications", "Physics"),
            ["Physics", "Mathematics"],
        )
        assert result.ordered_matching() == ["Mathematics", "Physics"]
        assert result.ordered_missing() == ["Computer Applications"]


class TestRank:
    """Tests for ranking a table of courses."""

    def test_rank_when_scores_tie_then_table_order_kept(self, matcher):
        courses = [
            course("Second Best", "Mathematics", "Physics"),
            course("Alpha", "Mathematics"),
            course("Beta", "Mathematics"),
        ]
        ranked = matcher.rank(courses, ["Mathematics"])
        assert [r.course.name for r in ranked] == ["Alpha", "Beta", "Second Best"]

    def test_rank_when_min_score_then_strictly_above(self, matcher):
        courses = [course("Full", "Mathematics"), course("Half", "Mathematics", "Physics")]
        ranked = matcher.rank(courses, ["Mathematics"], min_score=50)
        assert [r.course.name for r in ranked] == ["Full"]

    def test_rank_when_limit_then_truncated(self, matcher):
        courses = [course(f"C{i}", "Mathematics") for i in range(5)]
        assert len(matcher.rank(courses, ["Mathematics"], limit=2)) == 2

    def test_rank_when_no_overlap_then_excluded(self, matcher):
        assert matcher.rank([course("Art", "Art")], ["Mathematics"]) == []


class TestRecommendPathways:
    """Tests for the grade-gated recommendation flow."""

    @pytest.fixture
    def tables(self):
        poly = [
            course("Three Subjects", "Mathematics", "Physics", "Chemistry"),
            course("Four Subjects", "Mathematics", "Physics", "Chemistry", "Biology"),
        ]
        ite = [
            course("ITE Four", "Mathematics", "Art", "Music", "Geography"),
            course("ITE Five", "Mathematics", "Art", "Music", "Geography", "History"),
        ]
        return poly, ite

    def test_recommend_when_strong_grades_then_poly_only(self, matcher, tables):
        poly, ite = tables
        recs = matcher.recommend_pathways(poly, ite, [("Mathematics", "A1")])

        assert recs.average_grade_point == 1
        assert recs.poly_eligible is True
        assert recs.ite_eligible is False
        assert recs.ite == []

    def test_recommend_when_weak_grades_then_ite_only(self, matcher, tables):
        poly, ite = tables
        recs = matcher.recommend_pathways(poly, ite, [("Mathematics", "F9")])

        assert recs.poly_eligible is False
        assert recs.poly == []
        assert recs.ite_eligible is True

    def test_recommend_when_average_between_five_and_six_then_both(self, matcher, tables):
        poly, ite = tables
        recs = matcher.recommend_pathways(poly, ite, [("Mathematics", "C6"), ("Physics", "C5")])
        assert recs.poly_eligible and recs.ite_eligible

    def test_recommend_when_ungraded_then_counts_as_five(self, matcher, tables):
        poly, ite = tables
        recs = matcher.recommend_pathways(poly, ite, [("Mathematics", None)])
        assert recs.average_grade_point == 5
        assert recs.poly_eligible and recs.ite_eligible

    def test_recommend_when_one_of_four_then_poly_filters_but_ite_keeps(self, matcher, tables):
        """25% is under the polytechnic minimum (30) but over ITE's (20)."""
        poly, ite = tables
        recs = matcher.recommend_pathways(poly, ite, [("Mathematics", "C5")])

        assert [r.course.name for r in recs.poly] == ["Three Subjects"]
        assert [r.course.name for r in recs.ite] == ["ITE Four"]

    def test_recommend_when_no_subjects_then_empty(self, matcher, tables):
        poly, ite = tables
        recs = matcher.recommend_pathways(poly, ite, [])

        assert recs.poly == [] and recs.ite == []
        assert recs.average_grade_point == 0.0

    def test_recommend_when_many_matches_then_top_n(self, loader):
        thresholds = dataclasses.replace(DEFAULT_MATCHER_THRESHOLDS, top_n=3)
        matcher = CourseMatcher(thresholds)
        recs = matcher.recommend_pathways(
            loader.poly_courses, loader.ite_courses,
            [("Mathematics", "C5"), ("Physics", "C5"), ("English Language", "C5")],
        )
        assert len(recs.poly) == 3
        assert len(recs.ite) == 3


class TestBrowse:
    """Tests for the ungated browse view."""

    def test_browse_when_any_overlap_then_listed(self, matcher, loader):
        recs = matcher.browse(loader.poly_courses, loader.ite_courses, ["Computer Applications"])

        names = [r.course.name for r in recs.poly]
        assert "Computer Engineering" in names
        assert all(r.score_percent > 0 for r in recs.poly + recs.ite)

    def test_browse_when_no_subjects_then_empty(self, matcher, loader):
        recs = matcher.browse(loader.poly_courses, loader.ite_courses, [])
        assert recs.poly == [] and recs.ite == []
