"""
Unit Tests for the Simulation Engine

Covers the grade primitives and all four what-if simulations.
"""

import dataclasses

import pytest

from planning.config import DEFAULT_SIMULATION_THRESHOLDS
from planning.engines import (
    SimulationEngine,
    average_grade_point,
    l1r5,
    predict_grade_change,
    run_simulation,
)
from planning.models import (
    AcademicRecord,
    CCARecord,
    Priority,
    SimulationInput,
    SimulationType,
    StudyHabits,
    SubjectChange,
    SubjectRecord,
    TargetGoal,
)


@pytest.fixture
def engine():
    return SimulationEngine()


class TestPrimitives:
    """Tests for the shared grade-point helpers."""

    # ─────────────────────────────────────────────────────────────────────────
    # average_grade_point
    # ─────────────────────────────────────────────────────────────────────────

    def test_average_when_empty_then_returns_five(self):
        """No subjects averages to the mid-scale point."""
        assert average_grade_point([]) == 5.0

    def test_average_when_grade_missing_then_counts_as_five(self, make_subjects):
        """An ungraded subject contributes 5."""
        assert average_grade_point(make_subjects(["A1", None])) == 3.0

    # ─────────────────────────────────────────────────────────────────────────
    # l1r5
    # ─────────────────────────────────────────────────────────────────────────

    def test_l1r5_when_eight_subjects_then_sums_best_six(self, make_subjects):
        """Only the six lowest points count."""
        subjects = make_subjects(["F9", "A1", "E8", "A2", "B3", "B4", "C5", "C6"])
        assert l1r5(subjects) == 21

    def test_l1r5_when_order_changes_then_same_total(self, make_subjects):
        """Input order does not matter."""
        grades = ["C6", "A2", "F9", "B3", "A1", "D7", "B4"]
        assert l1r5(make_subjects(grades)) == l1r5(make_subjects(list(reversed(grades))))

    def test_l1r5_when_fewer_than_six_then_sums_all(self, make_subjects):
        """No padding with imaginary subjects."""
        assert l1r5(make_subjects(["A1", "B3"])) == 4
        assert l1r5([]) == 0

    def test_l1r5_when_grade_missing_then_counts_as_five(self, make_subjects):
        assert l1r5(make_subjects([None])) == 5

    # ─────────────────────────────────────────────────────────────────────────
    # predict_grade_change
    # ─────────────────────────────────────────────────────────────────────────

    def test_predict_when_strong_increase_then_one_grade_better(self):
        """More than 5 extra hours improves by a full grade."""
        assert predict_grade_change("B4", 6) == "B3"

    def test_predict_when_already_a1_then_stays_a1(self):
        assert predict_grade_change("A1", 10) == "A1"

    def test_predict_when_already_f9_then_stays_f9(self):
        assert predict_grade_change("F9", -5) == "F9"

    def test_predict_when_grade_missing_then_returns_b4(self):
        """Ungraded or unknown grades predict B4 regardless of hours."""
        assert predict_grade_change(None, 3) == "B4"
        assert predict_grade_change("Z1", 6) == "B4"

    def test_predict_when_large_decrease_then_one_grade_worse(self):
        assert predict_grade_change("C5", -4) == "C6"

    def test_predict_when_moderate_increase_then_whole_grade_unchanged(self):
        """The half-grade step rounds half-up back to the same grade."""
        assert predict_grade_change("B4", 3) == "B4"
        assert predict_grade_change("B4", 5) == "B4"

    def test_predict_when_on_breakpoint_then_unchanged(self):
        """Breakpoints are strict: -3 and +2 do nothing."""
        assert predict_grade_change("B4", -3) == "B4"
        assert predict_grade_change("B4", 2) == "B4"


class TestOLevelPrediction:
    """Tests for the o-level-prediction simulation."""

    def test_run_when_more_hours_then_grades_improve(self, engine, make_subjects):
        """36 extra hours over six subjects is +6 each: B4 -> B3."""
        subjects = make_subjects(["B4"] * 6, hours=2)
        result = engine.simulate_o_level_prediction(subjects, [], StudyHabits(hours_per_week=48))

        outcomes = result.predicted_outcomes
        assert outcomes["current_l1r5"] == 24
        assert outcomes["predicted_l1r5"] == 18
        assert outcomes["improvement"] == 6
        assert outcomes["study_hours_change"] == 36
        assert [p.predicted for p in outcomes["subject_predictions"]] == ["B3"] * 6
        assert [r.type for r in result.recommendations] == ["Study Focus", "Subject Performance"]

    def test_run_when_fewer_hours_then_warns_and_names_weak_subjects(self, engine, make_subjects):
        """Dropping 4 hours per subject costs a grade and flags the drop."""
        subjects = make_subjects(["B4"] * 6, hours=4)
        result = engine.simulate_o_level_prediction(subjects, [], StudyHabits(hours_per_week=0))

        assert result.predicted_outcomes["predicted_l1r5"] == 30
        assert result.predicted_outcomes["improvement"] == -6
        types = [r.type for r in result.recommendations]
        assert types == ["Study Focus", "Study Hours", "Subject Performance"]
        assert result.recommendations[1].priority is Priority.MEDIUM
        assert "Subject 1, Subject 2" in result.recommendations[2].message

    def test_run_when_hours_not_supplied_then_no_change(self, engine, make_subjects):
        subjects = make_subjects(["A2", "B3"], hours=3)
        result = engine.simulate_o_level_prediction(subjects, [], None)

        assert result.predicted_outcomes["study_hours_change"] == 0
        assert result.predicted_outcomes["improvement"] == 0

    def test_run_when_no_history_then_confidence_75(self, engine, make_subjects):
        result = engine.simulate_o_level_prediction(make_subjects(["B4"]), [], None)
        assert result.confidence_score == 75

    def test_run_when_ten_records_then_confidence_capped_at_90(self, engine, make_subjects):
        history = [AcademicRecord(subject_name="Mathematics", grade="B3") for _ in range(10)]
        result = engine.simulate_o_level_prediction(make_subjects(["B4"]), history, None)
        assert result.confidence_score == 90

    def test_run_when_three_records_then_confidence_81(self, engine, make_subjects):
        history = [AcademicRecord(subject_name="Mathematics", grade="B3") for _ in range(3)]
        result = engine.simulate_o_level_prediction(make_subjects(["B4"]), history, None)
        assert result.confidence_score == 81

    def test_run_when_no_subjects_then_zero_totals(self, engine):
        """An empty subject list is guarded rather than dividing by zero."""
        result = engine.simulate_o_level_prediction([], [], StudyHabits(hours_per_week=10))
        assert result.predicted_outcomes["current_l1r5"] == 0
        assert result.predicted_outcomes["predicted_l1r5"] == 0
        assert result.predicted_outcomes["subject_predictions"] == []

    def test_run_when_subject_ungraded_then_current_shows_b4(self, engine, make_subjects):
        result = engine.simulate_o_level_prediction(make_subjects([None]), [], None)
        row = result.predicted_outcomes["subject_predictions"][0]
        assert row.current == "B4"
        assert row.predicted == "B4"


class TestSubjectChange:
    """Tests for the subject-change simulation."""

    def test_run_when_swap_improves_then_high_priority(self, engine):
        """Replacing C6 Physics with a B3 Chemistry lowers L1R5 by 3."""
        subjects = [
            SubjectRecord("Mathematics", "B4", 4),
            SubjectRecord("Physics", "C6", 2),
        ]
        habits = StudyHabits(subject_changes=[SubjectChange(add="Chemistry", remove="Physics")])
        result = engine.simulate_subject_change(subjects, habits)

        outcomes = result.predicted_outcomes
        assert outcomes["current_l1r5"] == 10
        assert outcomes["predicted_l1r5_with_changes"] == 7
        assert outcomes["difference"] == 3
        assert outcomes["new_subject_list"] == ["Mathematics", "Chemistry"]
        assert result.recommendations[0].priority is Priority.HIGH
        assert result.confidence_score == 70

    def test_run_when_swap_does_not_improve_then_medium_priority(self, engine):
        subjects = [
            SubjectRecord("Mathematics", "A1", 4),
            SubjectRecord("Physics", "A2", 2),
        ]
        habits = StudyHabits(subject_changes=[SubjectChange(add="Chemistry", remove="Physics")])
        result = engine.simulate_subject_change(subjects, habits)

        assert result.predicted_outcomes["difference"] == -1
        assert result.recommendations[0].priority is Priority.MEDIUM
        assert "interest and aptitude" in result.recommendations[0].message

    def test_run_when_no_changes_then_same_list(self, engine, make_subjects):
        result = engine.simulate_subject_change(make_subjects(["B3", "B4"]), None)
        assert result.predicted_outcomes["difference"] == 0
        assert result.predicted_outcomes["new_subject_list"] == ["Subject 1", "Subject 2"]

    def test_run_when_remove_unknown_subject_then_nothing_removed(self, engine, make_subjects):
        habits = StudyHabits(subject_changes=[SubjectChange(remove="History")])
        result = engine.simulate_subject_change(make_subjects(["B3"]), habits)
        assert result.predicted_outcomes["new_subject_list"] == ["Subject 1"]


class TestPathwayAnalysis:
    """Tests for the pathway-analysis simulation."""

    @pytest.fixture
    def l1r5_10(self, make_subjects):
        return make_subjects(["A1", "A1", "A2", "A2", "A2", "A2"])

    def test_run_when_under_target_then_probability_above_100(self, engine, l1r5_10):
        """Current 10 vs target 12: gap -2 and the raw formula gives 120."""
        target = TargetGoal(institution="Ngee Ann Polytechnic", course="Nursing", required_score="12")
        result = engine.simulate_pathway_analysis(l1r5_10, target)

        outcomes = result.predicted_outcomes
        assert outcomes["current_l1r5"] == 10
        assert outcomes["target_score"] == 12
        assert outcomes["gap"] == -2
        assert outcomes["achievable"] is True
        assert outcomes["probability"] == 120
        assert outcomes["target_institution"] == "Ngee Ann Polytechnic"
        assert [r.type for r in result.recommendations] == ["Pathway"]
        assert "Ngee Ann Polytechnic - Nursing" in result.recommendations[0].message
        assert result.confidence_score == 80

    def test_run_when_small_gap_then_action_plan(self, engine, make_subjects):
        """Gap 3 adds an action plan naming three subjects."""
        subjects = make_subjects(["A1", "A2", "B3", "B3", "B3", "B3"])
        result = engine.simulate_pathway_analysis(subjects, TargetGoal(required_score="12"))

        assert result.predicted_outcomes["gap"] == 3
        assert result.predicted_outcomes["probability"] == 70
        assert result.recommendations[1].type == "Action Plan"
        assert "Improve 3 subjects" in result.recommendations[1].message

    def test_run_when_gap_too_large_then_alternative_pathway(self, engine, make_subjects):
        subjects = make_subjects(["C5"] * 6)
        result = engine.simulate_pathway_analysis(subjects, TargetGoal(required_score="12"))

        assert result.predicted_outcomes["gap"] == 18
        assert result.predicted_outcomes["achievable"] is False
        assert result.predicted_outcomes["probability"] == 20
        assert [r.type for r in result.recommendations] == ["Alternative Pathway"]

    def test_run_when_no_target_then_defaults(self, engine, l1r5_10):
        """No goal means target 12 and unnamed institution."""
        result = engine.simulate_pathway_analysis(l1r5_10, None)
        assert result.predicted_outcomes["target_score"] == 12
        assert result.predicted_outcomes["target_institution"] == "Not specified"

    def test_run_when_score_has_suffix_then_leading_integer_used(self, engine, l1r5_10):
        result = engine.simulate_pathway_analysis(l1r5_10, TargetGoal(required_score="20 pts"))
        assert result.predicted_outcomes["target_score"] == 20

    def test_run_when_score_unparseable_then_default(self, engine, l1r5_10):
        result = engine.simulate_pathway_analysis(l1r5_10, TargetGoal(required_score="n/a"))
        assert result.predicted_outcomes["target_score"] == 12

    def test_run_when_ceiling_configured_then_probability_clamped(self, l1r5_10):
        thresholds = dataclasses.replace(DEFAULT_SIMULATION_THRESHOLDS, probability_ceiling=100)
        engine = SimulationEngine(thresholds=thresholds)
        result = engine.simulate_pathway_analysis(l1r5_10, TargetGoal(required_score="12"))
        assert result.predicted_outcomes["probability"] == 100


class TestLeapsImpact:
    """Tests for the leaps-impact simulation."""

    def test_run_when_five_via_hours_then_bonus_capped_at_three(self, engine):
        ccas = [CCARecord(leaps_points=2), CCARecord(leaps_points=3)]
        result = engine.simulate_leaps_impact(ccas, StudyHabits(hours_per_week=5))

        outcomes = result.predicted_outcomes
        assert outcomes["current_leaps_points"] == 5
        assert outcomes["potential_additional_points"] == 3
        assert outcomes["projected_total"] == 8
        assert outcomes["via_impact"] == 3
        assert result.confidence_score == 85

    def test_run_when_any_input_then_two_recommendations(self, engine):
        result = engine.simulate_leaps_impact([CCARecord(leaps_points=2)], None)

        assert [r.type for r in result.recommendations] == ["LEAPS 2.0", "Leadership"]
        assert result.recommendations[0].message.startswith("Current LEAPS points: 2.")
        assert result.recommendations[1].priority is Priority.HIGH

    def test_run_when_no_hours_then_no_bonus(self, engine):
        result = engine.simulate_leaps_impact([], None)
        assert result.predicted_outcomes["projected_total"] == 0


class TestDispatch:
    """Tests for SimulationEngine.run / run_simulation."""

    def test_run_when_unknown_type_then_empty_result(self, make_subjects):
        """Unsupported types return an empty result instead of raising."""
        result = run_simulation(SimulationInput(
            simulation_type="career-switch", current_subjects=make_subjects(["B4"])
        ))
        assert result.is_empty
        assert result.predicted_outcomes == {}
        assert result.confidence_score == 0
        assert result.recommendations == []

    def test_run_when_enum_type_then_dispatches(self):
        result = run_simulation(SimulationInput(
            simulation_type=SimulationType.LEAPS_IMPACT,
            cca_records=[CCARecord(leaps_points=1)],
        ))
        assert result.predicted_outcomes["current_leaps_points"] == 1

    def test_to_dict_when_prediction_rows_then_plain_dicts(self, make_subjects):
        result = run_simulation(SimulationInput(
            simulation_type="o-level-prediction",
            current_subjects=make_subjects(["B4"]),
        ))
        data = result.to_dict()
        assert data["predicted_outcomes"]["subject_predictions"] == [
            {"subject": "Subject 1", "current": "B4", "predicted": "B4"}
        ]
        assert data["recommendations"][0]["priority"] == "high"

    def test_to_record_when_saved_then_carries_inputs(self):
        result = run_simulation(SimulationInput(simulation_type="leaps-impact"))
        record = result.to_record("s-1", "leaps-impact", "test", {"hours_per_week": 2})

        assert record["student_id"] == "s-1"
        assert record["simulation_type"] == "leaps-impact"
        assert record["input_parameters"] == {"hours_per_week": 2}
        assert record["confidence_score"] == 85
