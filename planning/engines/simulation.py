"""
Grade/Outcome Simulation Engine.

This module runs the four "what-if" simulations a student can ask for:

    o-level-prediction  - What happens to my L1R5 if I study N hours a week?
    subject-change      - What if I drop Physics and take Chemistry?
    pathway-analysis    - How far am I from the cut-off for my target course?
    leaps-impact        - How many LEAPS 2.0 points could I end up with?

All of it is heuristic, not statistical: fixed step functions and linear
formulas over the O-Level grade-point scale. Every function here is pure;
the engine holds only its (immutable) grade scale and thresholds.

L1R5 REFRESHER:
---------------
L1R5 sums the grade points of the student's best 6 subjects. Points run
from 1 (A1) to 9 (F9), so LOWER is BETTER: 6 is a perfect score.
"""

import logging
import math
import re
from typing import List, Optional, Sequence

from ..config import (
    DEFAULT_GRADE_POINT,
    DEFAULT_PREDICTED_GRADE,
    DEFAULT_SIMULATION_THRESHOLDS,
    L1R5_SUBJECT_COUNT,
    NEW_SUBJECT_GRADE,
    NEW_SUBJECT_HOURS,
    SimulationThresholds,
)
from ..models import (
    DEFAULT_GRADE_SCALE,
    AcademicRecord,
    CCARecord,
    GradeScale,
    Priority,
    Recommendation,
    SimulationInput,
    SimulationResult,
    SimulationType,
    StudyHabits,
    SubjectPrediction,
    SubjectRecord,
    TargetGoal,
)

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ============================================================================
#  SHARED PRIMITIVES
# ============================================================================

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_grade_point(subjects: Sequence[SubjectRecord],
                        scale: GradeScale = DEFAULT_GRADE_SCALE) -> float:
    """
    Mean grade point across subjects.

    Ungraded subjects count as the mid-scale point (5). An empty list
    returns 5.0 rather than dividing by zero.
    """
    if not subjects:
        return float(DEFAULT_GRADE_POINT)
    total = sum(scale.point_or_default(s.grade_estimate) for s in subjects)
    return total / len(subjects)


def predict_grade_change(current_grade: Optional[str], hours_delta: float,
                         scale: GradeScale = DEFAULT_GRADE_SCALE,
                         thresholds: SimulationThresholds = DEFAULT_SIMULATION_THRESHOLDS) -> str:
    """
    Predict a grade after changing weekly study hours for that subject.

    STEP FUNCTION:
    --------------
        delta >  5   -> one grade better (never past A1)
        delta >  2   -> half a grade better, rounded half-up
        delta < -3   -> one grade worse (never past F9)
        otherwise    -> unchanged

    Rounding half-up means the half-grade step leaves whole-point grades
    where they are; only a full step moves them.

    Args:
        current_grade: Grade label, or None for an ungraded subject
        hours_delta: Change in weekly hours for this subject

    Returns:
        Predicted grade label. Unknown/missing grades predict "B4".
    """
    current_points = scale.point_of(current_grade)
    if current_points is None:
        return DEFAULT_PREDICTED_GRADE

    best = min(scale.points.values())
    worst = max(scale.points.values())

    adjusted = float(current_points)
    if hours_delta > thresholds.strong_increase_hours:
        adjusted = max(best, current_points - 1)
    elif hours_delta > thresholds.moderate_increase_hours:
        adjusted = max(best, current_points - 0.5)
    elif hours_delta < thresholds.decrease_hours:
        adjusted = min(worst, current_points + 1)

    return scale.label_of(round_half_up(adjusted)) or current_grade


def l1r5(subjects: Sequence[SubjectRecord], scale: GradeScale = DEFAULT_GRADE_SCALE,
         count: int = L1R5_SUBJECT_COUNT) -> int:
    """
    Sum of the best `count` grade points.

    Fewer subjects than `count` sums whatever is there; the list is never
    padded with imaginary subjects.
    """
    points = sorted(scale.point_or_default(s.grade_estimate) for s in subjects)
    return sum(points[:count])


def parse_target_score(required_score, default: int) -> int:
    """Leading integer of a cut-off string ("12", "12 pts"), else the default."""
    if required_score is None:
        return default
    match = _LEADING_INT_RE.match(str(required_score))
    if not match:
        return default
    return int(match.group(1))


# ============================================================================
#  SIMULATION ENGINE
# ============================================================================

class SimulationEngine:
    """
    Dispatches a SimulationInput to the matching sub-simulation.

    USAGE:
    ------
    engine = SimulationEngine(loader.grade_scale)
    result = engine.run(SimulationInput(
        simulation_type="o-level-prediction",
        current_subjects=snapshot.subjects,
        academic_history=snapshot.academic_history,
        study_habits=StudyHabits(hours_per_week=20),
    ))

    Unknown simulation types return SimulationResult.empty() instead of
    raising; callers treat that as "unsupported".
    """

    def __init__(self, scale: GradeScale = DEFAULT_GRADE_SCALE,
                 thresholds: SimulationThresholds = DEFAULT_SIMULATION_THRESHOLDS):
        self.scale = scale or DEFAULT_GRADE_SCALE
        self.thresholds = thresholds or DEFAULT_SIMULATION_THRESHOLDS

    def run(self, sim_input: SimulationInput) -> SimulationResult:
        sim_type = SimulationType.parse(sim_input.simulation_type)
        logger.debug("Running simulation %s", sim_input.simulation_type)

        if sim_type is SimulationType.O_LEVEL_PREDICTION:
            return self.simulate_o_level_prediction(
                sim_input.current_subjects, sim_input.academic_history, sim_input.study_habits
            )
        if sim_type is SimulationType.SUBJECT_CHANGE:
            return self.simulate_subject_change(sim_input.current_subjects, sim_input.study_habits)
        if sim_type is SimulationType.PATHWAY_ANALYSIS:
            return self.simulate_pathway_analysis(sim_input.current_subjects, sim_input.target_goal)
        if sim_type is SimulationType.LEAPS_IMPACT:
            return self.simulate_leaps_impact(sim_input.cca_records, sim_input.study_habits)

        logger.warning("Unsupported simulation type: %r", sim_input.simulation_type)
        return SimulationResult.empty()

    # ------------------------------------------------------------------
    # o-level-prediction
    # ------------------------------------------------------------------

    def simulate_o_level_prediction(self, current_subjects: List[SubjectRecord],
                                    academic_history: List[AcademicRecord],
                                    study_habits: Optional[StudyHabits] = None) -> SimulationResult:
        """
        Predict L1R5 after spreading a change in total study hours evenly
        across all subjects.

        Confidence starts at 75% and gains 2 points per academic record on
        file, up to 90%: more history means a better-grounded estimate.
        """
        t = self.thresholds
        current_l1r5 = l1r5(current_subjects, self.scale)

        current_total_hours = sum(s.study_hours_per_week for s in current_subjects)
        requested = study_habits.hours_per_week if study_habits else None
        new_total_hours = current_total_hours if requested is None else requested
        hours_change = new_total_hours - current_total_hours

        # Uniform per-subject delta; no subjects means nothing to spread
        per_subject_delta = hours_change / len(current_subjects) if current_subjects else 0

        predictions = []
        predicted_subjects = []
        for subject in current_subjects:
            predicted = predict_grade_change(
                subject.grade_estimate, per_subject_delta, self.scale, t
            )
            predictions.append(SubjectPrediction(
                subject=subject.subject_name,
                current=subject.grade_estimate or DEFAULT_PREDICTED_GRADE,
                predicted=predicted,
            ))
            predicted_subjects.append(SubjectRecord(
                subject_name=subject.subject_name,
                grade_estimate=predicted,
                study_hours_per_week=subject.study_hours_per_week,
            ))

        predicted_l1r5 = l1r5(predicted_subjects, self.scale)
        improvement = current_l1r5 - predicted_l1r5

        confidence = t.base_confidence + min(
            t.history_confidence_cap, len(academic_history) * t.history_confidence_step
        )

        recommendations = []
        if predicted_l1r5 > t.l1r5_focus_threshold:
            recommendations.append(Recommendation(
                type="Study Focus",
                message="Your predicted L1R5 indicates room for improvement. Focus on weaker subjects.",
                priority=Priority.HIGH,
            ))

        if hours_change < 0:
            recommendations.append(Recommendation(
                type="Study Hours",
                message="Reducing study hours may negatively impact your results. "
                        "Consider maintaining current effort.",
                priority=Priority.MEDIUM,
            ))

        weak = [
            p.subject for p in predictions
            if self.scale.point_or_default(p.predicted) > t.weak_grade_point
        ]
        recommendations.append(Recommendation(
            type="Subject Performance",
            message=f"Focus on {', '.join(weak)} for maximum L1R5 improvement.",
            priority=Priority.HIGH,
        ))

        return SimulationResult(
            predicted_outcomes={
                "current_l1r5": current_l1r5,
                "predicted_l1r5": predicted_l1r5,
                "improvement": improvement,
                "subject_predictions": predictions,
                "study_hours_change": hours_change,
            },
            confidence_score=confidence,
            recommendations=recommendations,
        )

    # ------------------------------------------------------------------
    # subject-change
    # ------------------------------------------------------------------

    def simulate_subject_change(self, current_subjects: List[SubjectRecord],
                                study_habits: Optional[StudyHabits] = None) -> SimulationResult:
        """
        Re-score L1R5 after applying subject additions/removals in order.

        Added subjects have no history, so they are assumed at B3 with
        3 study hours a week.
        """
        changes = study_habits.subject_changes if study_habits else []

        new_subjects = list(current_subjects)
        for change in changes:
            if change.remove:
                new_subjects = [s for s in new_subjects if s.subject_name != change.remove]
            if change.add:
                new_subjects.append(SubjectRecord(
                    subject_name=change.add,
                    grade_estimate=NEW_SUBJECT_GRADE,
                    study_hours_per_week=NEW_SUBJECT_HOURS,
                ))

        current_l1r5 = l1r5(current_subjects, self.scale)
        new_l1r5 = l1r5(new_subjects, self.scale)

        if new_l1r5 < current_l1r5:
            recommendation = Recommendation(
                type="Subject Change",
                message="This subject combination may improve your L1R5 score.",
                priority=Priority.HIGH,
            )
        else:
            recommendation = Recommendation(
                type="Subject Change",
                message="Consider your interest and aptitude, not just predicted scores.",
                priority=Priority.MEDIUM,
            )

        return SimulationResult(
            predicted_outcomes={
                "current_l1r5": current_l1r5,
                "predicted_l1r5_with_changes": new_l1r5,
                "difference": current_l1r5 - new_l1r5,
                "new_subject_list": [s.subject_name for s in new_subjects],
            },
            confidence_score=self.thresholds.subject_change_confidence,
            recommendations=[recommendation],
        )

    # ------------------------------------------------------------------
    # pathway-analysis
    # ------------------------------------------------------------------

    def simulate_pathway_analysis(self, current_subjects: List[SubjectRecord],
                                  target_goal: Optional[TargetGoal] = None) -> SimulationResult:
        """
        Compare current L1R5 with a target course's cut-off.

        PROBABILITY FORMULA:
        --------------------
            achievable (gap <= 6):  max(50, 100 - gap * 10)
            otherwise:              max(20, 50 - gap * 5)

        There is no upper clamp unless thresholds.probability_ceiling is
        set, so a student already under the cut-off can see values > 100.
        """
        t = self.thresholds
        current_l1r5 = l1r5(current_subjects, self.scale)
        required = target_goal.required_score if target_goal else None
        target_score = parse_target_score(required, t.default_target_score)

        gap = current_l1r5 - target_score
        achievable = gap <= t.achievable_gap

        institution = target_goal.institution if target_goal and target_goal.institution else "Not specified"
        course = target_goal.course if target_goal and target_goal.course else "Not specified"

        recommendations = []
        if achievable:
            recommendations.append(Recommendation(
                type="Pathway",
                message=f"Your goal of {institution} - {course} is achievable with focused effort.",
                priority=Priority.HIGH,
            ))
            if gap > 0:
                recommendations.append(Recommendation(
                    type="Action Plan",
                    message=f"Improve {math.ceil(gap)} subjects by one grade to reach your target.",
                    priority=Priority.HIGH,
                ))
            probability = max(50, 100 - gap * 10)
        else:
            recommendations.append(Recommendation(
                type="Alternative Pathway",
                message="Consider polytechnic pathways or alternative courses "
                        "that align with your current trajectory.",
                priority=Priority.HIGH,
            ))
            probability = max(20, 50 - gap * 5)

        if t.probability_ceiling is not None:
            probability = min(t.probability_ceiling, probability)

        return SimulationResult(
            predicted_outcomes={
                "current_l1r5": current_l1r5,
                "target_score": target_score,
                "gap": gap,
                "achievable": achievable,
                "target_institution": institution,
                "probability": probability,
            },
            confidence_score=t.pathway_confidence,
            recommendations=recommendations,
        )

    # ------------------------------------------------------------------
    # leaps-impact
    # ------------------------------------------------------------------

    def simulate_leaps_impact(self, cca_records: List[CCARecord],
                              study_habits: Optional[StudyHabits] = None) -> SimulationResult:
        """Project LEAPS 2.0 points from CCA records plus weekly VIA hours."""
        current_points = sum(cca.leaps_points or 0 for cca in cca_records)

        via_hours = (study_habits.hours_per_week if study_habits else None) or 0
        additional = min(via_hours, self.thresholds.max_leaps_bonus)

        recommendations = [
            Recommendation(
                type="LEAPS 2.0",
                message=f"Current LEAPS points: {current_points}. "
                        f"VIA projects can add up to 3 bonus points.",
                priority=Priority.MEDIUM,
            ),
            Recommendation(
                type="Leadership",
                message="Taking leadership roles in CCA or VIA projects significantly "
                        "boosts your LEAPS profile.",
                priority=Priority.HIGH,
            ),
        ]

        return SimulationResult(
            predicted_outcomes={
                "current_leaps_points": current_points,
                "potential_additional_points": additional,
                "projected_total": current_points + additional,
                "via_impact": additional,
            },
            confidence_score=self.thresholds.leaps_confidence,
            recommendations=recommendations,
        )


def run_simulation(sim_input: SimulationInput, scale: GradeScale = DEFAULT_GRADE_SCALE,
                   thresholds: SimulationThresholds = DEFAULT_SIMULATION_THRESHOLDS) -> SimulationResult:
    """Convenience wrapper: one-shot SimulationEngine(scale, thresholds).run(input)."""
    return SimulationEngine(scale, thresholds).run(sim_input)
