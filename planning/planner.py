"""
Student Planner - Main Orchestrator.

This module contains the StudentPlanner class that connects the
algorithm layer to the presentation layer.

NOTE: Don't run this file directly. Run from the project root:
    python3 -m planning
"""

import json
import logging
from typing import List, Optional

from .config import (
    DEFAULT_MATCHER_THRESHOLDS,
    DEFAULT_SIMULATION_THRESHOLDS,
    SECONDARY_EXAM_TYPE,
    MatcherThresholds,
    SimulationThresholds,
)
from .data import RecordStoreClient, ReferenceDataLoader, SnapshotParser
from .engines import CareerPredictionEngine, CourseMatcher, RoadmapEngine, SimulationEngine
from .models import (
    CareerMatch,
    PathwayRecommendations,
    RoadmapStep,
    SimulationInput,
    SimulationResult,
    SimulationType,
    StudentSnapshot,
    StudyHabits,
    TargetGoal,
)
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)

SIMULATION_TITLES = {
    SimulationType.O_LEVEL_PREDICTION: "O-Level Prediction",
    SimulationType.SUBJECT_CHANGE: "Subject Change",
    SimulationType.PATHWAY_ANALYSIS: "Pathway Analysis",
    SimulationType.LEAPS_IMPACT: "LEAPS 2.0 Impact",
}


class StudentPlanner:
    """
    Main interface for the student planning system.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    This class connects the Algorithm layer to the Presentation layer:

    1. Receives a student snapshot (file or record store)
    2. Calls engine methods to get results (pure data)
    3. Passes that data to the display, and optionally back to the store

    Every method returns its result, so a caller that wants data only can
    pass display=False.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        planner = StudentPlanner()
        snapshot = planner.load_snapshot("snapshot.json")

        planner.run_simulation(snapshot, "o-level-prediction", StudyHabits(hours_per_week=20))
        planner.recommend_courses(snapshot)
        planner.show_roadmap(snapshot)
    """

    def __init__(self, loader: Optional[ReferenceDataLoader] = None,
                 record_store: Optional[RecordStoreClient] = None,
                 simulation_thresholds: SimulationThresholds = DEFAULT_SIMULATION_THRESHOLDS,
                 matcher_thresholds: MatcherThresholds = DEFAULT_MATCHER_THRESHOLDS):
        self.loader = loader or ReferenceDataLoader()
        self.parser = SnapshotParser()
        self._record_store = record_store

        scale = self.loader.grade_scale
        self.simulation_engine = SimulationEngine(scale, simulation_thresholds)
        self.matcher = CourseMatcher(matcher_thresholds, scale)
        self.career_engine = CareerPredictionEngine(self.loader.career_paths, scale)
        self.roadmap_engine = RoadmapEngine()

        self.display = TerminalDisplay()

    @property
    def record_store(self) -> RecordStoreClient:
        """Client built from the environment on first use."""
        if self._record_store is None:
            self._record_store = RecordStoreClient()
        return self._record_store

    # =========================================================================
    # SNAPSHOTS
    # =========================================================================

    def load_snapshot(self, path) -> StudentSnapshot:
        """
        Load and parse a snapshot JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not valid JSON or a row is malformed
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Snapshot {path} is not valid JSON: {e}") from e
        logger.debug("Loaded snapshot from %s", path)
        return self.parser.parse(data)

    def fetch_snapshot(self, student_id: str) -> StudentSnapshot:
        return self.parser.parse(self.record_store.fetch_snapshot(student_id))

    @staticmethod
    def taken_subjects(snapshot: StudentSnapshot) -> List[str]:
        """Enrolled subjects followed by any other subject on record."""
        names = [s.subject_name for s in snapshot.subjects]
        for name in snapshot.subject_names:
            if name not in names:
                names.append(name)
        return names

    @staticmethod
    def is_ite_to_poly(snapshot: StudentSnapshot) -> bool:
        """Profile flag, or an ITE course kept on the pathway row."""
        pathway = snapshot.pathway
        return bool(snapshot.student.get("ite_to_poly")) or bool(pathway and pathway.is_ite_to_poly)

    def default_target(self, snapshot: StudentSnapshot) -> Optional[TargetGoal]:
        """The active goal as a simulation target, with the pathway's course."""
        goal = snapshot.active_goal()
        if goal is None:
            return None
        course = snapshot.pathway.course_name if snapshot.pathway and snapshot.pathway.course_name else ""
        return goal.as_target(course=course)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def run_simulation(self, snapshot: StudentSnapshot, simulation_type,
                       study_habits: Optional[StudyHabits] = None,
                       target_goal: Optional[TargetGoal] = None,
                       display: bool = True) -> SimulationResult:
        """
        Run one what-if simulation over the snapshot.

        Args:
            simulation_type: SimulationType or its string value
            study_habits: Hypothetical hours / subject changes
            target_goal: Cut-off to compare against; defaults to the
                student's active goal

        Returns:
            SimulationResult (empty for an unsupported type)
        """
        if target_goal is None:
            target_goal = self.default_target(snapshot)

        sim_input = SimulationInput(
            simulation_type=simulation_type.value if isinstance(simulation_type, SimulationType)
            else simulation_type,
            current_subjects=snapshot.subjects,
            academic_history=snapshot.academic_history,
            cca_records=snapshot.cca_records,
            study_habits=study_habits,
            target_goal=target_goal,
        )
        result = self.simulation_engine.run(sim_input)

        if display:
            sim_type = SimulationType.parse(simulation_type)
            title = SIMULATION_TITLES.get(sim_type, str(simulation_type))
            self.display.print_simulation(title, result)
        return result

    def recommend_courses(self, snapshot: StudentSnapshot, display: bool = True) -> PathwayRecommendations:
        """
        Grade-gated polytechnic/ITE recommendations from academic records.

        Only secondary school results count toward the average, unless the
        student is on the ITE -> Poly route, where ITE results count too.
        """
        records = snapshot.academic_history
        if not self.is_ite_to_poly(snapshot):
            records = [r for r in records if r.exam_type == SECONDARY_EXAM_TYPE]
        subject_grades = [(r.subject_name, r.grade) for r in records]
        recs = self.matcher.recommend_pathways(
            self.loader.poly_courses, self.loader.ite_courses, subject_grades
        )
        if display:
            self.display.print_pathway_recommendations(recs)
        return recs

    def browse_courses(self, snapshot: StudentSnapshot, display: bool = True) -> PathwayRecommendations:
        """Every course the student's subjects overlap with."""
        recs = self.matcher.browse(
            self.loader.poly_courses, self.loader.ite_courses, self.taken_subjects(snapshot)
        )
        if display:
            self.display.print_browse_results(recs)
        return recs

    def predict_careers(self, snapshot: StudentSnapshot, display: bool = True) -> List[CareerMatch]:
        course_names = snapshot.pathway.course_names if snapshot.pathway else []
        careers = self.career_engine.predict(course_names, snapshot.academic_history)
        if display:
            self.display.print_careers(careers)
        return careers

    def show_roadmap(self, snapshot: StudentSnapshot, display: bool = True) -> List[RoadmapStep]:
        """
        Roadmap for the student's route.

        IP status comes from the profile flag when present, otherwise from
        the school name. ITE -> Poly comes from the profile flag or from an
        ITE course on the pathway row.
        """
        student = snapshot.student
        pathway = snapshot.pathway

        is_ip = student.get("is_ip_school")
        if is_ip is None:
            is_ip = self.loader.is_ip_school(student.get("school_name", ""))

        ite_to_poly = self.is_ite_to_poly(snapshot)

        steps = self.roadmap_engine.generate_steps(
            snapshot.current_level,
            pathway.pathway_type if pathway else None,
            is_ip_school=bool(is_ip),
            ite_to_poly=ite_to_poly,
        )
        if display:
            self.display.print_roadmap(steps)
        return steps

    def save_simulation(self, student_id: str, simulation_type, result: SimulationResult,
                        scenario_description: str = "",
                        input_parameters: Optional[dict] = None) -> dict:
        """Persist a simulation result to the record store's history."""
        if isinstance(simulation_type, SimulationType):
            simulation_type = simulation_type.value
        record = result.to_record(student_id, simulation_type, scenario_description, input_parameters)
        return self.record_store.save_simulation(record)
