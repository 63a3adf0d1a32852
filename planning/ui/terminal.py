"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the planning package.

To create a different UI (web, PDF, etc.), create a new class with
the same method signatures but different output handling.
"""

from typing import List

from ..models import (
    CareerMatch,
    MatchResult,
    PathwayRecommendations,
    Priority,
    RoadmapStep,
    SimulationResult,
    StudentSnapshot,
    SubjectPrediction,
)


class TerminalDisplay:
    """
    Pretty terminal output for simulations, course matches and roadmaps.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures.
       Instead of print(), return HTML or render templates.

    2. FOR API RESPONSE:
       SimulationResult.to_dict() is already JSON-ready; the other results
       are plain dataclasses.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_RED = "\033[41m"

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def print_error(cls, message: str):
        print(f"\n  {cls.RED}Error: {message}{cls.RESET}")

    @classmethod
    def priority_badge(cls, priority: Priority) -> str:
        """Return a colored priority badge."""
        if priority is Priority.HIGH:
            return f"{cls.BG_RED}{cls.WHITE} HIGH {cls.RESET}"
        elif priority is Priority.MEDIUM:
            return f"{cls.BG_YELLOW}{cls.WHITE} MEDIUM {cls.RESET}"
        else:
            return f"{cls.BG_GREEN}{cls.WHITE} LOW {cls.RESET}"

    @classmethod
    def _score_color(cls, percent: float) -> str:
        if percent >= 75:
            return cls.GREEN
        elif percent >= 50:
            return cls.YELLOW
        return cls.RED

    # =========================================================================
    # STUDENT
    # =========================================================================

    @classmethod
    def print_student_info(cls, snapshot: StudentSnapshot):
        """Print student identification information."""
        student = snapshot.student
        cls.print_header("STUDENT INFORMATION")
        print(f"  {cls.BOLD}Name:{cls.RESET} {student.get('full_name', 'Unknown')}")
        print(f"  {cls.BOLD}School:{cls.RESET} {student.get('school_name', 'Unknown')}")
        print(f"  {cls.BOLD}Level:{cls.RESET} {snapshot.current_level or 'Unknown'}")
        if snapshot.pathway and snapshot.pathway.pathway_type:
            course = snapshot.pathway.course_name or "undecided"
            print(f"  {cls.BOLD}Pathway:{cls.RESET} {snapshot.pathway.pathway_type} ({course})")

        if snapshot.subjects:
            cls.print_subheader("Current Subjects")
            print(f"\n  {cls.BOLD}{'SUBJECT':<40} {'GRADE':<8} {'HOURS/WK'}{cls.RESET}")
            print(f"  {cls.DIM}{'-' * 58}{cls.RESET}")
            for subject in snapshot.subjects:
                grade = subject.grade_estimate or f"{cls.DIM}--{cls.RESET}"
                print(f"  {subject.subject_name:<40} {grade:<8} {subject.study_hours_per_week}")

    # =========================================================================
    # SIMULATIONS
    # =========================================================================

    @classmethod
    def print_simulation(cls, title: str, result: SimulationResult):
        """Print a simulation result: outcomes, confidence and advice."""
        cls.print_header(f"SIMULATION: {title.upper()}")

        if result.is_empty:
            print(f"\n  {cls.YELLOW}This simulation type is not supported.{cls.RESET}")
            return

        print(f"\n  {cls.BOLD}Confidence:{cls.RESET} {result.confidence_score}%")

        cls.print_subheader("Predicted Outcomes")
        predictions = None
        for key, value in result.predicted_outcomes.items():
            if key == "subject_predictions":
                predictions = value
                continue
            label = key.replace("_", " ").title()
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value) or "(none)"
            elif isinstance(value, bool):
                value = f"{cls.GREEN}Yes{cls.RESET}" if value else f"{cls.RED}No{cls.RESET}"
            print(f"  {cls.BOLD}{label + ':':<30}{cls.RESET} {value}")

        if predictions:
            cls._print_subject_predictions(predictions)

        cls.print_recommendations(result.recommendations)

    @classmethod
    def _print_subject_predictions(cls, predictions: List[SubjectPrediction]):
        cls.print_subheader("Subject Predictions")
        print(f"\n  {cls.BOLD}{'SUBJECT':<40} {'NOW':<6} {'PREDICTED'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 58}{cls.RESET}")
        for row in predictions:
            if row.predicted == row.current:
                predicted = row.predicted
            else:
                predicted = f"{cls.GREEN}{row.predicted}{cls.RESET}"
            print(f"  {row.subject:<40} {row.current:<6} {predicted}")

    @classmethod
    def print_recommendations(cls, recommendations: list):
        if not recommendations:
            return
        cls.print_subheader("Recommendations")
        for rec in recommendations:
            print(f"\n  {cls.priority_badge(rec.priority)} {cls.BOLD}{rec.type}{cls.RESET}")
            print(f"    {rec.message}")

    # =========================================================================
    # COURSES
    # =========================================================================

    @classmethod
    def print_course_matches(cls, title: str, matches: List[MatchResult], show_missing: bool = True):
        """Print ranked course matches with their subject coverage."""
        cls.print_subheader(f"{title} ({len(matches)})")
        if not matches:
            print(f"  {cls.DIM}No matching courses.{cls.RESET}")
            return

        for rank, result in enumerate(matches, 1):
            course = result.course
            color = cls._score_color(result.score_percent)
            code = f"{cls.DIM}[{course.code}]{cls.RESET} " if course.code else ""
            tags = f" {cls.DIM}({', '.join(course.institution_tags)}){cls.RESET}" if course.institution_tags else ""
            print(f"\n  {cls.BOLD}#{rank}{cls.RESET} {code}{cls.BOLD}{course.name}{cls.RESET}{tags}")
            print(f"     {color}{result.score_percent:.0f}% match{cls.RESET} {cls.DIM}- {course.category}{cls.RESET}")

            matching = result.ordered_matching()
            if matching:
                print(f"     {cls.GREEN}✓ {', '.join(matching)}{cls.RESET}")
            missing = result.ordered_missing()
            if show_missing and missing:
                print(f"     {cls.RED}✗ {', '.join(missing)}{cls.RESET}")

    @classmethod
    def print_pathway_recommendations(cls, recs: PathwayRecommendations):
        """Print the gated polytechnic/ITE recommendations."""
        cls.print_header("PATHWAY RECOMMENDATIONS")
        print(f"\n  {cls.BOLD}Average grade point:{cls.RESET} {recs.average_grade_point:.2f}")

        if recs.poly_eligible:
            cls.print_course_matches("Polytechnic Diplomas", recs.poly)
        else:
            print(f"  {cls.DIM}Polytechnic courses hidden: average grade point above the gate.{cls.RESET}")

        if recs.ite_eligible:
            cls.print_course_matches("ITE Courses", recs.ite)
        else:
            print(f"  {cls.DIM}ITE courses hidden: average grade point below the gate.{cls.RESET}")

    @classmethod
    def print_browse_results(cls, recs: PathwayRecommendations):
        cls.print_header("COURSES YOUR SUBJECTS LEAD TO")
        cls.print_course_matches("Polytechnic Diplomas", recs.poly, show_missing=False)
        cls.print_course_matches("ITE Courses", recs.ite, show_missing=False)

    # =========================================================================
    # CAREERS
    # =========================================================================

    @classmethod
    def print_careers(cls, careers: List[CareerMatch]):
        cls.print_header("CAREER PREDICTIONS")
        if not careers:
            print(f"\n  {cls.DIM}No career predictions available.{cls.RESET}")
            return

        if careers[0].source == "heuristic":
            print(f"\n  {cls.DIM}Based on your subject performance.{cls.RESET}")

        for rank, career in enumerate(careers, 1):
            color = cls._score_color(career.match)
            print(f"\n  {cls.BOLD}#{rank} {cls.MAGENTA}{career.title}{cls.RESET}  {color}{career.match}% match{cls.RESET}")
            print(f"     {career.description}")
            if career.salary:
                print(f"     {cls.DIM}Salary:{cls.RESET} {career.salary}")
            if career.skills:
                print(f"     {cls.DIM}Skills:{cls.RESET} {', '.join(career.skills)}")

    # =========================================================================
    # ROADMAP
    # =========================================================================

    @classmethod
    def print_roadmap(cls, steps: List[RoadmapStep]):
        """Print the education roadmap as a vertical timeline."""
        cls.print_header("EDUCATION ROADMAP")
        print()
        for index, step in enumerate(steps):
            if step.completed:
                marker = f"{cls.GREEN}✓{cls.RESET}"
                title = f"{cls.DIM}{step.title}{cls.RESET}"
            elif step.current:
                marker = f"{cls.CYAN}●{cls.RESET}"
                title = f"{cls.BOLD}{cls.CYAN}{step.title}{cls.RESET} {cls.DIM}(you are here){cls.RESET}"
            elif step.is_pathway_choice:
                marker = f"{cls.YELLOW}◆{cls.RESET}"
                title = f"{cls.YELLOW}{step.title}{cls.RESET}"
            else:
                marker = f"{cls.DIM}○{cls.RESET}"
                title = step.title
            print(f"  {marker} {title}")
            if index < len(steps) - 1:
                print(f"  {cls.DIM}│{cls.RESET}")
        print()
