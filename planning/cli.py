"""
Command-Line Interface for the Planning System.

This module provides the CLI for the planning engines. It handles user
input and orchestrates the display of results.

MODES:
------
simulate-olevel  Predict L1R5 after a change in weekly study hours
subject-change   Re-score L1R5 after adding/removing subjects
pathway          Gap between current L1R5 and a target cut-off
leaps            Project LEAPS 2.0 points from VIA hours
courses          Grade-gated polytechnic/ITE recommendations
browse           Every course the student's subjects overlap with
careers          Careers from the chosen course or subject performance
roadmap          Education roadmap from Secondary 1 to career

Without --mode an interactive menu is shown.

NOTE: Don't run this file directly. Run from the project root:
    python3 -m planning --snapshot path/to/snapshot.json
"""

import argparse
import logging
import sys

from .config import EXAMPLE_SNAPSHOT, LOG_LEVEL
from .data import RecordStoreError
from .models import SimulationType, StudyHabits, SubjectChange, TargetGoal
from .planner import StudentPlanner
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)

SIMULATION_MODES = {
    "simulate-olevel": SimulationType.O_LEVEL_PREDICTION,
    "subject-change": SimulationType.SUBJECT_CHANGE,
    "pathway": SimulationType.PATHWAY_ANALYSIS,
    "leaps": SimulationType.LEAPS_IMPACT,
}
MODES = list(SIMULATION_MODES) + ["courses", "browse", "careers", "roadmap"]

MENU = [
    ("1", "simulate-olevel", "🎯 O-LEVEL PREDICTION - What if I study more?"),
    ("2", "subject-change", "🔄 SUBJECT CHANGE    - What if I switch subjects?"),
    ("3", "pathway", "🛣  PATHWAY ANALYSIS  - How far am I from my goal?"),
    ("4", "leaps", "🏅 LEAPS 2.0         - Project my CCA points"),
    ("5", "courses", "🏫 COURSES           - Poly/ITE courses for me"),
    ("6", "browse", "🔎 BROWSE            - Everything my subjects lead to"),
    ("7", "careers", "💼 CAREERS           - Where could I end up?"),
    ("8", "roadmap", "🗺  ROADMAP           - My education journey"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planner",
        description="Student pathway planner: grade simulations, course matching and roadmaps",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--snapshot", help="Path to a student snapshot JSON file")
    source.add_argument("--student-id", help="Fetch the snapshot from the record store")

    parser.add_argument("--mode", choices=MODES, help="Operation to run (default: interactive menu)")
    parser.add_argument("--hours", type=float,
                        help="Total weekly study hours (simulate-olevel) or weekly VIA hours (leaps)")
    parser.add_argument("--add", action="append", default=[], metavar="SUBJ",
                        help="Subject to add (subject-change, repeatable)")
    parser.add_argument("--remove", action="append", default=[], metavar="SUBJ",
                        help="Subject to remove (subject-change, repeatable)")
    parser.add_argument("--target-score", help="L1R5 cut-off for pathway analysis")
    parser.add_argument("--target-institution", default="", help="Institution for pathway analysis")
    parser.add_argument("--target-course", default="", help="Course for pathway analysis")
    parser.add_argument("--save", action="store_true",
                        help="Save simulation results to the record store (needs --student-id)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _study_habits(args) -> StudyHabits:
    changes = [SubjectChange(remove=name) for name in args.remove]
    changes += [SubjectChange(add=name) for name in args.add]
    return StudyHabits(hours_per_week=args.hours, subject_changes=changes)


def _target_goal(args):
    if args.target_score is None and not args.target_institution and not args.target_course:
        return None
    return TargetGoal(
        institution=args.target_institution,
        course=args.target_course,
        required_score=args.target_score,
    )


def run_mode(planner: StudentPlanner, snapshot, mode: str, args):
    """
    Run one mode against a snapshot.

    Returns:
        The mode's result object (SimulationResult, PathwayRecommendations,
        list of CareerMatch or list of RoadmapStep)
    """
    if mode in SIMULATION_MODES:
        sim_type = SIMULATION_MODES[mode]
        habits = _study_habits(args)
        result = planner.run_simulation(snapshot, sim_type, habits, _target_goal(args))
        if args.save:
            if not args.student_id:
                print(f"\n  {TerminalDisplay.YELLOW}--save needs --student-id; result not saved.{TerminalDisplay.RESET}")
            else:
                planner.save_simulation(
                    args.student_id, sim_type, result,
                    scenario_description=f"CLI {mode}",
                    input_parameters={
                        "hours_per_week": habits.hours_per_week,
                        "add": args.add,
                        "remove": args.remove,
                        "target_score": args.target_score,
                    },
                )
                print(f"\n  {TerminalDisplay.GREEN}✓ Simulation saved.{TerminalDisplay.RESET}")
        return result

    if mode == "courses":
        return planner.recommend_courses(snapshot)
    if mode == "browse":
        return planner.browse_courses(snapshot)
    if mode == "careers":
        return planner.predict_careers(snapshot)
    if mode == "roadmap":
        return planner.show_roadmap(snapshot)
    raise ValueError(f"Unknown mode: {mode}")


def _interactive(planner: StudentPlanner, snapshot, args):
    """Menu loop; each pick runs one mode with prompted inputs."""
    planner.display.print_student_info(snapshot)

    print(f"\n{TerminalDisplay.BOLD}{TerminalDisplay.CYAN}")
    print("╔══════════════════════════════════════════════════════════════════╗")
    print("║         STUDENT PATHWAY PLANNER                                  ║")
    print("╠══════════════════════════════════════════════════════════════════╣")
    for key, _, label in MENU:
        print(f"║  {key}. {label}")
    print("║  q. Quit")
    print("╚══════════════════════════════════════════════════════════════════╝")
    print(f"{TerminalDisplay.RESET}")

    modes = {key: mode for key, mode, _ in MENU}
    while True:
        try:
            choice = input(f"{TerminalDisplay.BOLD}Select (1-8, q): {TerminalDisplay.RESET}").strip().lower()
        except EOFError:
            return
        if choice in ("q", "quit", ""):
            return
        mode = modes.get(choice)
        if mode is None:
            print(f"  {TerminalDisplay.YELLOW}Unknown choice: {choice}{TerminalDisplay.RESET}")
            continue

        # Prompted answers belong to this pick only; command-line values skip the prompt
        pick = argparse.Namespace(**vars(args))
        try:
            if mode in ("simulate-olevel", "leaps") and args.hours is None:
                prompt = "  Total weekly study hours: " if mode == "simulate-olevel" else "  Weekly VIA hours: "
                raw = input(prompt).strip()
                pick.hours = float(raw) if raw else None
            elif mode == "subject-change" and not (args.add or args.remove):
                remove = input("  Subject to drop (Enter for none): ").strip()
                add = input("  Subject to add (Enter for none): ").strip()
                pick.remove = [remove] if remove else []
                pick.add = [add] if add else []
            elif mode == "pathway" and args.target_score is None:
                raw = input("  Target L1R5 cut-off (Enter for your goal): ").strip()
                pick.target_score = raw or None
        except ValueError:
            print(f"  {TerminalDisplay.YELLOW}Invalid number, keeping current hours.{TerminalDisplay.RESET}")
            pick.hours = None
        except EOFError:
            return

        run_mode(planner, snapshot, mode, pick)


def main(argv=None) -> int:
    """
    Command-line interface for the planning engines.

    Returns:
        Process exit status (0 on success, 1 on a data or record store error)
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        planner = StudentPlanner()
        if args.student_id:
            snapshot = planner.fetch_snapshot(args.student_id)
        else:
            snapshot = planner.load_snapshot(args.snapshot or EXAMPLE_SNAPSHOT)

        if args.mode:
            run_mode(planner, snapshot, args.mode, args)
        else:
            _interactive(planner, snapshot, args)
    except (FileNotFoundError, ValueError, RecordStoreError) as e:
        logger.debug("Planner failed", exc_info=True)
        TerminalDisplay.print_error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
