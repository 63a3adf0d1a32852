"""
Roadmap Engine.

Builds the ordered list of education stages a student moves through, from
Secondary 1 to career discovery, and marks where they are now.

ROUTES:
-------
IP school:   Sec 1-4 -> JC 1-2 -> Career   (no O-Levels, no pathway choice)
JC:          Sec 1-4 -> Choose Path -> JC 1-2 -> Career
Polytechnic: Sec 1-4 -> Choose Path -> Poly 1-3 -> Career
ITE:         Sec 1-4 -> Choose Path -> ITE 1-2 -> Career
ITE -> Poly: Sec 1-4 -> Choose Path -> ITE 1-2 -> Choose Poly Course
             -> Poly 1-3 -> Career
"""

from typing import List, Optional

from ..models import RoadmapStep

SECONDARY_STEPS = [
    ("s1", "Secondary 1", "Secondary 1"),
    ("s2", "Secondary 2", "Secondary 2"),
    ("s3", "Secondary 3", "Secondary 3"),
    ("s4", "Secondary 4", "Secondary 4"),
]
JC_STEPS = [
    ("jc1", "JC Year 1", "JC 1"),
    ("jc2", "JC Year 2", "JC 2"),
]
POLY_STEPS = [
    ("poly1", "Polytechnic Year 1", "Polytechnic Year 1"),
    ("poly2", "Polytechnic Year 2", "Polytechnic Year 2"),
    ("poly3", "Polytechnic Year 3", "Polytechnic Year 3"),
]
ITE_STEPS = [
    ("ite1", "ITE Year 1", "ITE Year 1"),
    ("ite2", "ITE Year 2", "ITE Year 2"),
]
CAREER_STEP = ("career", "Career Discovery", "Career")


def _steps(rows) -> List[RoadmapStep]:
    return [RoadmapStep(id=i, title=title, level=level) for i, title, level in rows]


class RoadmapEngine:
    """Generates roadmap steps and works out level transitions."""

    def generate_steps(self, current_level: str, pathway_type: Optional[str],
                       is_ip_school: bool = False, ite_to_poly: bool = False) -> List[RoadmapStep]:
        """
        Steps for the student's route, flagged completed/current.

        Steps before the one matching current_level are completed; an
        unrecognized level leaves every step open.
        """
        if is_ip_school:
            steps = _steps(SECONDARY_STEPS + JC_STEPS + [CAREER_STEP])
            return self._mark_progress(steps, current_level)

        steps = _steps(SECONDARY_STEPS)
        steps.append(RoadmapStep(
            id="pathway", title="Choose Your Path", level="Pathway Choice", is_pathway_choice=True
        ))

        if pathway_type == "JC":
            steps += _steps(JC_STEPS)
        elif pathway_type == "Polytechnic" and not ite_to_poly:
            steps += _steps(POLY_STEPS)
        elif pathway_type == "ITE" or (pathway_type == "Polytechnic" and ite_to_poly):
            steps += _steps(ITE_STEPS)
            if ite_to_poly:
                steps.append(RoadmapStep(
                    id="poly-pathway", title="Choose Poly Course",
                    level="Poly Pathway Choice", is_pathway_choice=True,
                ))
                steps += _steps(POLY_STEPS)

        steps += _steps([CAREER_STEP])
        return self._mark_progress(steps, current_level)

    @staticmethod
    def _mark_progress(steps: List[RoadmapStep], current_level: str) -> List[RoadmapStep]:
        current_index = next(
            (i for i, step in enumerate(steps) if step.level == current_level), -1
        )
        for index, step in enumerate(steps):
            step.completed = index < current_index
            step.current = index == current_index
        return steps

    @staticmethod
    def next_level(steps: List[RoadmapStep], step_id: str) -> Optional[str]:
        """Level the student moves to when step_id is marked complete."""
        for index, step in enumerate(steps):
            if step.id == step_id:
                if index + 1 < len(steps):
                    return steps[index + 1].level
                return None
        return None

    @staticmethod
    def previous_level(steps: List[RoadmapStep], step_id: str) -> Optional[str]:
        """Level the student returns to when step_id is un-completed."""
        for index, step in enumerate(steps):
            if step.id == step_id:
                if index > 0:
                    return steps[index - 1].level
                return None
        return None
