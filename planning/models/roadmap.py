"""
Roadmap step model.
"""

from dataclasses import dataclass


@dataclass
class RoadmapStep:
    """
    One stage on the student's education roadmap.

    level matches the student's current_level values ("Secondary 3",
    "Polytechnic Year 1", ...). Pathway-choice steps are decision points
    rather than years of study.
    """
    id: str
    title: str
    level: str
    completed: bool = False
    current: bool = False
    is_pathway_choice: bool = False
