"""
Reference data loading and caching.

This module handles loading the static reference tables with caching so a
long-running process reads each file once.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..config import REFERENCE_DIR
from ..models import CareerPath, CourseRequirement, GradeScale

logger = logging.getLogger(__name__)


class ReferenceDataLoader:
    """
    Loads and caches the reference tables the engines depend on.

    WHY LAZY LOADING: Properties only load files when first accessed, so a
    simulation-only run never parses the course tables.

    WHY NOT GLOBALS: Engines receive these tables through their
    constructors. Tests can hand them fixture tables, and a deployment can
    point the loader at a different directory.

    DATA SOURCES (reference/):
    - grade_scale.json: A1..F9 points and percent equivalents
    - poly_courses.json: Polytechnic diplomas and required subjects
    - ite_courses.json: ITE courses and required subjects
    - career_predictions.json: Course -> jobs (salary, demand, growth)
    - institutions.json: Polytechnic codes, JC/ITE lists, IP schools

    Usage:
        loader = ReferenceDataLoader()
        matcher.rank(loader.poly_courses, ["Mathematics", "Physics"])
    """

    def __init__(self, reference_dir: Optional[Path] = None):
        self.reference_dir = Path(reference_dir) if reference_dir else REFERENCE_DIR
        # Private cache variables - None means "not loaded yet"
        self._grade_scale = None
        self._poly_courses = None
        self._ite_courses = None
        self._career_paths = None
        self._institutions = None

    def _load_json(self, filename: str):
        filepath = self.reference_dir / filename
        if not filepath.exists():
            raise FileNotFoundError(f"Reference table not found: {filepath}")
        logger.debug("Loading reference table %s", filepath)
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    @property
    def grade_scale(self) -> GradeScale:
        if self._grade_scale is None:
            self._grade_scale = GradeScale.from_dict(self._load_json("grade_scale.json"))
        return self._grade_scale

    @property
    def poly_courses(self) -> List[CourseRequirement]:
        """
        Polytechnic diplomas in table order.

        Table order matters: the matcher keeps it for equally scored
        courses, so reordering the file reorders tied results.
        """
        if self._poly_courses is None:
            self._poly_courses = [
                CourseRequirement.from_dict(c) for c in self._load_json("poly_courses.json")
            ]
        return self._poly_courses

    @property
    def ite_courses(self) -> List[CourseRequirement]:
        if self._ite_courses is None:
            self._ite_courses = [
                CourseRequirement.from_dict(c) for c in self._load_json("ite_courses.json")
            ]
        return self._ite_courses

    @property
    def career_paths(self) -> List[CareerPath]:
        if self._career_paths is None:
            self._career_paths = [
                CareerPath.from_dict(c) for c in self._load_json("career_predictions.json")
            ]
        return self._career_paths

    @property
    def institutions(self) -> dict:
        if self._institutions is None:
            self._institutions = self._load_json("institutions.json")
        return self._institutions

    def polytechnic_name(self, tag: str) -> str:
        """Full polytechnic name for a short tag ("SP"), or the tag itself."""
        return self.institutions.get("polytechnics", {}).get(tag, tag)

    def is_ip_school(self, school_name: str) -> bool:
        """True for Integrated Programme schools (students skip O-Levels)."""
        return school_name in self.institutions.get("ip_schools", [])

