"""
Snapshot parsing.

This module turns a raw record-store snapshot into typed records the
engines can work with.
"""

import logging
import math
from typing import Optional

from ..models import (
    AcademicRecord,
    CCARecord,
    Goal,
    Pathway,
    StudentSnapshot,
    SubjectRecord,
)

logger = logging.getLogger(__name__)


def _as_number(value, default=0, field_name: str = ""):
    """
    Coerce a stored number. Integral values come back as int so point
    totals print as "5", not "5.0". NaN and infinities fall back to the
    default like any other non-numeric value.
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = None
    if number is None or not math.isfinite(number):
        logger.warning("Non-numeric %s %r, using %r", field_name or "value", value, default)
        return default
    return int(number) if number.is_integer() else number


def _as_optional_int(value, field_name: str = "") -> Optional[int]:
    if value is None or value == "":
        return None
    number = _as_number(value, None, field_name)
    return None if number is None else int(number)


def _require_mapping(row, table: str) -> dict:
    if not isinstance(row, dict):
        raise ValueError(f"{table} row must be an object, got {type(row).__name__}")
    return row


def _require_subject(row: dict, table: str) -> str:
    name = row.get("subject_name")
    if not name:
        raise ValueError(f"{table} row is missing subject_name: {row!r}")
    return name


class SnapshotParser:
    """
    Parses a student snapshot as read from the record store.

    KEY RESPONSIBILITY: Convert raw rows (keyed by the store's column names)
    into SubjectRecord, AcademicRecord, CCARecord, Goal and Pathway objects.

    SNAPSHOT SHAPE:
        {
            "student": {"full_name", "current_level", "school_name", ...},
            "subject_enrollments": [...],
            "academic_records": [...],
            "cca_records": [...],
            "goals": [...],
            "student_pathway": {...} or null
        }

    ENROLLMENT FILTERING:
    Inactive enrollments (is_active = false) are dropped; the simulator
    only ever sees subjects the student is taking now.

    Unknown keys are ignored. A row without a subject name is an error,
    since nothing downstream can use it.
    """

    def parse(self, snapshot: dict) -> StudentSnapshot:
        """
        Parse a snapshot dict.

        Raises:
            ValueError: If the snapshot or one of its rows is malformed
        """
        if not isinstance(snapshot, dict):
            raise ValueError("Snapshot must be a JSON object")

        subjects = []
        for row in snapshot.get("subject_enrollments") or []:
            subject = self._parse_subject(row)
            if subject.is_active:
                subjects.append(subject)

        history = [self._parse_academic_record(r) for r in snapshot.get("academic_records") or []]
        ccas = [self._parse_cca(r) for r in snapshot.get("cca_records") or []]
        goals = [self._parse_goal(r) for r in snapshot.get("goals") or []]

        pathway_row = snapshot.get("student_pathway")
        pathway = self._parse_pathway(pathway_row) if pathway_row else None

        parsed = StudentSnapshot(
            student=dict(snapshot.get("student") or {}),
            subjects=subjects,
            academic_history=history,
            cca_records=ccas,
            goals=goals,
            pathway=pathway,
        )
        logger.debug(
            "Parsed snapshot: %d subjects, %d records, %d CCAs, %d goals",
            len(subjects), len(history), len(ccas), len(goals),
        )
        return parsed

    def _parse_subject(self, row) -> SubjectRecord:
        row = _require_mapping(row, "subject_enrollments")
        return SubjectRecord(
            subject_name=_require_subject(row, "subject_enrollments"),
            grade_estimate=row.get("current_grade_estimate") or None,
            study_hours_per_week=_as_number(row.get("study_hours_per_week"), 0, "study_hours_per_week"),
            subject_type=row.get("subject_type") or "",
            is_active=row.get("is_active", True) is not False,
        )

    def _parse_academic_record(self, row) -> AcademicRecord:
        row = _require_mapping(row, "academic_records")
        score = row.get("score")
        return AcademicRecord(
            subject_name=_require_subject(row, "academic_records"),
            grade=row.get("grade") or None,
            score=None if score is None else _as_number(score, None, "score"),
            exam_type=row.get("exam_type") or "",
            year=_as_optional_int(row.get("year"), "year"),
            term=_as_optional_int(row.get("term"), "term"),
        )

    def _parse_cca(self, row) -> CCARecord:
        row = _require_mapping(row, "cca_records")
        return CCARecord(
            leaps_points=_as_number(row.get("leaps_points"), 0, "leaps_points"),
            cca_name=row.get("cca_name") or "",
            cca_category=row.get("cca_category") or "",
            role=row.get("role") or "",
            participation_level=row.get("participation_level") or "",
            achievements=row.get("achievements") or "",
            start_year=_as_optional_int(row.get("start_year"), "start_year"),
            end_year=_as_optional_int(row.get("end_year"), "end_year"),
        )

    def _parse_goal(self, row) -> Goal:
        row = _require_mapping(row, "goals")
        target_score = row.get("target_score")
        return Goal(
            goal_type=row.get("goal_type") or "",
            target_institution=row.get("target_institution") or "",
            target_score=None if target_score in (None, "") else str(target_score),
            target_year=_as_optional_int(row.get("target_year"), "target_year"),
            status=row.get("status") or "active",
        )

    def _parse_pathway(self, row) -> Pathway:
        row = _require_mapping(row, "student_pathway")
        return Pathway(
            pathway_type=row.get("pathway_type") or None,
            institution_name=row.get("institution_name") or "",
            course_name=row.get("course_name") or None,
            ite_course_name=row.get("ite_course_name") or None,
        )
