"""
Unit Tests for ReferenceDataLoader
"""

import pytest

from planning.data import ReferenceDataLoader


class TestReferenceTables:
    """Tests for the packaged reference tables."""

    def test_poly_courses_when_loaded_then_full_table(self, loader):
        courses = loader.poly_courses

        assert len(courses) == 132
        assert courses[0].name == "Accountancy"
        assert courses[0].code == "S25"
        assert courses[0].institution_tags == ("SP",)

    def test_ite_courses_when_loaded_then_no_codes(self, loader):
        courses = loader.ite_courses

        assert len(courses) == 20
        assert all(c.code == "" for c in courses)

    def test_required_subjects_when_loaded_then_unique(self, loader):
        for course in loader.poly_courses + loader.ite_courses:
            assert len(course.required_subjects) == len(set(course.required_subjects))

    def test_career_paths_when_loaded_then_eight_courses(self, loader):
        assert len(loader.career_paths) == 8

    def test_properties_when_read_twice_then_cached(self, loader):
        assert loader.poly_courses is loader.poly_courses


class TestInstitutions:
    """Tests for institution lookups."""

    def test_polytechnic_name_when_known_tag_then_full_name(self, loader):
        assert loader.polytechnic_name("SP") == "Singapore Polytechnic"

    def test_polytechnic_name_when_unknown_tag_then_tag(self, loader):
        assert loader.polytechnic_name("XX") == "XX"

    def test_is_ip_school_when_listed_then_true(self, loader):
        assert loader.is_ip_school("Raffles Institution") is True
        assert loader.is_ip_school("Bedok View Secondary School") is False


class TestMissingTables:
    """Tests for a misconfigured reference directory."""

    def test_load_when_directory_empty_then_file_not_found(self, tmp_path):
        loader = ReferenceDataLoader(tmp_path)
        with pytest.raises(FileNotFoundError, match="Reference table not found"):
            loader.grade_scale
