from datetime import date

import pytest

import portal_dashboard as dashboard
import portal_grades as grades
import portal_homework as homework
from portal_errors import NotFoundError, ValidationError


class TestHomework:
    def test_add_defaults_to_pending(self):
        items = []
        hw = homework.add_homework(items, {"title": "Essay", "subject": "English"})
        assert hw["status"] == "Pending"
        assert isinstance(hw["id"], int)
        assert items == [hw]

    def test_ids_are_unique(self):
        items = []
        a = homework.add_homework(items, {"title": "A"})
        b = homework.add_homework(items, {"title": "B"})
        assert a["id"] != b["id"]

    def test_validation(self):
        with pytest.raises(ValidationError):
            homework.add_homework([], {"title": ""})
        with pytest.raises(ValidationError):
            homework.add_homework([], {"title": "A", "status": "Done"})

    def test_toggle(self):
        items = []
        hw = homework.add_homework(items, {"title": "A", "status": "In Progress"})
        homework.toggle_status(items, hw["id"])
        assert hw["status"] == "Completed"
        homework.toggle_status(items, str(hw["id"]))
        assert hw["status"] == "Pending"

    def test_filter_and_pending(self):
        items = []
        homework.add_homework(items, {"title": "A"})
        homework.add_homework(items, {"title": "B", "status": "Completed"})
        assert [i["title"] for i in homework.filter_homework(items, "Completed")] == ["B"]
        assert len(homework.filter_homework(items, "All Assignments")) == 2
        assert [i["title"] for i in homework.pending(items)] == ["A"]

    def test_delete_unknown(self):
        with pytest.raises(NotFoundError):
            homework.delete_homework([], 1)


class TestGrades:
    def test_student_entry_requires_all_fields(self):
        with pytest.raises(ValidationError, match="Please fill in all fields"):
            grades.add_grade([], {"name": "Math", "grade": "90"})

    def test_admin_entry_requires_name_and_grade(self):
        g = grades.add_grade([], {"name": "Math", "grade": "90"}, require_all=False)
        assert g["grade"] == 90.0
        assert g["type"] == "Midterm"
        assert g["semester"] == "current"
        assert isinstance(g["id"], str)

    @pytest.mark.parametrize("value", ["abc", "-1", "100.5"])
    def test_grade_range(self, value):
        with pytest.raises(ValidationError):
            grades.add_grade([], {"name": "Math", "grade": value}, require_all=False)

    def test_gpa_is_mean(self):
        items = [{"grade": 90}, {"grade": 80}, {"grade": 85.5}]
        assert grades.compute_gpa(items) == pytest.approx(85.1666, rel=1e-3)
        assert grades.compute_gpa([]) == 0.0

    def test_update_and_delete(self):
        items = []
        g = grades.add_grade(items, {"name": "Math", "grade": "70"}, require_all=False)
        grades.update_grade(items, g["id"], {"name": "Math", "grade": "75", "semester": "previous"})
        assert items[0]["grade"] == 75.0 and items[0]["id"] == g["id"]
        assert grades.delete_grade(items, g["id"]) == []
        with pytest.raises(NotFoundError):
            grades.delete_grade(items, "missing")

    def test_semester_filter(self):
        items = [{"grade": 90, "semester": "current"}, {"grade": 70, "semester": "previous"}]
        assert grades.filter_by_semester(items, "Previous Semester") == [items[1]]
        assert grades.filter_by_semester(items, "All Semesters") == items

    def test_normalize_legacy_records(self):
        items, changed = grades.normalize_grades([{"subject": "Math", "term": "Finals", "grade": "88"}])
        assert changed
        assert items[0]["name"] == "Math"
        assert items[0]["type"] == "Finals"
        assert items[0]["semester"] == "current"
        assert items[0]["grade"] == 88.0
        assert items[0]["id"].startswith("grade-0-")
        again, changed = grades.normalize_grades(items)
        assert not changed and again == items

    @pytest.mark.parametrize("value, band", [(95, "excellent"), (80, "good"), (70, "fair"), (69.9, "poor")])
    def test_grade_band(self, value, band):
        assert grades.grade_band(value) == band


class TestNotes:
    def test_add_and_delete(self):
        notes = []
        note = dashboard.add_note(notes, "  Bring calculator ", date(2026, 10, 19))
        assert note["content"] == "Bring calculator"
        assert note["date"] == "10/19/2026"
        assert dashboard.delete_note(notes, str(note["id"])) == []

    def test_blank_note(self):
        with pytest.raises(ValidationError):
            dashboard.add_note([], "   ", date(2026, 10, 19))

    def test_delete_unknown(self):
        with pytest.raises(NotFoundError):
            dashboard.delete_note([], 1)
