from datetime import date, datetime

import pytest

import portal_schedule as schedule
from portal_errors import NotFoundError, ValidationError

MONDAY = date(2026, 10, 19)


@pytest.mark.parametrize("text, expected", [
    ("10:00 AM", (10, 0)),
    ("2:30 PM", (14, 30)),
    ("2:30pm", (14, 30)),
    ("12:15 am", (0, 15)),
    ("12 PM", (12, 0)),
    ("14:45", (14, 45)),
    ("9", (9, 0)),
    ("", None),
    ("noon", None),
    ("1030", None),
])
def test_parse_time_string(text, expected):
    assert schedule.parse_time_string(text) == expected


class TestEditing:
    def test_add_class_normalizes_day(self):
        sched = {}
        cls = schedule.add_class(sched, "monday", {"name": "Math", "time": "8:00 AM"})
        assert sched == {"Monday": [cls]}
        assert cls["attendance"] == {}
        assert cls["color"] == "#FFFFFF"

    def test_add_class_rejects_bad_input(self):
        with pytest.raises(ValidationError):
            schedule.add_class({}, "Sunday", {"name": "Math"})
        with pytest.raises(ValidationError):
            schedule.add_class({}, "Monday", {"name": " "})

    def test_delete_last_class_drops_day(self):
        sched = {}
        schedule.add_class(sched, "Monday", {"name": "Math"})
        schedule.add_class(sched, "Monday", {"name": "Art"})
        schedule.delete_class(sched, "Monday", 0)
        assert [c["name"] for c in sched["Monday"]] == ["Art"]
        schedule.delete_class(sched, "Monday", 0)
        assert "Monday" not in sched
        with pytest.raises(NotFoundError):
            schedule.delete_class(sched, "Monday", 0)


class TestAttendance:
    def _sched(self, time="10:00 AM", attendance=None):
        return {"Monday": [{"name": "Math", "time": time, "attendance": attendance or {}}]}

    def test_status_and_mark_present(self):
        sched = self._sched()
        cls = sched["Monday"][0]
        assert schedule.attendance_status(cls, MONDAY) == "unmarked"
        schedule.mark_present(sched, "Monday", 0, MONDAY)
        assert schedule.attendance_status(cls, MONDAY) == "present"
        with pytest.raises(ValidationError):
            schedule.mark_present(sched, "Monday", 0, MONDAY)

    def test_absent_after_grace_period(self):
        sched = self._sched()
        assert schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 13, 1))
        assert sched["Monday"][0]["attendance"] == {"2026-10-19": False}
        assert schedule.attendance_status(sched["Monday"][0], MONDAY) == "absent"

    def test_not_absent_within_grace_period(self):
        sched = self._sched()
        assert not schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 12, 59))
        assert sched["Monday"][0]["attendance"] == {}

    def test_custom_grace(self):
        sched = self._sched()
        assert schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 11, 30), absent_after_hours=1)

    def test_other_days_untouched(self):
        sched = {"Tuesday": [{"name": "Art", "time": "7:00 AM", "attendance": {}}]}
        assert not schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 23, 0))

    def test_present_is_kept(self):
        sched = self._sched(attendance={"2026-10-19": True})
        assert not schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 23, 0))
        assert sched["Monday"][0]["attendance"] == {"2026-10-19": True}

    def test_daily_reset(self):
        sched = self._sched(time="", attendance={"2026-10-12": True})
        assert schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 9, 0))
        assert sched["Monday"][0]["attendance"] == {}

    def test_missing_attendance_map(self):
        sched = {"Friday": [{"name": "PE", "time": "1:00 PM"}]}
        assert schedule.apply_attendance_rules(sched, datetime(2026, 10, 19, 9, 0))
        assert sched["Friday"][0]["attendance"] == {}


def test_attendance_report_newest_first():
    schedules = {
        "s1": {"Monday": [{"name": "Math", "professor": "Cruz", "time": "8 AM",
                            "attendance": {"2026-10-12": True, "2026-10-19": False}}]},
        "s2": {"Friday": [{"name": "PE", "attendance": {"2026-10-16": True}}]},
    }
    rows = schedule.attendance_report(schedules, MONDAY)
    assert [r["date"] for r in rows] == ["2026-10-19", "2026-10-16", "2026-10-12"]
    assert rows[0]["isToday"] and not rows[0]["present"]
    assert rows[1]["studentId"] == "s2"
