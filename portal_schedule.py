"""
portal_schedule.py - weekly class schedule and attendance

A schedule maps a weekday name to its list of classes. Each class carries an
``attendance`` map of ISO date -> bool (True present, False absent). Only
today's record is ever kept: older dates are dropped the next time the rules
run, and a class that started more than ``absent_after_hours`` ago without a
record is marked absent.
"""

import re
import logging
from datetime import datetime, timedelta

from portal_errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DEFAULT_COLOR = "#FFFFFF"
TIME_RE = re.compile(r"(\d+):?(\d+)?\s*(am|pm)?", re.IGNORECASE)


def parse_time_string(text):
    """Parse "10:00 AM", "2:30pm" or "14:00" into (hours, minutes)."""
    if not text:
        return None
    match = TIME_RE.search(text)
    if not match:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    period = match.group(3).lower() if match.group(3) else None
    if period == "pm" and hours < 12:
        hours += 12
    elif period == "am" and hours == 12:
        hours = 0
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def weekday_name(day) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def normalize_day(day: str) -> str:
    day = (day or "").strip().capitalize()
    if day not in DAYS_OF_WEEK:
        raise ValidationError("Day must be one of " + ", ".join(DAYS_OF_WEEK))
    return day


def classes_for(schedule, day):
    return schedule.get(day, [])


def _class_at(schedule, day, index):
    classes = schedule.get(day) or []
    if not 0 <= index < len(classes):
        raise NotFoundError("Class not found")
    return classes[index]


def add_class(schedule, day, fields):
    day = normalize_day(day)
    name = (fields.get("name") or "").strip()
    if not name:
        raise ValidationError("Class name is required")
    cls = {
        "name": name,
        "room": (fields.get("room") or "").strip(),
        "professor": (fields.get("professor") or "").strip(),
        "time": (fields.get("time") or "").strip(),
        "color": (fields.get("color") or "").strip() or DEFAULT_COLOR,
        "attendance": {},
    }
    schedule.setdefault(day, []).append(cls)
    return cls


def delete_class(schedule, day, index):
    _class_at(schedule, day, index)
    schedule[day] = [c for i, c in enumerate(schedule[day]) if i != index]
    if not schedule[day]:
        del schedule[day]


def attendance_status(cls, today) -> str:
    key = today.isoformat()
    attendance = cls.get("attendance") or {}
    if key not in attendance:
        return "unmarked"
    return "present" if attendance[key] else "absent"


def mark_present(schedule, day, index, today):
    cls = _class_at(schedule, day, index)
    if attendance_status(cls, today) != "unmarked":
        raise ValidationError(f"Attendance for {cls['name']} is already recorded today")
    cls.setdefault("attendance", {})[today.isoformat()] = True
    return cls


def apply_attendance_rules(schedule, now, absent_after_hours=3) -> bool:
    """Reset stale attendance and infer absences. Returns True on change."""
    changed = False
    today = now.date()
    today_key = today.isoformat()
    today_name = weekday_name(today)
    for day, classes in schedule.items():
        for cls in classes:
            if not isinstance(cls.get("attendance"), dict):
                cls["attendance"] = {}
                changed = True
            attendance = cls["attendance"]
            for date in [d for d in attendance if d != today_key]:
                del attendance[date]
                changed = True
            if day != today_name or today_key in attendance:
                continue
            start = parse_time_string(cls.get("time"))
            if start is None:
                continue
            started = datetime.combine(today, datetime.min.time()).replace(hour=start[0], minute=start[1])
            if now > started + timedelta(hours=absent_after_hours):
                attendance[today_key] = False
                changed = True
                logger.info("Marked %s as absent automatically", cls.get("name"))
    return changed


def attendance_report(schedules, today):
    """Flatten attendance of every student's schedule, newest date first.

    ``schedules`` maps student ID to that student's schedule.
    """
    rows = []
    today_key = today.isoformat()
    for student_id, schedule in schedules.items():
        for day, classes in schedule.items():
            for cls in classes:
                for date, present in (cls.get("attendance") or {}).items():
                    rows.append({
                        "date": date,
                        "day": day,
                        "studentId": student_id,
                        "className": cls.get("name", ""),
                        "professor": cls.get("professor", ""),
                        "time": cls.get("time", ""),
                        "present": bool(present),
                        "isToday": date == today_key,
                    })
    rows.sort(key=lambda r: r["date"], reverse=True)
    return rows
