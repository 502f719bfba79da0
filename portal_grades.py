"""
portal_grades.py - grade records and GPA

Grades are percentages (0-100). The GPA shown to students is the plain
arithmetic mean of the grades on record.
"""

import time
import logging

from portal_errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

GRADE_TYPES = ["Midterm", "Finals"]
SEMESTERS = {"current": "Current Semester", "previous": "Previous Semester"}
ALL_SEMESTERS = "All Semesters"
SEMESTER_TABS = list(SEMESTERS.values()) + [ALL_SEMESTERS]


def _ms() -> int:
    return int(time.time() * 1000)


def _new_id(items) -> str:
    taken = {str(g.get("id")) for g in items}
    new = _ms()
    while str(new) in taken:
        new += 1
    return str(new)


def normalize_grades(items):
    """Bring old-style entries up to date. Returns (items, changed)."""
    out = []
    changed = False
    stamp = _ms()
    for index, g in enumerate(items):
        fixed = dict(g)
        if not fixed.get("id"):
            fixed["id"] = f"grade-{index}-{stamp}"
        if not fixed.get("name") and fixed.get("subject"):
            fixed["name"] = fixed.pop("subject")
        if not fixed.get("type"):
            fixed["type"] = fixed.pop("term", None) or "Midterm"
        if fixed.get("semester") not in SEMESTERS:
            fixed["semester"] = "current"
        for name in ("code", "name", "professor"):
            fixed.setdefault(name, "")
        if isinstance(fixed.get("grade"), str):
            try:
                fixed["grade"] = float(fixed["grade"])
            except ValueError:
                pass
        if fixed != g:
            changed = True
        out.append(fixed)
    if changed:
        logger.info("Migrated %d grade records to the current layout", len(out))
    return out, changed


def parse_grade(value) -> float:
    try:
        grade = float(str(value).strip())
    except ValueError:
        raise ValidationError("Grade must be a number between 0 and 100")
    if not 0 <= grade <= 100:
        raise ValidationError("Grade must be a number between 0 and 100")
    return grade


def _grade_from_fields(fields, require_all):
    g = {name: (fields.get(name) or "").strip() for name in ("code", "name", "professor")}
    raw = (fields.get("grade") or "").strip()
    if require_all:
        if not g["code"] or not g["name"] or not g["professor"] or not raw:
            raise ValidationError("Please fill in all fields")
    elif not g["name"] or not raw:
        raise ValidationError("Subject name and grade are required")
    g["grade"] = parse_grade(raw)
    g["type"] = (fields.get("type") or "").strip() or "Midterm"
    if g["type"] not in GRADE_TYPES:
        raise ValidationError(f"Unknown grade type {g['type']!r}")
    g["semester"] = (fields.get("semester") or "").strip() or "current"
    if g["semester"] not in SEMESTERS:
        raise ValidationError(f"Unknown semester {g['semester']!r}")
    return g


def add_grade(items, fields, require_all=True):
    g = _grade_from_fields(fields, require_all)
    g["id"] = _new_id(items)
    items.append(g)
    return g


def _index_of(items, grade_id):
    for i, g in enumerate(items):
        if str(g.get("id")) == str(grade_id):
            return i
    raise NotFoundError("The grade could not be found.")


def update_grade(items, grade_id, fields):
    i = _index_of(items, grade_id)
    g = _grade_from_fields(fields, require_all=False)
    g["id"] = items[i]["id"]
    items[i] = g
    return g


def delete_grade(items, grade_id):
    _index_of(items, grade_id)
    return [g for g in items if str(g.get("id")) != str(grade_id)]


def filter_by_semester(items, tab):
    for key, label in SEMESTERS.items():
        if tab == label:
            return [g for g in items if g.get("semester", "current") == key]
    return list(items)


def compute_gpa(items) -> float:
    values = [g["grade"] for g in items if isinstance(g.get("grade"), (int, float))]
    if not values:
        return 0.0
    return sum(values) / len(values)


def grade_band(value) -> str:
    if value >= 90:
        return "excellent"
    if value >= 80:
        return "good"
    if value >= 70:
        return "fair"
    return "poor"
