"""Per-student data access, notes, and the dashboard summary."""

import logging

from portal_errors import NotFoundError, ValidationError
from portal_homework import pending, timestamp_id
from portal_grades import normalize_grades
from portal_schedule import apply_attendance_rules, classes_for, weekday_name
from portal_store import student_key

logger = logging.getLogger(__name__)


# --------- per-student documents ----------
def load_schedule(store, student_id, now, absent_after_hours=3):
    """Load a schedule with today's attendance rules applied and saved."""
    key = student_key("schedule_", student_id)
    schedule = store.get_json(key, {})
    if apply_attendance_rules(schedule, now, absent_after_hours):
        store.set_json(key, schedule)
    return schedule


def save_schedule(store, student_id, schedule):
    store.set_json(student_key("schedule_", student_id), schedule)


def load_homework(store, student_id):
    return store.get_json(student_key("homework_", student_id), [])


def save_homework(store, student_id, items):
    store.set_json(student_key("homework_", student_id), items)


def load_grades(store, student_id):
    key = student_key("grades_", student_id)
    items, changed = normalize_grades(store.get_json(key, []))
    if changed:
        store.set_json(key, items)
    return items


def save_grades(store, student_id, items):
    store.set_json(student_key("grades_", student_id), items)


def load_notes(store, student_id):
    return store.get_json(student_key("notes_", student_id), [])


def save_notes(store, student_id, notes):
    store.set_json(student_key("notes_", student_id), notes)


def all_schedules(store, student_ids, now, absent_after_hours=3):
    return {sid: load_schedule(store, sid, now, absent_after_hours) for sid in student_ids}


# --------- notes ----------
def add_note(notes, content, today):
    content = (content or "").strip()
    if not content:
        raise ValidationError("Note cannot be empty")
    note = {
        "id": timestamp_id(n.get("id") for n in notes),
        "content": content,
        "date": today.strftime("%m/%d/%Y"),
    }
    notes.append(note)
    return note


def delete_note(notes, note_id):
    kept = [n for n in notes if str(n.get("id")) != str(note_id)]
    if len(kept) == len(notes):
        raise NotFoundError("Note not found")
    return kept


def dashboard_summary(store, profile, now, absent_after_hours=3):
    student_id = profile["studentId"]
    schedule = load_schedule(store, student_id, now, absent_after_hours)
    return {
        "username": profile.get("fullName") or profile.get("name") or "Student",
        "weekday": weekday_name(now.date()),
        "todays_classes": classes_for(schedule, weekday_name(now.date())),
        "deadlines": pending(load_homework(store, student_id)),
        "notes": load_notes(store, student_id),
    }
