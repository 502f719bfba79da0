"""Homework list: add, delete, status changes and tab filtering."""

import time

from portal_errors import NotFoundError, ValidationError

STATUSES = ["Pending", "In Progress", "Completed"]
ALL_TAB = "All Assignments"
TABS = [ALL_TAB] + STATUSES


def timestamp_id(taken) -> int:
    """Millisecond timestamp, bumped past any id already in ``taken``."""
    new = int(time.time() * 1000)
    taken = set(taken)
    while new in taken:
        new += 1
    return new


def _find(items, item_id):
    for item in items:
        if str(item.get("id")) == str(item_id):
            return item
    raise NotFoundError("Homework not found")


def add_homework(items, fields):
    title = (fields.get("title") or "").strip()
    if not title:
        raise ValidationError("Title is required")
    status = (fields.get("status") or "").strip() or "Pending"
    if status not in STATUSES:
        raise ValidationError(f"Unknown status {status!r}")
    hw = {
        "id": timestamp_id(i.get("id") for i in items),
        "title": title,
        "subject": (fields.get("subject") or "").strip(),
        "dueDate": (fields.get("dueDate") or "").strip(),
        "status": status,
        "description": (fields.get("description") or "").strip(),
        "type": (fields.get("type") or "").strip(),
    }
    items.append(hw)
    return hw


def delete_homework(items, item_id):
    _find(items, item_id)
    return [i for i in items if str(i.get("id")) != str(item_id)]


def toggle_status(items, item_id):
    hw = _find(items, item_id)
    hw["status"] = "Pending" if hw.get("status") == "Completed" else "Completed"
    return hw


def set_status(items, item_id, status):
    if status not in STATUSES:
        raise ValidationError(f"Unknown status {status!r}")
    hw = _find(items, item_id)
    hw["status"] = status
    return hw


def filter_homework(items, tab):
    if tab == ALL_TAB or tab not in TABS:
        return list(items)
    return [i for i in items if i.get("status") == tab]


def pending(items):
    return [i for i in items if i.get("status") == "Pending"]
