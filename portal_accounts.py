"""
portal_accounts.py - student accounts, login and profile

User records are stored under their student ID. Looking a user up by email is
a linear scan over every key in the store.
"""

import os
import base64
import hashlib
import logging

from portal_errors import AuthError, NotFoundError, StoreError, ValidationError
from portal_store import STUDENT_KEY_PREFIXES, is_record_key, student_key

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "studentId", "fullName", "section", "program", "yearLevel", "age",
    "birthday", "address", "contactNumber", "email",
)
EDITABLE_FIELDS = PROFILE_FIELDS[1:]
PHOTO_TYPES = ("image/png", "image/jpeg", "image/gif")
MAX_PHOTO_BYTES = 2 * 1024 * 1024

ADMIN_PROFILE = {
    "studentId": "ADMIN-2025",
    "name": "Administrator",
    "fullName": "Administrator",
    "section": "Admin",
    "program": "Computer Science",
    "yearLevel": "Admin",
    "age": "",
    "birthday": "",
    "address": "EARIST Manila",
    "contactNumber": "",
    "email": "admin@earist.edu.ph",
    "photo": None,
    "role": "admin",
}


# --------- password hashing ----------
def salt_and_hash(password: str) -> str:
    """Return salt$hexsha256(salt+password)."""
    salt = os.urandom(8).hex()
    h = hashlib.sha256((salt + password).encode("utf-8")).hexdigest()
    return f"{salt}${h}"


def verify_hash(password: str, stored: str) -> bool:
    try:
        salt, digest = stored.split("$", 1)
    except (AttributeError, ValueError):
        return False
    return hashlib.sha256((salt + password).encode("utf-8")).hexdigest() == digest


# --------- helpers ----------
def _clean(form, name):
    return (form.get(name) or "").strip()


def _is_user(value) -> bool:
    return isinstance(value, dict) and bool(value.get("studentId")) and "passwordHash" in value


def _record_from_form(form):
    rec = {name: _clean(form, name) for name in PROFILE_FIELDS}
    rec["email"] = rec["email"].lower()
    rec["course"] = rec["program"]
    rec["year"] = rec["yearLevel"]
    return rec


def public_profile(rec):
    """The part of a user record that is safe to keep in a session."""
    profile = {name: rec.get(name, "") for name in PROFILE_FIELDS}
    profile["name"] = rec.get("fullName", "")
    profile["course"] = rec.get("course", rec.get("program", ""))
    profile["year"] = rec.get("year", rec.get("yearLevel", ""))
    # the photo itself is too large for a cookie session
    profile["hasPhoto"] = bool(rec.get("photo"))
    profile["role"] = "student"
    return profile


def iter_users(store):
    for key in store.get_all_keys():
        if not is_record_key(key):
            continue
        try:
            value = store.get_json(key)
        except StoreError:
            logger.debug("Skipping non-JSON value under key %s", key)
            continue
        if _is_user(value):
            yield key, value


def list_users(store):
    return sorted((rec for _, rec in iter_users(store)), key=lambda r: (r.get("fullName", "").lower(), r["studentId"]))


def find_user(store, identifier: str):
    """Find a user by student ID, falling back to a scan on email."""
    identifier = (identifier or "").strip()
    if not identifier:
        return None
    if is_record_key(identifier):
        try:
            rec = store.get_json(identifier)
        except StoreError:
            rec = None
        if _is_user(rec):
            return rec
    email = identifier.lower()
    for _, rec in iter_users(store):
        if rec.get("email") and rec["email"].lower() == email:
            return rec
    return None


def get_user(store, student_id: str):
    rec = find_user(store, student_id)
    if rec is None or rec["studentId"] != student_id:
        raise NotFoundError("User not found")
    return rec


def _ensure_unique(store, student_id, email, ignore_id=None):
    if student_id != ignore_id:
        if not is_record_key(student_id):
            raise ValidationError("Student ID is not allowed")
        if "/" in student_id:
            raise ValidationError("Student ID cannot contain \"/\"")
        if store.get_item(student_id) is not None:
            raise ValidationError("Student ID already exists")
    if email:
        for _, rec in iter_users(store):
            if rec["studentId"] != ignore_id and (rec.get("email") or "").lower() == email:
                raise ValidationError("Email already exists")


# --------- registration & login ----------
def register(store, form):
    rec = _record_from_form(form)
    password = form.get("password") or ""
    if not rec["studentId"] or not rec["fullName"] or not password:
        raise ValidationError("Please fill in all required fields.")
    _ensure_unique(store, rec["studentId"], rec["email"])
    rec["photo"] = None
    rec["passwordHash"] = salt_and_hash(password)
    store.set_json(rec["studentId"], rec)
    logger.info("Registered student %s", rec["studentId"])
    return rec


def authenticate(store, identifier, password, admin_username, admin_password):
    """Return the session profile for valid credentials."""
    identifier = (identifier or "").strip()
    password = password or ""
    if identifier == admin_username and password == admin_password:
        logger.info("Administrator logged in")
        return dict(ADMIN_PROFILE)
    rec = find_user(store, identifier)
    if rec is None:
        raise AuthError("User not found")
    if not verify_hash(password, rec["passwordHash"]):
        logger.warning("Failed login for %s", rec["studentId"])
        raise AuthError("Invalid password")
    logger.info("Student %s logged in", rec["studentId"])
    return public_profile(rec)


# --------- admin user management ----------
def create_user(store, form):
    rec = _record_from_form(form)
    password = form.get("password") or ""
    if not rec["fullName"]:
        raise ValidationError("Full name is required")
    if not rec["studentId"]:
        raise ValidationError("Student ID is required")
    if not rec["email"]:
        raise ValidationError("Email is required")
    if not password:
        raise ValidationError("Password is required")
    if password != (form.get("confirmPassword") or ""):
        raise ValidationError("Passwords do not match")
    _ensure_unique(store, rec["studentId"], rec["email"])
    rec["photo"] = None
    rec["passwordHash"] = salt_and_hash(password)
    store.set_json(rec["studentId"], rec)
    logger.info("Administrator created student %s", rec["studentId"])
    return rec


def _move_student_data(store, old_id, new_id):
    for prefix in STUDENT_KEY_PREFIXES:
        raw = store.get_item(student_key(prefix, old_id))
        if raw is not None:
            store.set_item(student_key(prefix, new_id), raw)
            store.remove_item(student_key(prefix, old_id))


def update_user(store, original_id, form):
    existing = get_user(store, original_id)
    updated = dict(existing)
    for name, value in _record_from_form(form).items():
        if name in form:
            updated[name] = value
    updated["course"] = updated.get("program", "")
    updated["year"] = updated.get("yearLevel", "")
    if not updated.get("fullName") or not updated.get("email") or not updated.get("studentId"):
        raise ValidationError("Name, Email, and Student ID are required")
    new_id = updated["studentId"]
    _ensure_unique(store, new_id, updated["email"], ignore_id=original_id)
    store.set_json(new_id, updated)
    if new_id != original_id:
        store.remove_item(original_id)
        _move_student_data(store, original_id, new_id)
        logger.info("Student %s renamed to %s", original_id, new_id)
    return updated


def delete_user(store, student_id):
    get_user(store, student_id)
    store.remove_item(student_id)
    for prefix in STUDENT_KEY_PREFIXES:
        store.remove_item(student_key(prefix, student_id))
    logger.info("Deleted student %s", student_id)


# --------- self-service profile ----------
def update_profile(store, student_id, form):
    rec = get_user(store, student_id)
    for name in EDITABLE_FIELDS:
        if name in form:
            rec[name] = _clean(form, name)
    rec["email"] = rec.get("email", "").lower()
    if not rec.get("fullName"):
        raise ValidationError("Full name is required")
    _ensure_unique(store, student_id, rec["email"], ignore_id=student_id)
    rec["course"] = rec.get("program", "")
    rec["year"] = rec.get("yearLevel", "")
    store.set_json(student_id, rec)
    return rec


def set_photo(store, student_id, data: bytes, mimetype: str):
    if not data:
        raise ValidationError("No photo selected")
    if mimetype not in PHOTO_TYPES:
        raise ValidationError("Photo must be a PNG, JPEG or GIF image")
    if len(data) > MAX_PHOTO_BYTES:
        raise ValidationError("Photo is larger than 2 MB")
    rec = get_user(store, student_id)
    rec["photo"] = f"data:{mimetype};base64," + base64.b64encode(data).decode("ascii")
    store.set_json(student_id, rec)
    return rec
