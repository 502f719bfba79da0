#!/usr/bin/env python3
"""
portal_app.py - Flask Student Portal

- Student screens: dashboard with notes, weekly schedule with attendance, homework,
  grades with GPA, and profile.
- Admin console: list/add/edit/delete students, manage each student's grades, and an
  attendance report across all schedules.
- Everything is persisted in a local, unencrypted key-value store (one JSON file, or
  memory only when PORTAL_STORE_PATH is empty).
- Run:
    export PORT=8080
    python3 portal_app.py
  Or with Gunicorn:
    gunicorn portal_app:app --bind 0.0.0.0:$PORT
"""

import os
import uuid
import logging
from datetime import datetime
from functools import wraps

from flask import (
    Blueprint, Flask, current_app, flash, jsonify, redirect, render_template, request, session, url_for
)
from jinja2 import DictLoader

import portal_accounts as accounts
import portal_dashboard as data
import portal_grades as grades_mod
import portal_homework as homework_mod
import portal_schedule as schedule_mod
from portal_errors import AuthError, NotFoundError, PortalError, StoreError
from portal_store import KeyValueStore
from portal_templates import TEMPLATES

logger = logging.getLogger(__name__)

bp = Blueprint("portal", __name__)


# --------- Configuration ----------
def load_config():
    return {
        "SECRET_KEY": os.environ.get("SECRET_KEY", str(uuid.uuid4())),
        "PORT": int(os.environ.get("PORT", "8080")),
        "STORE_PATH": os.environ.get("PORTAL_STORE_PATH", "portal_store.json"),
        "ADMIN_USERNAME": os.environ.get("PORTAL_ADMIN_USERNAME", "Admin123"),
        "ADMIN_PASSWORD": os.environ.get("PORTAL_ADMIN_PASSWORD", "CCS2025"),
        "ABSENT_AFTER_HOURS": float(os.environ.get("PORTAL_ABSENT_AFTER_HOURS", "3")),
        "LOG_LEVEL": os.environ.get("PORTAL_LOG_LEVEL", "INFO"),
        "MAX_CONTENT_LENGTH": 4 * 1024 * 1024,
    }


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.update(load_config())
    if overrides:
        app.config.update(overrides)
    app.jinja_loader = DictLoader(TEMPLATES)
    app.extensions["portal_store"] = KeyValueStore(app.config["STORE_PATH"] or None)
    app.register_blueprint(bp)

    @app.context_processor
    def inject_profile():
        return {"profile": session.get("profile")}

    return app


# --------- Utilities ----------
def _now():
    return datetime.now()


def get_store() -> KeyValueStore:
    return current_app.extensions["portal_store"]


def _grace():
    return current_app.config["ABSENT_AFTER_HOURS"]


def current_profile():
    return session.get("profile")


def login_required(role=None):
    def deco(f):
        @wraps(f)
        def wrapped(*args, **kwargs):
            profile = current_profile()
            if not profile:
                flash("Please login first", "warning")
                return redirect(url_for("portal.login"))
            if profile["role"] == "student" and accounts.find_user(get_store(), profile["studentId"]) is None:
                session.clear()
                flash("Session expired, please log in again", "warning")
                return redirect(url_for("portal.login"))
            if role and profile["role"] != role:
                flash("Access denied", "danger")
                return redirect(url_for("portal.index"))
            return f(*args, **kwargs)
        return wrapped
    return deco


def _sid():
    return current_profile()["studentId"]


def _fail(err, endpoint, **values):
    flash(str(err), "danger")
    return redirect(url_for(endpoint, **values))


def atomic(f):
    """Run the view inside a store transaction so its load, change and save cannot interleave."""
    @wraps(f)
    def wrapped(*args, **kwargs):
        with get_store().transaction():
            return f(*args, **kwargs)
    return wrapped


@bp.errorhandler(StoreError)
def store_failed(err):
    logger.error("Store failure on %s: %s", request.path, err)
    flash(f"Could not read saved data: {err}", "danger")
    return render_template("error.html"), 500


# --------- Routes: public ----------
@bp.route("/health")
def health():
    return jsonify({"status": "ok"}), 200


@bp.route("/")
def index():
    profile = current_profile()
    if profile:
        return redirect(url_for("portal.admin_dashboard" if profile["role"] == "admin" else "portal.dashboard"))
    return render_template("home.html")


@bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return render_template("login.html", username="")
    username = request.form.get("username") or ""
    try:
        profile = accounts.authenticate(
            get_store(), username, request.form.get("password"),
            current_app.config["ADMIN_USERNAME"], current_app.config["ADMIN_PASSWORD"],
        )
    except AuthError as e:
        flash(f"Login Failed: {e}", "danger")
        return render_template("login.html", username=username), 401
    session.clear()
    session["profile"] = profile
    if profile["role"] == "admin":
        return redirect(url_for("portal.admin_dashboard"))
    return redirect(url_for("portal.dashboard"))


@bp.route("/register", methods=["GET", "POST"])
@atomic
def register():
    if request.method == "GET":
        return render_template("register.html", form={})
    try:
        accounts.register(get_store(), request.form)
    except PortalError as e:
        flash(f"Registration Failed: {e}", "danger")
        return render_template("register.html", form=request.form), 400
    flash("Your account has been created.", "success")
    return redirect(url_for("portal.login"))


@bp.route("/logout")
def logout():
    session.clear()
    flash("Logged out", "info")
    return redirect(url_for("portal.login"))


# --------- Routes: dashboard & notes ----------
@bp.route("/dashboard")
@login_required(role="student")
@atomic
def dashboard():
    summary = data.dashboard_summary(get_store(), current_profile(), _now(), _grace())
    return render_template("dashboard.html", summary=summary)


@bp.route("/notes", methods=["POST"])
@login_required(role="student")
@atomic
def add_note():
    store, sid = get_store(), _sid()
    notes = data.load_notes(store, sid)
    try:
        data.add_note(notes, request.form.get("content"), _now().date())
    except PortalError as e:
        return _fail(e, "portal.dashboard")
    data.save_notes(store, sid, notes)
    return redirect(url_for("portal.dashboard"))


@bp.route("/notes/<note_id>/delete", methods=["POST"])
@login_required(role="student")
@atomic
def delete_note(note_id):
    store, sid = get_store(), _sid()
    try:
        notes = data.delete_note(data.load_notes(store, sid), note_id)
    except PortalError as e:
        return _fail(e, "portal.dashboard")
    data.save_notes(store, sid, notes)
    return redirect(url_for("portal.dashboard"))


# --------- Routes: schedule ----------
@bp.route("/schedule")
@login_required(role="student")
@atomic
def schedule():
    now = _now()
    sched = data.load_schedule(get_store(), _sid(), now, _grace())
    today = now.date()
    return render_template(
        "schedule.html",
        days=schedule_mod.DAYS_OF_WEEK,
        schedule=sched,
        status_of=lambda c: schedule_mod.attendance_status(c, today),
    )


@bp.route("/schedule/classes", methods=["POST"])
@login_required(role="student")
@atomic
def add_class():
    store, sid = get_store(), _sid()
    sched = data.load_schedule(store, sid, _now(), _grace())
    try:
        schedule_mod.add_class(sched, request.form.get("day"), request.form)
    except PortalError as e:
        return _fail(e, "portal.schedule")
    data.save_schedule(store, sid, sched)
    return redirect(url_for("portal.schedule"))


@bp.route("/schedule/<day>/<int:index>/present", methods=["POST"])
@login_required(role="student")
@atomic
def mark_present(day, index):
    store, sid, now = get_store(), _sid(), _now()
    sched = data.load_schedule(store, sid, now, _grace())
    try:
        cls = schedule_mod.mark_present(sched, day, index, now.date())
    except PortalError as e:
        return _fail(e, "portal.schedule")
    data.save_schedule(store, sid, sched)
    flash(f"Marked present for {cls['name']}", "success")
    return redirect(url_for("portal.schedule"))


@bp.route("/schedule/<day>/<int:index>/delete", methods=["POST"])
@login_required(role="student")
@atomic
def delete_class(day, index):
    store, sid = get_store(), _sid()
    sched = data.load_schedule(store, sid, _now(), _grace())
    try:
        schedule_mod.delete_class(sched, day, index)
    except PortalError as e:
        return _fail(e, "portal.schedule")
    data.save_schedule(store, sid, sched)
    return redirect(url_for("portal.schedule"))


# --------- Routes: homework ----------
@bp.route("/homework")
@login_required(role="student")
@atomic
def homework():
    tab = request.args.get("tab", homework_mod.ALL_TAB)
    if tab not in homework_mod.TABS:
        tab = homework_mod.ALL_TAB
    items = data.load_homework(get_store(), _sid())
    return render_template(
        "homework.html",
        tab=tab,
        tabs=homework_mod.TABS,
        statuses=homework_mod.STATUSES,
        items=homework_mod.filter_homework(items, tab),
    )


@bp.route("/homework", methods=["POST"])
@login_required(role="student")
@atomic
def add_homework():
    store, sid = get_store(), _sid()
    items = data.load_homework(store, sid)
    try:
        homework_mod.add_homework(items, request.form)
    except PortalError as e:
        return _fail(e, "portal.homework")
    data.save_homework(store, sid, items)
    return redirect(url_for("portal.homework"))


@bp.route("/homework/<item_id>/toggle", methods=["POST"])
@login_required(role="student")
@atomic
def toggle_homework(item_id):
    store, sid = get_store(), _sid()
    items = data.load_homework(store, sid)
    try:
        homework_mod.toggle_status(items, item_id)
    except PortalError as e:
        return _fail(e, "portal.homework")
    data.save_homework(store, sid, items)
    return redirect(url_for("portal.homework"))


@bp.route("/homework/<item_id>/status", methods=["POST"])
@login_required(role="student")
@atomic
def set_homework_status(item_id):
    store, sid = get_store(), _sid()
    items = data.load_homework(store, sid)
    try:
        homework_mod.set_status(items, item_id, request.form.get("status"))
    except PortalError as e:
        return _fail(e, "portal.homework")
    data.save_homework(store, sid, items)
    return redirect(url_for("portal.homework"))


@bp.route("/homework/<item_id>/delete", methods=["POST"])
@login_required(role="student")
@atomic
def delete_homework(item_id):
    store, sid = get_store(), _sid()
    try:
        items = homework_mod.delete_homework(data.load_homework(store, sid), item_id)
    except PortalError as e:
        return _fail(e, "portal.homework")
    data.save_homework(store, sid, items)
    return redirect(url_for("portal.homework"))


# --------- Routes: grades ----------
def _render_grades(items, tab):
    return render_template(
        "grades.html",
        tab=tab,
        tabs=grades_mod.SEMESTER_TABS,
        items=grades_mod.filter_by_semester(items, tab),
        gpa=grades_mod.compute_gpa(grades_mod.filter_by_semester(items, tab)),
        band=grades_mod.grade_band,
        grade_types=grades_mod.GRADE_TYPES,
        semesters=grades_mod.SEMESTERS,
    )


@bp.route("/grades")
@login_required(role="student")
@atomic
def grades():
    tab = request.args.get("semester", grades_mod.SEMESTER_TABS[0])
    if tab not in grades_mod.SEMESTER_TABS:
        tab = grades_mod.SEMESTER_TABS[0]
    return _render_grades(data.load_grades(get_store(), _sid()), tab)


@bp.route("/grades", methods=["POST"])
@login_required(role="student")
@atomic
def add_grade():
    store, sid = get_store(), _sid()
    items = data.load_grades(store, sid)
    try:
        grades_mod.add_grade(items, request.form)
    except PortalError as e:
        return _fail(e, "portal.grades")
    data.save_grades(store, sid, items)
    return redirect(url_for("portal.grades"))


@bp.route("/grades/<grade_id>/delete", methods=["POST"])
@login_required(role="student")
@atomic
def delete_grade(grade_id):
    store, sid = get_store(), _sid()
    try:
        items = grades_mod.delete_grade(data.load_grades(store, sid), grade_id)
    except PortalError as e:
        return _fail(e, "portal.grades")
    data.save_grades(store, sid, items)
    flash("Grade deleted successfully", "success")
    return redirect(url_for("portal.grades"))


# --------- Routes: profile ----------
@bp.route("/profile", methods=["GET", "POST"])
@login_required(role="student")
@atomic
def profile():
    store, sid = get_store(), _sid()
    if request.method == "POST":
        try:
            rec = accounts.update_profile(store, sid, request.form)
        except PortalError as e:
            return _fail(e, "portal.profile")
        session["profile"] = accounts.public_profile(rec)
        flash("Profile saved", "success")
        return redirect(url_for("portal.profile"))
    return render_template("profile.html", record=accounts.get_user(store, sid))


@bp.route("/profile/photo", methods=["POST"])
@login_required(role="student")
@atomic
def upload_photo():
    upload = request.files.get("photo")
    if upload is None:
        flash("No photo selected", "danger")
        return redirect(url_for("portal.profile"))
    try:
        rec = accounts.set_photo(get_store(), _sid(), upload.read(), upload.mimetype)
    except PortalError as e:
        return _fail(e, "portal.profile")
    session["profile"] = accounts.public_profile(rec)
    return redirect(url_for("portal.profile"))


# --------- Routes: admin ----------
@bp.route("/admin")
@login_required(role="admin")
@atomic
def admin_dashboard():
    store = get_store()
    tab = "reports" if request.args.get("tab") == "reports" else "users"
    users = accounts.list_users(store)
    report = []
    if tab == "reports":
        now = _now()
        schedules = data.all_schedules(store, [u["studentId"] for u in users], now, _grace())
        report = schedule_mod.attendance_report(schedules, now.date())
    return render_template("admin.html", tab=tab, users=users, report=report)


@bp.route("/admin/users/new", methods=["GET", "POST"])
@login_required(role="admin")
@atomic
def admin_add_user():
    if request.method == "POST":
        try:
            accounts.create_user(get_store(), request.form)
        except PortalError as e:
            flash(str(e), "danger")
            return render_template("user_form.html", form=request.form, heading="Add User", creating=True), 400
        flash("User created successfully", "success")
        return redirect(url_for("portal.admin_dashboard"))
    return render_template("user_form.html", form={}, heading="Add User", creating=True)


@bp.route("/admin/users/<student_id>/edit", methods=["GET", "POST"])
@login_required(role="admin")
@atomic
def admin_edit_user(student_id):
    store = get_store()
    try:
        rec = accounts.get_user(store, student_id)
    except NotFoundError as e:
        return _fail(e, "portal.admin_dashboard")
    if request.method == "POST":
        try:
            accounts.update_user(store, student_id, request.form)
        except PortalError as e:
            flash(str(e), "danger")
            return render_template("user_form.html", form=request.form, heading="Edit User", creating=False), 400
        flash("User information updated successfully", "success")
        return redirect(url_for("portal.admin_dashboard"))
    return render_template("user_form.html", form=rec, heading="Edit User", creating=False)


@bp.route("/admin/users/<student_id>/delete", methods=["POST"])
@login_required(role="admin")
@atomic
def admin_delete_user(student_id):
    try:
        accounts.delete_user(get_store(), student_id)
    except PortalError as e:
        return _fail(e, "portal.admin_dashboard")
    flash("User deleted successfully", "success")
    return redirect(url_for("portal.admin_dashboard"))


@bp.route("/admin/users/<student_id>/grades", methods=["GET", "POST"])
@login_required(role="admin")
@atomic
def admin_manage_grades(student_id):
    store = get_store()
    try:
        student = accounts.get_user(store, student_id)
    except NotFoundError as e:
        return _fail(e, "portal.admin_dashboard")
    items = data.load_grades(store, student_id)
    if request.method == "POST":
        grade_id = request.form.get("grade_id")
        try:
            if grade_id:
                grades_mod.update_grade(items, grade_id, request.form)
            else:
                grades_mod.add_grade(items, request.form, require_all=False)
        except PortalError as e:
            return _fail(e, "portal.admin_manage_grades", student_id=student_id)
        data.save_grades(store, student_id, items)
        return redirect(url_for("portal.admin_manage_grades", student_id=student_id))
    edit_id = request.args.get("edit")
    editing = next((g for g in items if str(g["id"]) == edit_id), None) if edit_id else None
    return render_template(
        "manage_grades.html",
        student=student,
        items=items,
        editing=editing,
        gpa=grades_mod.compute_gpa(items),
        band=grades_mod.grade_band,
        grade_types=grades_mod.GRADE_TYPES,
        semesters=grades_mod.SEMESTERS,
    )


@bp.route("/admin/users/<student_id>/grades/<grade_id>/delete", methods=["POST"])
@login_required(role="admin")
@atomic
def admin_delete_grade(student_id, grade_id):
    store = get_store()
    try:
        accounts.get_user(store, student_id)
        items = grades_mod.delete_grade(data.load_grades(store, student_id), grade_id)
    except PortalError as e:
        return _fail(e, "portal.admin_manage_grades", student_id=student_id)
    data.save_grades(store, student_id, items)
    flash("Grade deleted successfully", "success")
    return redirect(url_for("portal.admin_manage_grades", student_id=student_id))


app = create_app()


def main():
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=False)


# Start server (bind to PORT when run directly)
if __name__ == "__main__":
    main()
