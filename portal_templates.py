"""Jinja templates for every portal screen, served through a DictLoader."""

BASE = """<!doctype html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{% block title %}EARIST Student Portal{% endblock %}</title>
<style>
:root{--bg:#071428;--card:#0b1220;--accent:#06b6d4;--muted:#94a3b8}
*{box-sizing:border-box;font-family:Inter,system-ui,Arial}
body{margin:0;background:linear-gradient(180deg,#071428 0%,#0b1220 80%);color:#e6eef6;padding:24px}
.app{max-width:900px;margin:0 auto}
.header{display:flex;align-items:center;gap:16px;background:rgba(255,255,255,0.02);padding:16px;border-radius:12px}
.logo{width:56px;height:56px;border-radius:10px;background:linear-gradient(135deg,var(--accent),#7c3aed);display:flex;align-items:center;justify-content:center;font-weight:700}
.title h1{margin:0;font-size:18px}
.title p{margin:4px 0 0;color:var(--muted);font-size:13px}
.nav{display:flex;gap:8px;flex-wrap:wrap;margin-top:12px}
.card{background:rgba(255,255,255,0.02);padding:14px;border-radius:12px;box-shadow:0 8px 28px rgba(2,6,23,0.6);margin-top:12px}
.btn{background:transparent;border:1px solid rgba(255,255,255,0.06);padding:8px 12px;border-radius:8px;color:inherit;cursor:pointer;text-decoration:none}
.btn.primary{background:linear-gradient(90deg,var(--accent),#7c3aed);color:#041020;border:0}
.btn.active{border-color:var(--accent)}
.form-row{display:flex;gap:8px;margin-bottom:8px;flex-wrap:wrap}
.input, select, textarea{background:transparent;border:1px solid rgba(255,255,255,0.06);padding:10px;border-radius:8px;color:inherit}
.hr{height:1px;background:rgba(255,255,255,0.03);margin:12px 0}
.list{list-style:none;padding:0;margin:0}
.list li{display:flex;justify-content:space-between;align-items:center;padding:8px 6px;border-radius:8px}
.small{font-size:13px;color:var(--muted)}
.flash{padding:10px;border-radius:8px;margin-top:12px;background:rgba(255,255,255,0.04)}
.flash.danger{border-left:4px solid #F44336}.flash.success{border-left:4px solid #4CAF50}
.flash.info,.flash.warning{border-left:4px solid #FFC107}
.present{color:#4CAF50}.absent{color:#F44336}
.excellent{color:#4CAF50}.good{color:#2196F3}.fair{color:#FFC107}.poor{color:#F44336}
.gpa{font-size:32px;font-weight:700}
.avatar{width:96px;height:96px;border-radius:48px;object-fit:cover}
.footer{margin-top:14px;color:var(--muted);text-align:center;font-size:13px}
</style>
</head>
<body>
<div class="app">
  <div class="header">
    <div class="logo">SP</div>
    <div class="title">
      <h1>EARIST Student Portal</h1>
      <p>{% block subtitle %}Student Portal{% endblock %}</p>
    </div>
    <div style="margin-left:auto" class="small">
      {% if profile %}Signed in: {{ profile.name }} ({{ profile.role }}){% else %}Not signed in{% endif %}
    </div>
  </div>
  {% if profile and profile.role == 'student' %}
  <div class="nav">
    <a class="btn" href="{{ url_for('portal.dashboard') }}">Dashboard</a>
    <a class="btn" href="{{ url_for('portal.schedule') }}">Schedule</a>
    <a class="btn" href="{{ url_for('portal.homework') }}">Homework</a>
    <a class="btn" href="{{ url_for('portal.grades') }}">Grades</a>
    <a class="btn" href="{{ url_for('portal.profile') }}">Profile</a>
    <a class="btn" href="{{ url_for('portal.logout') }}">Log Out</a>
  </div>
  {% elif profile %}
  <div class="nav">
    <a class="btn" href="{{ url_for('portal.admin_dashboard') }}">Admin</a>
    <a class="btn" href="{{ url_for('portal.logout') }}">Log Out</a>
  </div>
  {% endif %}
  {% for category, message in get_flashed_messages(with_categories=true) %}
    <div class="flash {{ category }}">{{ message }}</div>
  {% endfor %}
  {% block content %}{% endblock %}
  <div class="footer">EARIST Student Portal v1.0.0</div>
</div>
</body>
</html>
"""

HOME = """{% extends "base.html" %}
{% block content %}
<div class="card">
  <strong>Welcome to EARIST Student Portal</strong>
  <div class="hr"></div>
  <div class="small">Track your classes, attendance, homework and grades in one place.</div>
  <div class="hr"></div>
  <a class="btn primary" href="{{ url_for('portal.login') }}">Login</a>
  <a class="btn" href="{{ url_for('portal.register') }}">Register</a>
</div>
{% endblock %}
"""

LOGIN = """{% extends "base.html" %}
{% block subtitle %}Login{% endblock %}
{% block content %}
<div class="card">
  <form method="post" action="{{ url_for('portal.login') }}">
    <div class="form-row"><input name="username" class="input" placeholder="Enter your email or student ID" value="{{ username }}" required></div>
    <div class="form-row"><input name="password" type="password" class="input" placeholder="Enter your password" required></div>
    <div class="form-row"><button class="btn primary" type="submit">Login</button></div>
  </form>
  <div class="hr"></div>
  <a class="btn" href="{{ url_for('portal.register') }}">Create an account</a>
  <div class="small" style="margin-top:8px">For technical assistance, contact Administrator.</div>
</div>
{% endblock %}
"""

USER_FIELDS = """
    <div class="form-row">
      <input name="studentId" class="input" placeholder="Student ID" value="{{ form.studentId or '' }}">
      <input name="fullName" class="input" placeholder="Full Name" value="{{ form.fullName or '' }}">
    </div>
    <div class="form-row">
      <input name="section" class="input" placeholder="Section" value="{{ form.section or '' }}">
      <input name="program" class="input" placeholder="Program" value="{{ form.program or '' }}">
      <input name="yearLevel" class="input" placeholder="Year Level" value="{{ form.yearLevel or '' }}">
    </div>
    <div class="form-row">
      <input name="age" class="input" placeholder="Age" value="{{ form.age or '' }}">
      <input name="birthday" class="input" placeholder="Birthday (MM/DD/YYYY)" value="{{ form.birthday or '' }}">
    </div>
    <div class="form-row">
      <textarea name="address" class="input" placeholder="Address">{{ form.address or '' }}</textarea>
    </div>
    <div class="form-row">
      <input name="contactNumber" class="input" placeholder="Contact Number" value="{{ form.contactNumber or '' }}">
      <input name="email" class="input" placeholder="Email" value="{{ form.email or '' }}">
    </div>
"""

REGISTER = """{% extends "base.html" %}
{% block subtitle %}Create Account{% endblock %}
{% block content %}
<div class="card">
  <form method="post" action="{{ url_for('portal.register') }}">
""" + USER_FIELDS + """
    <div class="form-row"><input name="password" type="password" class="input" placeholder="Password"></div>
    <div class="form-row"><button class="btn primary" type="submit">Register</button></div>
  </form>
  <a class="btn" href="{{ url_for('portal.login') }}">Already have an account? Login</a>
</div>
{% endblock %}
"""

DASHBOARD = """{% extends "base.html" %}
{% block subtitle %}Dashboard{% endblock %}
{% block content %}
<div class="card">
  <strong>Hello, {{ summary.username }}</strong>
  <div class="small">{{ summary.weekday }}</div>
</div>
<div class="card">
  <strong>Today's Classes</strong>
  <div class="hr"></div>
  <ul class="list">
    {% for c in summary.todays_classes %}
      <li><div><strong>{{ c.name }}</strong><div class="small">{{ c.time }} &bull; {{ c.room }} &bull; {{ c.professor }}</div></div></li>
    {% else %}
      <li class="small">No classes today.</li>
    {% endfor %}
  </ul>
</div>
<div class="card">
  <strong>Upcoming Deadlines</strong>
  <div class="hr"></div>
  <ul class="list">
    {% for hw in summary.deadlines %}
      <li><div><strong>{{ hw.title }}</strong><div class="small">{{ hw.subject }} &bull; Due {{ hw.dueDate }}</div></div></li>
    {% else %}
      <li class="small">No pending homework.</li>
    {% endfor %}
  </ul>
</div>
<div class="card">
  <strong>Notes</strong>
  <div class="hr"></div>
  <form method="post" action="{{ url_for('portal.add_note') }}">
    <div class="form-row">
      <input name="content" class="input" placeholder="Write a note">
      <button class="btn primary" type="submit">Add Note</button>
    </div>
  </form>
  <ul class="list">
    {% for n in summary.notes %}
      <li>
        <div>{{ n.content }}<div class="small">{{ n.date }}</div></div>
        <form method="post" action="{{ url_for('portal.delete_note', note_id=n.id) }}"><button class="btn">Delete</button></form>
      </li>
    {% else %}
      <li class="small">No notes yet.</li>
    {% endfor %}
  </ul>
</div>
{% endblock %}
"""

SCHEDULE = """{% extends "base.html" %}
{% block subtitle %}Class Schedule{% endblock %}
{% block content %}
{% for day in days %}
<div class="card">
  <strong>{{ day }}</strong>
  <div class="hr"></div>
  <ul class="list">
    {% for c in schedule.get(day, []) %}
      {% set status = status_of(c) %}
      <li>
        <div>
          <strong>{{ c.name }}</strong> <span class="small">{{ c.time }}</span>
          <div class="small">{{ c.room }} &bull; {{ c.professor }}</div>
          {% if status == 'present' %}<div class="present">Present</div>{% endif %}
          {% if status == 'absent' %}<div class="absent">Absent</div>{% endif %}
        </div>
        <div>
          {% if status == 'unmarked' %}
          <form method="post" action="{{ url_for('portal.mark_present', day=day, index=loop.index0) }}" style="display:inline">
            <button class="btn primary">Mark Present</button>
          </form>
          {% endif %}
          <form method="post" action="{{ url_for('portal.delete_class', day=day, index=loop.index0) }}" style="display:inline">
            <button class="btn" onclick="return confirm('Delete class?');">Delete</button>
          </form>
        </div>
      </li>
    {% else %}
      <li class="small">No classes scheduled.</li>
    {% endfor %}
  </ul>
</div>
{% endfor %}
<div class="card">
  <strong>Add Class</strong>
  <div class="hr"></div>
  <form method="post" action="{{ url_for('portal.add_class') }}">
    <div class="form-row">
      <select name="day" class="input">
        {% for day in days %}<option value="{{ day }}">{{ day }}</option>{% endfor %}
      </select>
      <input name="name" class="input" placeholder="Enter class name">
      <input name="time" class="input" placeholder="Enter time (e.g., 10:30 AM)">
    </div>
    <div class="form-row">
      <input name="room" class="input" placeholder="Enter room number/name">
      <input name="professor" class="input" placeholder="Enter professor name">
      <button class="btn primary" type="submit">Add Class</button>
    </div>
  </form>
</div>
{% endblock %}
"""

HOMEWORK = """{% extends "base.html" %}
{% block subtitle %}Homework{% endblock %}
{% block content %}
<div class="nav">
  {% for t in tabs %}
    <a class="btn {% if t == tab %}active{% endif %}" href="{{ url_for('portal.homework', tab=t) }}">{{ t }}</a>
  {% endfor %}
</div>
<div class="card">
  <ul class="list">
    {% for hw in items %}
      <li>
        <div>
          <strong>{{ hw.title }}</strong> <span class="small">{{ hw.status }}</span>
          <div class="small">{{ hw.subject }} &bull; Due {{ hw.dueDate }} {% if hw.type %}&bull; {{ hw.type }}{% endif %}</div>
          {% if hw.description %}<div class="small">{{ hw.description }}</div>{% endif %}
        </div>
        <div>
          <form method="post" action="{{ url_for('portal.toggle_homework', item_id=hw.id) }}" style="display:inline">
            <button class="btn">{% if hw.status == 'Completed' %}Reopen{% else %}Complete{% endif %}</button>
          </form>
          {% if hw.status == 'Pending' %}
          <form method="post" action="{{ url_for('portal.set_homework_status', item_id=hw.id) }}" style="display:inline">
            <input type="hidden" name="status" value="In Progress">
            <button class="btn">Start</button>
          </form>
          {% endif %}
          <form method="post" action="{{ url_for('portal.delete_homework', item_id=hw.id) }}" style="display:inline">
            <button class="btn">Delete</button>
          </form>
        </div>
      </li>
    {% else %}
      <li class="small">No assignments.</li>
    {% endfor %}
  </ul>
</div>
<div class="card">
  <strong>Add Assignment</strong>
  <div class="hr"></div>
  <form method="post" action="{{ url_for('portal.add_homework') }}">
    <div class="form-row">
      <input name="title" class="input" placeholder="Title">
      <input name="subject" class="input" placeholder="Subject">
      <input name="dueDate" class="input" placeholder="Due date">
    </div>
    <div class="form-row">
      <input name="type" class="input" placeholder="Type (e.g., Essay)">
      <select name="status" class="input">
        {% for s in statuses %}<option value="{{ s }}">{{ s }}</option>{% endfor %}
      </select>
    </div>
    <div class="form-row"><textarea name="description" class="input" placeholder="Description"></textarea></div>
    <button class="btn primary" type="submit">Add</button>
  </form>
</div>
{% endblock %}
"""

GRADES = """{% extends "base.html" %}
{% block subtitle %}Grades{% endblock %}
{% block content %}
<div class="card">
  <div class="small">Semester GPA</div>
  <div class="gpa {{ band(gpa) }}">{{ "%.2f"|format(gpa) }}</div>
</div>
<div class="nav">
  {% for t in tabs %}
    <a class="btn {% if t == tab %}active{% endif %}" href="{{ url_for('portal.grades', semester=t) }}">{{ t }}</a>
  {% endfor %}
</div>
<div class="card">
  <ul class="list">
    {% for g in items %}
      <li>
        <div>
          <strong>{{ g.name }}</strong> <span class="small">{{ g.code }} &bull; {{ g.professor }} &bull; {{ g.type }}</span>
        </div>
        <div>
          <span class="{{ band(g.grade) if g.grade is number else '' }}">{{ g.grade }}</span>
          <form method="post" action="{{ url_for('portal.delete_grade', grade_id=g.id) }}" style="display:inline">
            <button class="btn" onclick="return confirm('Are you sure you want to delete this grade?');">Delete</button>
          </form>
        </div>
      </li>
    {% else %}
      <li class="small">No grades recorded.</li>
    {% endfor %}
  </ul>
</div>
<div class="card">
  <strong>Add Grade</strong>
  <div class="hr"></div>
  <form method="post" action="{{ url_for('portal.add_grade') }}">
    <div class="form-row">
      <input name="code" class="input" placeholder="Subject code">
      <input name="name" class="input" placeholder="Subject name">
      <input name="professor" class="input" placeholder="Professor">
    </div>
    <div class="form-row">
      <input name="grade" class="input" placeholder="Grade (0-100)">
      <select name="type" class="input">{% for t in grade_types %}<option>{{ t }}</option>{% endfor %}</select>
      <select name="semester" class="input">{% for k, v in semesters.items() %}<option value="{{ k }}">{{ v }}</option>{% endfor %}</select>
      <button class="btn primary" type="submit">Add</button>
    </div>
  </form>
</div>
{% endblock %}
"""

PROFILE = """{% extends "base.html" %}
{% block subtitle %}Profile &amp; Settings{% endblock %}
{% block content %}
<div class="card">
  {% if record.photo %}<img class="avatar" src="{{ record.photo }}" alt="photo">{% endif %}
  <div><strong>{{ record.fullName }}</strong></div>
  <div class="small">{{ record.studentId }}</div>
  <form method="post" action="{{ url_for('portal.upload_photo') }}" enctype="multipart/form-data">
    <div class="form-row">
      <input type="file" name="photo" accept="image/*" class="input">
      <button class="btn" type="submit">Change Photo</button>
    </div>
  </form>
</div>
<div class="card">
  <strong>Student Information</strong>
  <div class="hr"></div>
  <form method="post" action="{{ url_for('portal.profile') }}">
    <div class="form-row"><span class="small">Student Number: {{ record.studentId }}</span></div>
    <div class="form-row">
      <input name="fullName" class="input" placeholder="Full Name" value="{{ record.fullName or '' }}">
      <input name="section" class="input" placeholder="Section" value="{{ record.section or '' }}">
    </div>
    <div class="form-row">
      <input name="program" class="input" placeholder="Program" value="{{ record.program or '' }}">
      <input name="yearLevel" class="input" placeholder="Year Level" value="{{ record.yearLevel or '' }}">
      <input name="age" class="input" placeholder="Age" value="{{ record.age or '' }}">
    </div>
    <div class="form-row">
      <input name="birthday" class="input" placeholder="Birthday" value="{{ record.birthday or '' }}">
      <input name="contactNumber" class="input" placeholder="Contact Number" value="{{ record.contactNumber or '' }}">
      <input name="email" class="input" placeholder="Email Address" value="{{ record.email or '' }}">
    </div>
    <div class="form-row"><textarea name="address" class="input" placeholder="Address">{{ record.address or '' }}</textarea></div>
    <button class="btn primary" type="submit">Save Information</button>
  </form>
</div>
{% endblock %}
"""

ADMIN = """{% extends "base.html" %}
{% block subtitle %}Admin Dashboard{% endblock %}
{% block content %}
<div class="nav">
  <a class="btn {% if tab == 'users' %}active{% endif %}" href="{{ url_for('portal.admin_dashboard', tab='users') }}">Users</a>
  <a class="btn {% if tab == 'reports' %}active{% endif %}" href="{{ url_for('portal.admin_dashboard', tab='reports') }}">Reports</a>
  <a class="btn primary" href="{{ url_for('portal.admin_add_user') }}">Add User</a>
</div>
{% if tab == 'reports' %}
<div class="card">
  <strong>Attendance Report</strong>
  <div class="hr"></div>
  <ul class="list">
    {% for r in report %}
      <li>
        <div><strong>{{ r.className }}</strong> <span class="small">{{ r.studentId }} &bull; {{ r.professor }} &bull; {{ r.day }} {{ r.time }}</span>
          <div class="small">{{ r.date }}{% if r.isToday %} (today){% endif %}</div></div>
        <div class="{{ 'present' if r.present else 'absent' }}">{{ 'Present' if r.present else 'Absent' }}</div>
      </li>
    {% else %}
      <li class="small">No attendance records.</li>
    {% endfor %}
  </ul>
</div>
{% else %}
<div class="card">
  <strong>Students ({{ users|length }})</strong>
  <div class="hr"></div>
  <ul class="list">
    {% for u in users %}
      <li>
        <div><strong>{{ u.fullName }}</strong><div class="small">ID: {{ u.studentId }} &bull; {{ u.email }} &bull; {{ u.program }} {{ u.section }} {{ u.yearLevel }}</div></div>
        <div>
          <a class="btn" href="{{ url_for('portal.admin_edit_user', student_id=u.studentId) }}">Edit</a>
          <a class="btn" href="{{ url_for('portal.admin_manage_grades', student_id=u.studentId) }}">Grades</a>
          <form method="post" action="{{ url_for('portal.admin_delete_user', student_id=u.studentId) }}" style="display:inline">
            <button class="btn" onclick="return confirm('Are you sure you want to delete this student?');">Delete</button>
          </form>
        </div>
      </li>
    {% else %}
      <li class="small">No students yet.</li>
    {% endfor %}
  </ul>
</div>
{% endif %}
{% endblock %}
"""

USER_FORM = """{% extends "base.html" %}
{% block subtitle %}{{ heading }}{% endblock %}
{% block content %}
<div class="card">
  <strong>{{ heading }}</strong>
  <div class="hr"></div>
  <form method="post">
""" + USER_FIELDS + """
    {% if creating %}
    <div class="form-row">
      <input name="password" type="password" class="input" placeholder="Password">
      <input name="confirmPassword" type="password" class="input" placeholder="Confirm Password">
    </div>
    {% endif %}
    <button class="btn primary" type="submit">Save</button>
    <a class="btn" href="{{ url_for('portal.admin_dashboard') }}">Cancel</a>
  </form>
</div>
{% endblock %}
"""

MANAGE_GRADES = """{% extends "base.html" %}
{% block subtitle %}Manage Grades{% endblock %}
{% block content %}
<div class="card">
  <strong>{{ student.fullName }}</strong> <span class="small">{{ student.studentId }}</span>
  <div class="small">GPA: {{ "%.2f"|format(gpa) }}</div>
</div>
<div class="card">
  <ul class="list">
    {% for g in items %}
      <li>
        <div>
          <strong>{{ g.name }}</strong>
          <div class="small">{{ g.code }} &bull; {{ g.professor }}</div>
          <div class="small">{{ g.type }} &bull; {{ semesters.get(g.semester, g.semester) }}</div>
          <div class="{{ band(g.grade) if g.grade is number else '' }}">Grade: {{ g.grade }}</div>
        </div>
        <div>
          <a class="btn" href="{{ url_for('portal.admin_manage_grades', student_id=student.studentId, edit=g.id) }}">Edit</a>
          <form method="post" action="{{ url_for('portal.admin_delete_grade', student_id=student.studentId, grade_id=g.id) }}" style="display:inline">
            <button class="btn" onclick="return confirm('Are you sure you want to delete this grade?');">Delete</button>
          </form>
        </div>
      </li>
    {% else %}
      <li class="small">No grades recorded.</li>
    {% endfor %}
  </ul>
</div>
<div class="card">
  <strong>{% if editing %}Edit Grade{% else %}Add Grade{% endif %}</strong>
  <div class="hr"></div>
  <form method="post" action="{{ url_for('portal.admin_manage_grades', student_id=student.studentId) }}">
    {% if editing %}<input type="hidden" name="grade_id" value="{{ editing.id }}">{% endif %}
    <div class="form-row">
      <input name="code" class="input" placeholder="Subject code" value="{{ editing.code if editing else '' }}">
      <input name="name" class="input" placeholder="Subject name" value="{{ editing.name if editing else '' }}">
      <input name="professor" class="input" placeholder="Professor" value="{{ editing.professor if editing else '' }}">
    </div>
    <div class="form-row">
      <input name="grade" class="input" placeholder="Grade (0-100)" value="{{ editing.grade if editing else '' }}">
      <select name="type" class="input">
        {% for t in grade_types %}<option {% if editing and editing.type == t %}selected{% endif %}>{{ t }}</option>{% endfor %}
      </select>
      <select name="semester" class="input">
        {% for k, v in semesters.items() %}<option value="{{ k }}" {% if editing and editing.semester == k %}selected{% endif %}>{{ v }}</option>{% endfor %}
      </select>
      <button class="btn primary" type="submit">Save</button>
    </div>
  </form>
</div>
{% endblock %}
"""

ERROR = """{% extends "base.html" %}
{% block subtitle %}Something went wrong{% endblock %}
{% block content %}
<div class="card">
  <a class="btn" href="{{ url_for('portal.index') }}">Back</a>
</div>
{% endblock %}
"""

TEMPLATES = {
    "base.html": BASE,
    "home.html": HOME,
    "login.html": LOGIN,
    "register.html": REGISTER,
    "dashboard.html": DASHBOARD,
    "schedule.html": SCHEDULE,
    "homework.html": HOMEWORK,
    "grades.html": GRADES,
    "profile.html": PROFILE,
    "admin.html": ADMIN,
    "user_form.html": USER_FORM,
    "manage_grades.html": MANAGE_GRADES,
    "error.html": ERROR,
}
