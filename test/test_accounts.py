import pytest

import portal_accounts as accounts
from portal_errors import AuthError, NotFoundError, ValidationError
from portal_store import KeyValueStore

from conftest import STUDENT_FORM


@pytest.fixture
def kv():
    store = KeyValueStore()
    accounts.register(store, STUDENT_FORM)
    return store


def _login(store, who, password="secret"):
    return accounts.authenticate(store, who, password, "Admin123", "CCS2025")


class TestPasswords:
    def test_hash_round_trip(self):
        stored = accounts.salt_and_hash("pw")
        assert "$" in stored
        assert accounts.verify_hash("pw", stored)
        assert not accounts.verify_hash("other", stored)

    def test_malformed_hash(self):
        assert not accounts.verify_hash("pw", "nodollar")


class TestRegister:
    def test_stores_record_under_student_id(self, kv):
        rec = kv.get_json("2023-0001")
        assert rec["fullName"] == "Juan Dela Cruz"
        assert rec["course"] == "BS Information Technology"
        assert rec["year"] == "3rd Year"
        assert "password" not in rec
        assert accounts.verify_hash("secret", rec["passwordHash"])

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            accounts.register(KeyValueStore(), {"studentId": "x", "fullName": ""})

    def test_duplicate_student_id(self, kv):
        with pytest.raises(ValidationError, match="Student ID already exists"):
            accounts.register(kv, dict(STUDENT_FORM, email="other@example.com"))

    def test_duplicate_email(self, kv):
        with pytest.raises(ValidationError, match="Email already exists"):
            accounts.register(kv, dict(STUDENT_FORM, studentId="2023-0002"))

    def test_slash_in_student_id_rejected(self):
        with pytest.raises(ValidationError, match="cannot contain"):
            accounts.register(KeyValueStore(), dict(STUDENT_FORM, studentId="2023/0001"))

    def test_rename_to_slash_rejected(self, kv):
        with pytest.raises(ValidationError, match="cannot contain"):
            accounts.update_user(kv, "2023-0001", {"fullName": "Juan", "email": "juan@example.com", "studentId": "a/b"})
        assert kv.get_json("2023-0001")["studentId"] == "2023-0001"

    def test_reserved_key_rejected(self):
        with pytest.raises(ValidationError):
            accounts.register(KeyValueStore(), dict(STUDENT_FORM, studentId="grades_1"))


class TestAuthenticate:
    def test_admin(self, kv):
        profile = _login(kv, "Admin123", "CCS2025")
        assert profile["role"] == "admin"
        assert profile["studentId"] == "ADMIN-2025"

    def test_by_student_id_and_email(self, kv):
        assert _login(kv, "2023-0001")["name"] == "Juan Dela Cruz"
        assert _login(kv, "JUAN@example.com")["studentId"] == "2023-0001"

    def test_profile_has_no_password(self, kv):
        assert "passwordHash" not in _login(kv, "2023-0001")

    def test_unknown_user(self, kv):
        with pytest.raises(AuthError, match="User not found"):
            _login(kv, "nobody")

    def test_wrong_password(self, kv):
        with pytest.raises(AuthError, match="Invalid password"):
            _login(kv, "2023-0001", "nope")


class TestAdminUsers:
    def test_list_skips_other_keys(self, kv):
        kv.set_json("grades_2023-0001", [])
        kv.set_item("random", "text")
        assert [u["studentId"] for u in accounts.list_users(kv)] == ["2023-0001"]

    def test_create_requires_matching_passwords(self, kv):
        form = dict(STUDENT_FORM, studentId="2", email="b@example.com", confirmPassword="other")
        with pytest.raises(ValidationError, match="Passwords do not match"):
            accounts.create_user(kv, form)

    def test_create_requires_email(self, kv):
        form = dict(STUDENT_FORM, studentId="2", email="", confirmPassword="secret")
        with pytest.raises(ValidationError, match="Email is required"):
            accounts.create_user(kv, form)

    def test_update_keeps_password(self, kv):
        accounts.update_user(kv, "2023-0001", {"fullName": "Juan D.", "email": "juan@example.com", "studentId": "2023-0001"})
        rec = kv.get_json("2023-0001")
        assert rec["fullName"] == "Juan D."
        assert rec["section"] == "BSIT 3A"
        assert accounts.verify_hash("secret", rec["passwordHash"])

    def test_update_renames_student_and_moves_data(self, kv):
        kv.set_json("grades_2023-0001", [{"id": "1"}])
        accounts.update_user(kv, "2023-0001", {"fullName": "Juan", "email": "juan@example.com", "studentId": "2023-0009"})
        assert kv.get_item("2023-0001") is None
        assert kv.get_json("2023-0009")["studentId"] == "2023-0009"
        assert kv.get_json("grades_2023-0009") == [{"id": "1"}]
        assert kv.get_item("grades_2023-0001") is None

    def test_update_requires_fields(self, kv):
        with pytest.raises(ValidationError):
            accounts.update_user(kv, "2023-0001", {"fullName": "", "email": "a@b", "studentId": "2023-0001"})

    def test_delete_removes_student_data(self, kv):
        kv.set_json("notes_2023-0001", [])
        accounts.delete_user(kv, "2023-0001")
        assert kv.get_all_keys() == []
        with pytest.raises(NotFoundError):
            accounts.delete_user(kv, "2023-0001")


class TestProfile:
    def test_update_profile_mirrors_course_and_year(self, kv):
        rec = accounts.update_profile(kv, "2023-0001", {"program": "BSCS", "yearLevel": "4th Year"})
        assert rec["course"] == "BSCS"
        assert kv.get_json("2023-0001")["year"] == "4th Year"

    def test_photo(self, kv):
        rec = accounts.set_photo(kv, "2023-0001", b"\x89PNG", "image/png")
        assert rec["photo"].startswith("data:image/png;base64,")
        with pytest.raises(ValidationError):
            accounts.set_photo(kv, "2023-0001", b"x", "text/plain")

    def test_photo_empty_upload(self, kv):
        with pytest.raises(ValidationError, match="No photo selected"):
            accounts.set_photo(kv, "2023-0001", b"", "image/png")
        # browsers send an empty file field as octet-stream
        with pytest.raises(ValidationError, match="No photo selected"):
            accounts.set_photo(kv, "2023-0001", b"", "application/octet-stream")

    def test_photo_size_limit(self, kv):
        with pytest.raises(ValidationError, match="larger than 2 MB"):
            accounts.set_photo(kv, "2023-0001", b"x" * (2 * 1024 * 1024 + 1), "image/png")
        assert kv.get_json("2023-0001")["photo"] is None
