"""
Tests for user payload validation.
"""

from config.settings import DEFAULT_IMAGE_URL
from utils.validators import validate_user


def _payload(**overrides) -> dict:
    base = {"name": "Alice Smith", "email": "alice@mail.org", "password": "longenough1"}
    base.update(overrides)
    return base


def _paths(errors) -> list:
    return [e["path"] for e in errors]


class TestValidUser:
    def test_defaults_applied(self):
        value, errors = validate_user(_payload())
        assert errors == []
        assert value.image == DEFAULT_IMAGE_URL
        assert value.role == "user"
        assert value.socials == []
        assert value.personal_info == []

    def test_email_trimmed_and_lowercased(self):
        value, errors = validate_user(_payload(email="  A@X.COM "))
        assert errors == []
        assert value.email == "a@x.com"

    def test_empty_strings_allowed_in_nested_objects(self):
        value, errors = validate_user(
            _payload(
                socials=[{"linkedIn": "", "github": "https://github.com/alice"}],
                personalInfo=[{"location": "", "company": "Acme", "bio": ""}],
            )
        )
        assert errors == []
        record = value.to_record()
        assert record["socials"] == [{"linkedIn": "", "github": "https://github.com/alice"}]
        assert record["personal_info"] == [{"location": "", "company": "Acme", "bio": ""}]

    def test_record_never_contains_password(self):
        value, _ = validate_user(_payload())
        assert "password" not in value.to_record()

    def test_password_optional_on_update(self):
        body = _payload()
        del body["password"]
        value, errors = validate_user(body)
        assert errors == []
        assert value.password is None


class TestInvalidUser:
    def test_short_name(self):
        value, errors = validate_user(_payload(name="Bob"))
        assert value is None
        assert ["name"] in _paths(errors)
        assert all(e["message"] for e in errors)

    def test_bad_email(self):
        _, errors = validate_user(_payload(email="not-an-email"))
        assert ["email"] in _paths(errors)

    def test_missing_required_fields(self):
        _, errors = validate_user({})
        paths = _paths(errors)
        assert ["name"] in paths
        assert ["email"] in paths

    def test_password_required_on_create(self):
        body = _payload()
        del body["password"]
        _, errors = validate_user(body, creating=True)
        assert _paths(errors) == [["password"]]

    def test_password_too_short(self):
        _, errors = validate_user(_payload(password="short"), creating=True)
        assert ["password"] in _paths(errors)

    def test_password_too_long(self):
        _, errors = validate_user(_payload(password="x" * 101))
        assert ["password"] in _paths(errors)

    def test_nested_error_path(self):
        _, errors = validate_user(_payload(personalInfo=[{"bio": "b" * 601}]))
        assert _paths(errors) == [["personalInfo", 0, "bio"]]

    def test_unknown_key_rejected(self):
        _, errors = validate_user(_payload(nickname="al"))
        assert ["nickname"] in _paths(errors)

    def test_non_string_name_not_coerced(self):
        _, errors = validate_user(_payload(name=12345))
        assert ["name"] in _paths(errors)

    def test_non_object_payload(self):
        value, errors = validate_user(["not", "a", "record"])
        assert value is None
        assert len(errors) == 1
        assert errors[0]["path"] == []

    def test_null_in_nested_object_rejected(self):
        _, errors = validate_user(
            _payload(socials=[{"twitter": None}], personalInfo=[{"bio": None}])
        )
        assert _paths(errors) == [["socials", 0, "twitter"], ["personalInfo", 0, "bio"]]
