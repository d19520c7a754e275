"""Unit tests for FormSubmissionService.

Tests cover:
- Field layout returned by describe_fields
- Title length and email format rules
- Fail-closed submit (no insert on validation errors)
- Record construction and datastore delegation
"""

import pytest

from services.collaborators import DatastoreError
from services.form_fields import FieldKind
from services.submission_service import (
    DEFAULT_COLOR,
    FormSubmissionService,
    Identity,
    SubmissionRecord,
    ValidationError,
)
from tests.conftest import FakeDatastore, FakeEmailValidator, FakeUserProvider


VALID_INPUT = {
    "title": "Valid Title",
    "user_email": "a@b.com",
    "color": "3",
    "username": "bob",
}
IDENTITY = Identity(user_id=7, account_name="bob")


class TestDescribeFields:
    """Test the static field layout."""

    def test_field_order(self, service):
        names = [f.name for f in service.describe_fields()]
        assert names == [
            "title", "color", "user_email",
            "first_name", "last_name",
            "access_data_email", "password",
            "username", "comment", "submit",
        ]

    def test_color_select_has_six_options_defaulting_to_blue(self, service):
        color = {f.name: f for f in service.describe_fields()}["color"]
        assert color.kind is FieldKind.SELECT
        assert list(color.options) == [0, 1, 2, 3, 4, 5]
        assert color.default_value == 2

    def test_username_defaults_to_current_account_name(self, service):
        username = {f.name: f for f in service.describe_fields()}["username"]
        assert username.default_value == "bob"

    def test_anonymous_user_gets_empty_username_default(self, datastore):
        sv = FormSubmissionService(datastore, FakeUserProvider(), FakeEmailValidator())
        username = {f.name: f for f in sv.describe_fields()}["username"]
        assert username.default_value == ""

    def test_grouped_fields(self, service):
        fields = service.describe_fields()
        groups = {f.name: f.group for f in fields if f.group}
        assert groups == {
            "first_name": "personal_data",
            "last_name": "personal_data",
            "access_data_email": "access_data",
            "password": "access_data",
        }
        assert [g.name for g in service.describe_groups()] == ["personal_data", "access_data"]

    def test_kinds(self, service):
        kinds = {f.name: f.kind for f in service.describe_fields()}
        assert kinds["password"] is FieldKind.PASSWORD_CONFIRM
        assert kinds["comment"] is FieldKind.STATIC_LABEL
        assert kinds["submit"] is FieldKind.SUBMIT
        assert kinds["user_email"] is FieldKind.EMAIL


class TestValidate:
    """Test the two validation rules."""

    def test_valid_input_has_no_errors(self, service):
        assert service.validate(VALID_INPUT) == []

    @pytest.mark.parametrize("title", ["", "a", "Hi", "abcd"])
    def test_short_title(self, service, title):
        errors = service.validate({**VALID_INPUT, "title": title})
        assert [e.field for e in errors] == ["title"]

    def test_title_of_exactly_five_characters_passes(self, service):
        assert service.validate({**VALID_INPUT, "title": "abcde"}) == []

    def test_title_length_counts_characters_not_bytes(self, service):
        # 3文字（UTF-8 では9バイト）
        errors = service.validate({**VALID_INPUT, "title": "日本語"})
        assert [e.field for e in errors] == ["title"]
        assert service.validate({**VALID_INPUT, "title": "日本語です"}) == []

    def test_invalid_email_message_contains_value(self, service):
        errors = service.validate({**VALID_INPUT, "user_email": "not-an-email"})
        assert len(errors) == 1
        assert errors[0].field == "user_email"
        assert "not-an-email" in errors[0].message

    def test_all_rules_run(self, service):
        errors = service.validate({"title": "Hi", "user_email": "nope"})
        assert {e.field for e in errors} == {"title", "user_email"}

    def test_missing_fields_are_treated_as_empty(self, service):
        errors = service.validate({})
        assert {e.field for e in errors} == {"title", "user_email"}

    def test_short_title_reported_even_when_email_invalid(self, service):
        errors = service.validate({**VALID_INPUT, "title": "x", "user_email": "bad"})
        assert ValidationError("title", errors[0].message) in errors

    def test_validate_is_idempotent(self, service):
        data = {"title": "Hi", "user_email": "not-an-email"}
        assert service.validate(data) == service.validate(data)

    def test_validate_does_not_touch_datastore(self, service, datastore):
        service.validate(VALID_INPUT)
        assert datastore.inserts == []


class TestSubmit:
    """Test validate-then-persist."""

    def test_short_title_is_not_persisted(self, service, datastore):
        data = {"title": "Hi", "user_email": "a@b.com", "color": "2", "username": "bob"}
        result = service.submit(data, IDENTITY, "10.0.0.1", 1700000000)

        assert result.ok is False
        assert result.record is None
        assert [e.field for e in result.errors] == ["title"]
        assert datastore.inserts == []

    def test_invalid_email_is_not_persisted(self, service, datastore):
        data = {"title": "Valid Title", "user_email": "not-an-email", "color": "1", "username": "bob"}
        result = service.submit(data, IDENTITY, "10.0.0.1", 1700000000)

        assert result.ok is False
        assert len(result.errors) == 1
        assert result.errors[0].field == "user_email"
        assert "not-an-email" in result.errors[0].message
        assert datastore.inserts == []

    def test_valid_submission_is_persisted_once(self, service, datastore):
        result = service.submit(VALID_INPUT, IDENTITY, "10.0.0.1", 1700000000)

        assert result.ok is True
        assert result.record == SubmissionRecord(
            id=1,
            title="Valid Title",
            color=3,
            username="bob",
            email="a@b.com",
            submitting_user_id=7,
            client_ip="10.0.0.1",
            submitted_at=1700000000,
        )
        assert datastore.inserts == [(
            "submissions",
            {
                "title": "Valid Title",
                "color": 3,
                "username": "bob",
                "email": "a@b.com",
                "uid": 7,
                "ip": "10.0.0.1",
                "timestamp": 1700000000,
            },
        )]

    @pytest.mark.parametrize("data", [
        VALID_INPUT,
        {"title": "Hi", "user_email": "a@b.com"},
        {"title": "Valid Title", "user_email": "bad"},
        {},
    ])
    def test_insert_happens_iff_validate_is_empty(self, service, datastore, data):
        errors = service.validate(data)
        service.submit(data, IDENTITY, "10.0.0.1", 1700000000)
        assert len(datastore.inserts) == (0 if errors else 1)

    def test_missing_color_defaults_to_two(self, service, datastore):
        data = {k: v for k, v in VALID_INPUT.items() if k != "color"}
        result = service.submit(data, IDENTITY, "10.0.0.1", 1700000000)

        assert result.record.color == DEFAULT_COLOR == 2
        assert datastore.inserts[0][1]["color"] == 2

    @pytest.mark.parametrize("color", ["", "abc", "9", None])
    def test_unusable_color_falls_back_to_default(self, service, color):
        result = service.submit({**VALID_INPUT, "color": color}, IDENTITY, "10.0.0.1", 1700000000)
        assert result.record.color == 2

    def test_anonymous_user_is_stored_as_zero(self, service, datastore):
        service.submit(VALID_INPUT, Identity(user_id=0), "10.0.0.1", 1700000000)
        assert datastore.inserts[0][1]["uid"] == 0

    def test_client_ip_is_truncated(self, service, datastore):
        service.submit(VALID_INPUT, IDENTITY, "f" * 200, 1700000000)
        assert len(datastore.inserts[0][1]["ip"]) == 128

    def test_datastore_error_propagates(self):
        sv = FormSubmissionService(
            FakeDatastore(fail=True), FakeUserProvider(7, "bob"), FakeEmailValidator())
        with pytest.raises(DatastoreError):
            sv.submit(VALID_INPUT, IDENTITY, "10.0.0.1", 1700000000)

    def test_each_submission_gets_new_id(self, service):
        first = service.submit(VALID_INPUT, IDENTITY, "10.0.0.1", 1700000000)
        second = service.submit(VALID_INPUT, IDENTITY, "10.0.0.1", 1700000001)
        assert second.record.id > first.record.id
