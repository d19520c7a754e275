"""Shared fixtures: fake collaborators and a Flask app backed by in-memory SQLite."""

import pytest

from app import create_app
from config import TestConfig
from extensions import db
from services.collaborators import DatastoreError
from services.submission_service import FormSubmissionService


class FakeDatastore:
    """Records every insert and hands out increasing ids."""

    def __init__(self, fail=False):
        self.fail = fail
        self.inserts = []

    def insert(self, table, record):
        if self.fail:
            raise DatastoreError("connection refused")
        self.inserts.append((table, dict(record)))
        return len(self.inserts)


class FakeUserProvider:
    def __init__(self, user_id=0, account_name=""):
        self.user_id = user_id
        self.account_name = account_name

    def get_user_id(self):
        return self.user_id

    def get_account_name(self):
        return self.account_name


class FakeEmailValidator:
    """Accepts anything with exactly one '@' and a dot in the domain."""

    def is_valid(self, value):
        if not value or value.count("@") != 1:
            return False
        local, domain = value.split("@")
        return bool(local) and "." in domain


@pytest.fixture
def datastore():
    return FakeDatastore()


@pytest.fixture
def service(datastore):
    return FormSubmissionService(
        datastore=datastore,
        user_provider=FakeUserProvider(user_id=7, account_name="bob"),
        email_validator=FakeEmailValidator(),
    )


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
